"""Configuration loading for the nethealth probe.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
- Build the DNS chain hop definitions from configured endpoints
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nethealth.core.models import ResolverHop, Service


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv. Variables are prefixed with
    NETHEALTH_, e.g. NETHEALTH_LOG_FILE.
    """

    model_config = SettingsConfigDict(
        env_prefix="NETHEALTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Status log configuration
    log_file: str = Field(
        default="",
        description="Status log path; empty prints status lines to stderr",
    )
    reduce_disk_wear: bool = Field(
        default=False,
        description="Skip repeated OK lines; failures are always written",
    )
    tag: str = Field(
        default="[INTERNET-HEALTH-CHECK]",
        description="Tag written after the timestamp on every status line",
    )
    max_log_bytes: int = Field(
        default=2 * 1024 * 1024,
        description="Rotate the status log when it grows beyond this size",
    )
    max_log_backups: int = Field(
        default=7,
        description="Number of compressed status log backups to keep",
    )

    # Connectivity probe configuration
    ping_target: str = Field(
        default="1.1.1.1",
        description="Host pinged to test raw connectivity",
    )
    ping_count: int = Field(
        default=4,
        description="Echo requests per connectivity probe",
    )
    ping_timeout_seconds: float = Field(
        default=5,
        description="Timeout per connectivity probe",
    )

    # DNS chain configuration
    dns_test_domain: str = Field(
        default="cloudflare.com",
        description="Domain resolved through each hop of the chain",
    )
    dns_timeout_seconds: float = Field(
        default=5,
        description="Timeout per DNS query",
    )
    local_resolver_host: str = Field(
        default="127.0.0.1",
        description="Local resolver (Pi-hole) address",
    )
    local_resolver_port: int = Field(
        default=53,
        description="Local resolver (Pi-hole) port",
    )
    forwarder_host: str = Field(
        default="127.0.0.1",
        description="Forwarding proxy (dnscrypt-proxy) address",
    )
    forwarder_port: int = Field(
        default=5053,
        description="Forwarding proxy (dnscrypt-proxy) port",
    )
    public_resolver_host: str = Field(
        default="1.1.1.1",
        description="Public resolver (Cloudflare) address",
    )
    public_resolver_port: int = Field(
        default=53,
        description="Public resolver (Cloudflare) port",
    )

    # Interface selection
    interfaces: str = Field(
        default="",
        description="Comma-separated interface allowlist in probe order; empty probes all active",
    )
    platform: Literal["auto", "linux", "macos"] = Field(
        default="auto",
        description="Which platform adapters to use",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for application diagnostics",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format for application diagnostics",
    )

    @field_validator("ping_count", "max_log_bytes", "max_log_backups")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Ensure counts and sizes are positive."""
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("ping_timeout_seconds", "dns_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure timeouts are positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("local_resolver_port", "forwarder_port", "public_resolver_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Ensure resolver ports are in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @property
    def log_to_file(self) -> bool:
        return bool(self.log_file.strip())

    @property
    def interface_allowlist(self) -> list[str]:
        return [name.strip() for name in self.interfaces.split(",") if name.strip()]

    def resolver_hops(self) -> tuple[ResolverHop, ...]:
        """The DNS chain in probe order: local, forwarder, public."""
        return (
            ResolverHop(
                service=Service.LOCAL_RESOLVER,
                name="Pi-hole",
                label="Pi-hole",
                host=self.local_resolver_host,
                port=self.local_resolver_port,
            ),
            ResolverHop(
                service=Service.FORWARDER,
                name="dnscrypt-proxy",
                label="dnscrypt-proxy",
                host=self.forwarder_host,
                port=self.forwarder_port,
            ),
            ResolverHop(
                service=Service.PUBLIC_RESOLVER,
                name="Cloudflare public",
                label="Cloudflare",
                host=self.public_resolver_host,
                port=self.public_resolver_port,
            ),
        )


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
