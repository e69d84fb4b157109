"""Composition root for the nethealth probe.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the scheduler.

Module Structure:
- Command-line parsing and configuration loading
- Platform adapter selection
- Core service initialization
- A single health-check pass, then exit
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from nethealth.adapters.connectivity.ping import LinuxPingProbe, MacOSPingProbe
from nethealth.adapters.dnsprobe.dnspython import DnspythonDnsProbe
from nethealth.adapters.interfaces.linux import IpCommandInterfaceEnumerator
from nethealth.adapters.interfaces.macos import IfconfigInterfaceEnumerator
from nethealth.adapters.status_log.file import FileStatusLog
from nethealth.adapters.status_log.rotation import LogRotator
from nethealth.adapters.status_log.stderr import StderrStatusLog
from nethealth.config import Settings, load_settings
from nethealth.core.diagnostician import ChainDiagnostician
from nethealth.core.health_check import HealthCheckService
from nethealth.core.models import RunResult
from nethealth.core.ports import (
    ConnectivityProbePort,
    InterfaceEnumeratorPort,
    StatusLogPort,
)
from nethealth.core.suppression import SuppressionPolicy

EPILOG = """
Examples:
  # Print status lines to stderr (default)
  nethealth

  # Write status lines to a log file
  nethealth --log-file logs/internet_health.log

  # Reduce disk wear on an SD card (with file logging)
  nethealth --log-file logs/internet_health.log --reduce-disk-wear
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="nethealth",
        description="Monitor internet connectivity and DNS chain health per interface.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Write status lines to FILE instead of stderr",
    )
    parser.add_argument(
        "--reduce-disk-wear",
        action="store_true",
        default=None,
        help=(
            "Reduce log writes: skip OK lines when the previous run was OK "
            "and the log was written within 24h (failures are always logged)"
        ),
    )
    parser.add_argument(
        "--platform",
        choices=["auto", "linux", "macos"],
        help="Override platform adapter selection",
    )
    parser.add_argument(
        "--env-file",
        metavar="FILE",
        help="Load settings from FILE instead of ./.env",
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Layer explicit command-line flags over environment settings."""
    update: dict[str, object] = {}
    if args.log_file:
        update["log_file"] = args.log_file
    if args.reduce_disk_wear:
        update["reduce_disk_wear"] = True
    if args.platform:
        update["platform"] = args.platform
    return settings.model_copy(update=update) if update else settings


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Diagnostics go to stderr; the status log is written separately
    through StatusLogPort.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.WARNING)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def resolve_platform(platform: str) -> str:
    """Map 'auto' to the running platform."""
    if platform != "auto":
        return platform
    return "macos" if sys.platform == "darwin" else "linux"


def build_service(settings: Settings) -> HealthCheckService:
    """Instantiate adapters and wire the health-check service."""
    logger = logging.getLogger(__name__)

    platform = resolve_platform(settings.platform)
    connectivity: ConnectivityProbePort
    interfaces: InterfaceEnumeratorPort
    if platform == "macos":
        connectivity = MacOSPingProbe()
        interfaces = IfconfigInterfaceEnumerator()
    else:
        connectivity = LinuxPingProbe()
        interfaces = IpCommandInterfaceEnumerator()
    logger.info(f"Platform adapters: {platform}")

    status_log: StatusLogPort
    if settings.log_to_file:
        status_log = FileStatusLog(
            path=settings.log_file,
            rotator=LogRotator(
                max_bytes=settings.max_log_bytes,
                max_backups=settings.max_log_backups,
            ),
            tag=settings.tag,
        )
        logger.info(f"Status log: {settings.log_file}")
    else:
        status_log = StderrStatusLog(tag=settings.tag)
        logger.info("Status log: stderr")

    return HealthCheckService(
        connectivity=connectivity,
        dns=DnspythonDnsProbe(timeout_seconds=settings.dns_timeout_seconds),
        interfaces=interfaces,
        status_log=status_log,
        diagnostician=ChainDiagnostician(),
        suppression=SuppressionPolicy(),
        hops=settings.resolver_hops(),
        reduce_disk_wear=settings.reduce_disk_wear,
        ping_target=settings.ping_target,
        ping_count=settings.ping_count,
        ping_timeout_seconds=settings.ping_timeout_seconds,
        dns_test_domain=settings.dns_test_domain,
        interface_allowlist=settings.interface_allowlist or None,
    )


def run(argv: list[str] | None = None) -> RunResult:
    """Parse arguments, load settings, and execute one health-check pass.

    Raises:
        ValidationError: If settings are invalid.
    """
    args = build_parser().parse_args(argv)
    settings = apply_overrides(load_settings(args.env_file), args)
    configure_logging(settings.log_level, settings.log_format)

    service = build_service(settings)
    result = service.run()

    logger = logging.getLogger(__name__)
    logger.info(
        f"Checked {len(result.reports)} interface(s), "
        f"{sum(1 for r in result.reports if r.healthy)} healthy"
    )
    if not result.reports:
        logger.warning("No active interfaces found")
    return result


def main(argv: list[str] | None = None) -> None:
    """Application entry point.

    Exit codes:
        0: Pass completed (probe failures are data, not faults)
        1: Invalid configuration or unexpected fatal error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        run(argv)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
