"""Domain models for the nethealth probe.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Service(Enum):
    """The three hops of the DNS resolution chain, in chain order."""

    LOCAL_RESOLVER = "local-resolver"
    FORWARDER = "forwarder"
    PUBLIC_RESOLVER = "public-resolver"


CHAIN_ORDER: tuple[Service, ...] = (
    Service.LOCAL_RESOLVER,
    Service.FORWARDER,
    Service.PUBLIC_RESOLVER,
)


class FailurePoint(Enum):
    """The hop a broken chain is attributed to."""

    NONE = "none"
    LOCAL_RESOLVER = "local-resolver"
    FORWARDER = "forwarder"
    PUBLIC_RESOLVER = "public-resolver"

    @classmethod
    def for_service(cls, service: Service) -> "FailurePoint":
        """Map a chain hop to the failure point that blames it."""
        return cls(service.value)


@dataclass(frozen=True)
class ResolverHop:
    """One configured hop of the DNS chain.

    ``name`` appears in per-hop test lines ("Test: Pass via <name>"),
    ``label`` in the chain rendering ("Pi-hole → dnscrypt-proxy × Cloudflare").
    """

    service: Service
    name: str
    label: str
    host: str
    port: int

    def __post_init__(self) -> None:
        """Validate hop invariants on creation."""
        if not self.host or not self.host.strip():
            raise ValueError("host must be a non-empty string")
        if self.port <= 0 or self.port > 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of probing a single hop. Never persisted."""

    service: Service
    ok: bool


@dataclass(frozen=True)
class Chain:
    """Ordered outcomes for the three hops: local, forwarder, public.

    Order is significant: diagnosis reads the chain left to right.
    """

    outcomes: tuple[ProbeOutcome, ...]

    def __post_init__(self) -> None:
        """Reject chains that are not in strict hop order."""
        services = tuple(outcome.service for outcome in self.outcomes)
        if services != CHAIN_ORDER:
            raise ValueError(
                f"chain must contain exactly {[s.value for s in CHAIN_ORDER]} in order, "
                f"got {[s.value for s in services]}"
            )

    @classmethod
    def from_flags(cls, local_ok: bool, forwarder_ok: bool, public_ok: bool) -> "Chain":
        """Build a chain from three booleans in hop order."""
        return cls(
            outcomes=(
                ProbeOutcome(Service.LOCAL_RESOLVER, local_ok),
                ProbeOutcome(Service.FORWARDER, forwarder_ok),
                ProbeOutcome(Service.PUBLIC_RESOLVER, public_ok),
            )
        )

    @property
    def all_ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)


@dataclass(frozen=True)
class ChainDiagnosis:
    """Where the chain broke, if it did."""

    all_ok: bool
    failure_point: FailurePoint

    def __post_init__(self) -> None:
        """A healthy chain has no failure point and vice versa."""
        if self.all_ok != (self.failure_point is FailurePoint.NONE):
            raise ValueError(
                f"all_ok={self.all_ok} is inconsistent with "
                f"failure_point={self.failure_point.value}"
            )


@dataclass(frozen=True)
class NetworkInterface:
    """An active interface with the IPv4 address probes are bound to."""

    name: str
    ipv4_address: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if not self.ipv4_address:
            raise ValueError(f"interface {self.name} has no IPv4 address")


class HistoryStatus(Enum):
    """Classification of a prior log entry.

    UNRECOGNIZED entries carry no known marker and must never
    suppress a write.
    """

    HEALTHY = "healthy"
    ERRORED = "errored"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class LogEntry:
    """A status log line, reconstructed by parsing.

    ``timestamp`` is None when the leading ``date time`` tokens did not
    parse; callers treat that as "force logging".
    """

    timestamp: datetime | None
    interface: str | None
    body: str
    raw: str


@dataclass(frozen=True)
class LogFileState:
    """Filesystem facts about the status log at decision time."""

    durable: bool
    exists: bool
    size_bytes: int = 0
    modified_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            raise ValueError(f"size_bytes must be non-negative, got {self.size_bytes}")


@dataclass(frozen=True)
class SuppressionConfig:
    """Write-reduction settings threaded into the Suppression Policy."""

    reduce_disk_wear: bool
    durable: bool


@dataclass(frozen=True)
class InterfaceReport:
    """What one orchestration pass did for one interface."""

    interface: NetworkInterface
    connectivity_ok: bool
    diagnosis: ChainDiagnosis | None  # None when connectivity was down
    lines_written: int
    healthy_suppressed: bool = False

    @property
    def healthy(self) -> bool:
        return (
            self.connectivity_ok
            and self.diagnosis is not None
            and self.diagnosis.all_ok
        )


@dataclass(frozen=True)
class RunResult:
    """Summary of a complete invocation."""

    reports: tuple[InterfaceReport, ...]
    rotated: bool
    timestamp: datetime
    write_failures: int = 0  # status log appends that raised OSError
