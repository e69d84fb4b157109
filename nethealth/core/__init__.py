"""Core domain logic for the nethealth probe.

This package contains zero external dependencies and represents
the pure decision logic of the application: chain diagnosis, log
history reconstruction, and write suppression. All probes, interface
discovery and file I/O are handled by the adapters package.
"""

from .models import (
    Chain,
    ChainDiagnosis,
    FailurePoint,
    HistoryStatus,
    InterfaceReport,
    LogEntry,
    LogFileState,
    NetworkInterface,
    ProbeOutcome,
    ResolverHop,
    RunResult,
    Service,
    SuppressionConfig,
)

__all__ = [
    "Chain",
    "ChainDiagnosis",
    "FailurePoint",
    "HistoryStatus",
    "InterfaceReport",
    "LogEntry",
    "LogFileState",
    "NetworkInterface",
    "ProbeOutcome",
    "ResolverHop",
    "RunResult",
    "Service",
    "SuppressionConfig",
]
