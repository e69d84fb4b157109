"""Run orchestration for the nethealth probe.

This module implements one scheduled pass: rotate the status log if
needed, then for each active interface probe connectivity, probe the
DNS chain, diagnose, and write status lines.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from .diagnostician import ChainDiagnostician
from .history import HistoryReader
from .models import (
    CHAIN_ORDER,
    Chain,
    ChainDiagnosis,
    InterfaceReport,
    NetworkInterface,
    ProbeOutcome,
    ResolverHop,
    RunResult,
    SuppressionConfig,
)
from .ports import (
    ConnectivityProbePort,
    DnsProbePort,
    InterfaceEnumeratorPort,
    StatusLogPort,
)
from .suppression import SuppressionPolicy

logger = logging.getLogger(__name__)

ROTATION_MARKER = "LOG ROTATED"


class HealthCheckService:
    """Orchestrates a single health-check invocation.

    Uses ports but contains no adapter-specific logic. Interfaces are
    processed strictly one after another so log ordering stays
    deterministic for the next run's history lookup.
    """

    def __init__(
        self,
        connectivity: ConnectivityProbePort,
        dns: DnsProbePort,
        interfaces: InterfaceEnumeratorPort,
        status_log: StatusLogPort,
        diagnostician: ChainDiagnostician,
        suppression: SuppressionPolicy,
        hops: Sequence[ResolverHop],
        reduce_disk_wear: bool = False,
        ping_target: str = "1.1.1.1",
        ping_count: int = 4,
        ping_timeout_seconds: float = 5,
        dns_test_domain: str = "cloudflare.com",
        interface_allowlist: Sequence[str] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if tuple(hop.service for hop in hops) != CHAIN_ORDER:
            raise ValueError("hops must be local resolver, forwarder, public resolver in order")
        self.connectivity = connectivity
        self.dns = dns
        self.interfaces = interfaces
        self.status_log = status_log
        self.diagnostician = diagnostician
        self.suppression = suppression
        self.hops = tuple(hops)
        self.reduce_disk_wear = reduce_disk_wear
        self.ping_target = ping_target
        self.ping_count = ping_count
        self.ping_timeout_seconds = ping_timeout_seconds
        self.dns_test_domain = dns_test_domain
        self.interface_allowlist = (
            tuple(interface_allowlist) if interface_allowlist else None
        )
        self.clock = clock
        self._write_failures = 0

    def run(self) -> RunResult:
        """Execute one pass over every active interface.

        Never raises for probe or filesystem failures; those are data.
        """
        self._write_failures = 0
        rotated = self._rotate()

        reports = []
        for interface in self._select_interfaces():
            reports.append(self.check_interface(interface))

        return RunResult(
            reports=tuple(reports),
            rotated=rotated,
            timestamp=self.clock(),
            write_failures=self._write_failures,
        )

    def check_interface(self, interface: NetworkInterface) -> InterfaceReport:
        """Probe one interface and write its status block.

        Connectivity is always evaluated before the DNS chain, and the
        chain only when connectivity is up.
        """
        written = 0

        if not self._probe_connectivity(interface):
            written += self._write(
                interface,
                f"Test: Fail during Ping - {self.ping_target} did not respond",
            )
            written += self._write(interface, "DOWN - CONNECTIVITY OUTAGE detected")
            return InterfaceReport(
                interface=interface,
                connectivity_ok=False,
                diagnosis=None,
                lines_written=written,
            )

        chain = self.probe_chain(interface)
        diagnosis = self.diagnostician.diagnose(chain)

        if not diagnosis.all_ok:
            written += self._write_chain_failure(interface, chain, diagnosis)
            return InterfaceReport(
                interface=interface,
                connectivity_ok=True,
                diagnosis=diagnosis,
                lines_written=written,
            )

        if self._should_log_healthy(interface):
            written += self._write(interface, "OK")
            suppressed = False
        else:
            logger.debug(f"{interface.name}: healthy, OK line suppressed")
            suppressed = True

        return InterfaceReport(
            interface=interface,
            connectivity_ok=True,
            diagnosis=diagnosis,
            lines_written=written,
            healthy_suppressed=suppressed,
        )

    def probe_chain(self, interface: NetworkInterface) -> Chain:
        """Probe local, forwarder, public in that fixed order."""
        outcomes = []
        for hop in self.hops:
            try:
                ok = self.dns.probe(
                    interface.ipv4_address, hop.host, hop.port, self.dns_test_domain
                )
            except Exception as e:
                logger.error(
                    f"DNS probe via {hop.name} ({hop.endpoint}) on {interface.name} raised: {e}",
                    exc_info=True,
                )
                ok = False
            outcomes.append(ProbeOutcome(service=hop.service, ok=ok))
        return Chain(outcomes=tuple(outcomes))

    def _select_interfaces(self) -> list[NetworkInterface]:
        try:
            active = self.interfaces.list_active_interfaces()
        except Exception as e:
            logger.error(f"Failed to enumerate interfaces: {e}", exc_info=True)
            return []

        if self.interface_allowlist is None:
            return list(active)

        by_name = {interface.name: interface for interface in active}
        return [by_name[name] for name in self.interface_allowlist if name in by_name]

    def _probe_connectivity(self, interface: NetworkInterface) -> bool:
        try:
            return self.connectivity.probe(
                interface.ipv4_address,
                self.ping_target,
                self.ping_count,
                self.ping_timeout_seconds,
            )
        except Exception as e:
            logger.error(
                f"Connectivity probe on {interface.name} raised: {e}",
                exc_info=True,
            )
            return False

    def _write_chain_failure(
        self,
        interface: NetworkInterface,
        chain: Chain,
        diagnosis: ChainDiagnosis,
    ) -> int:
        """Write the DOWN-delimited block describing a broken chain."""
        written = self._write(interface, "DOWN")
        for hop, outcome in zip(self.hops, chain.outcomes):
            verdict = "Pass" if outcome.ok else "Fail"
            written += self._write(
                interface, f"Test: {verdict} via {hop.name} ({hop.endpoint})"
            )
        rendering = self.diagnostician.render_chain(self.hops, diagnosis.failure_point)
        written += self._write(interface, f"Issue: {rendering}")
        written += self._write(
            interface, f"Issue: {self.diagnostician.cause(diagnosis.failure_point)}"
        )
        written += self._write(interface, "Issue: DNS issue detected. Connectivity still OK")
        written += self._write(interface, "DOWN")
        return written

    def _should_log_healthy(self, interface: NetworkInterface) -> bool:
        config = SuppressionConfig(
            reduce_disk_wear=self.reduce_disk_wear,
            durable=self.status_log.durable,
        )
        # Cheap exits before touching the filesystem
        if not config.reduce_disk_wear or not config.durable:
            return True

        log_state = self.status_log.state()
        last_entry = None
        if log_state.exists:
            last_entry = HistoryReader.last_entry_for_interface(
                self.status_log.read_tail(), interface.name
            )
        return self.suppression.should_log_healthy(
            config, log_state, last_entry, self.clock()
        )

    def _rotate(self) -> bool:
        try:
            rotated = self.status_log.rotate_if_needed()
        except OSError as e:
            logger.error(f"Status log rotation failed: {e}", exc_info=True)
            return False

        if rotated:
            logger.info("Status log rotated")
            self._append(ROTATION_MARKER)
        return rotated

    def _write(self, interface: NetworkInterface, body: str) -> int:
        """Append '[interface] body'. Returns the number of lines written."""
        return self._append(f"[{interface.name}] {body}")

    def _append(self, body: str) -> int:
        try:
            self.status_log.append(body)
        except OSError as e:
            self._write_failures += 1
            logger.error(f"Failed to write status line {body!r}: {e}")
            return 0
        return 1
