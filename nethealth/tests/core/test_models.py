"""Unit tests for domain model invariants."""

import pytest

from nethealth.core.models import (
    Chain,
    ChainDiagnosis,
    FailurePoint,
    InterfaceReport,
    NetworkInterface,
    ProbeOutcome,
    ResolverHop,
    Service,
)


class TestChain:
    """Strict hop ordering."""

    def test_from_flags(self) -> None:
        chain = Chain.from_flags(True, False, True)
        assert [o.ok for o in chain.outcomes] == [True, False, True]
        assert chain.all_ok is False

    def test_rejects_reordered_hops(self) -> None:
        with pytest.raises(ValueError):
            Chain(
                outcomes=(
                    ProbeOutcome(Service.FORWARDER, True),
                    ProbeOutcome(Service.LOCAL_RESOLVER, True),
                    ProbeOutcome(Service.PUBLIC_RESOLVER, True),
                )
            )

    def test_rejects_missing_hop(self) -> None:
        with pytest.raises(ValueError):
            Chain(outcomes=(ProbeOutcome(Service.LOCAL_RESOLVER, True),))


class TestResolverHop:
    """Endpoint validation."""

    def test_endpoint(self) -> None:
        hop = ResolverHop(Service.FORWARDER, "dnscrypt-proxy", "dnscrypt-proxy", "127.0.0.1", 5053)
        assert hop.endpoint == "127.0.0.1:5053"

    @pytest.mark.parametrize("host, port", [("", 53), ("  ", 53), ("127.0.0.1", 0), ("127.0.0.1", 65536)])
    def test_rejects_invalid_endpoint(self, host: str, port: int) -> None:
        with pytest.raises(ValueError):
            ResolverHop(Service.LOCAL_RESOLVER, "Pi-hole", "Pi-hole", host, port)


class TestChainDiagnosis:
    """Consistency between all_ok and the failure point."""

    def test_healthy_with_failure_point_rejected(self) -> None:
        with pytest.raises(ValueError):
            ChainDiagnosis(all_ok=True, failure_point=FailurePoint.FORWARDER)

    def test_broken_without_failure_point_rejected(self) -> None:
        with pytest.raises(ValueError):
            ChainDiagnosis(all_ok=False, failure_point=FailurePoint.NONE)

    def test_failure_point_for_service(self) -> None:
        assert FailurePoint.for_service(Service.PUBLIC_RESOLVER) is FailurePoint.PUBLIC_RESOLVER


class TestInterfaceReport:
    """Derived health flag."""

    def test_connectivity_outage_is_unhealthy(self) -> None:
        report = InterfaceReport(
            interface=NetworkInterface("eth0", "192.168.1.100"),
            connectivity_ok=False,
            diagnosis=None,
            lines_written=2,
        )
        assert report.healthy is False

    def test_interface_requires_address(self) -> None:
        with pytest.raises(ValueError):
            NetworkInterface("eth0", "")
