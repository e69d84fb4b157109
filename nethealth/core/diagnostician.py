"""Chain failure localization.

Converts three independent probe outcomes into a single "where did
it break" diagnosis, and renders the chain for the status log.
"""

from collections.abc import Sequence

from .models import Chain, ChainDiagnosis, FailurePoint, ResolverHop

WORKING = " → "
BROKEN = " × "

CAUSES: dict[FailurePoint, str] = {
    FailurePoint.LOCAL_RESOLVER: "Pi-hole forwarding",
    FailurePoint.FORWARDER: "dnscrypt-proxy DoH to Cloudflare",
    FailurePoint.PUBLIC_RESOLVER: "upstream / Cloudflare connectivity",
}


class ChainDiagnostician:
    """Identifies the first broken hop of the DNS chain.

    Pure decision logic, no side effects. A heuristic, not a root-cause
    detector: independent failures on several hops are attributed to a
    single point.
    """

    @staticmethod
    def diagnose(chain: Chain) -> ChainDiagnosis:
        """Locate the break in the chain.

        Scans local, forwarder, public in order. The blame goes to the
        earliest failing hop whose immediate successor still works,
        since a working downstream hop shows the break sits right
        before it. With no downstream success to anchor on, the
        earliest failing hop is blamed.
        """
        if chain.all_ok:
            return ChainDiagnosis(all_ok=True, failure_point=FailurePoint.NONE)

        outcomes = chain.outcomes
        for current, successor in zip(outcomes, outcomes[1:]):
            if not current.ok and successor.ok:
                return ChainDiagnosis(
                    all_ok=False,
                    failure_point=FailurePoint.for_service(current.service),
                )

        first_failure = next(outcome for outcome in outcomes if not outcome.ok)
        return ChainDiagnosis(
            all_ok=False,
            failure_point=FailurePoint.for_service(first_failure.service),
        )

    @staticmethod
    def cause(failure_point: FailurePoint) -> str:
        """Probable cause text for a failure point."""
        if failure_point is FailurePoint.NONE:
            raise ValueError("a healthy chain has no cause")
        return CAUSES[failure_point]

    @staticmethod
    def render_chain(hops: Sequence[ResolverHop], failure_point: FailurePoint) -> str:
        """Render the chain with ``×`` at the break.

        The broken separator follows the failure point, or precedes it
        when the failure point is the last hop:

        'Pi-hole × dnscrypt-proxy → Cloudflare'   (local resolver)
        'Pi-hole → dnscrypt-proxy × Cloudflare'   (forwarder or public)
        """
        if failure_point is FailurePoint.NONE:
            return WORKING.join(hop.label for hop in hops)

        index = next(
            (
                i
                for i, hop in enumerate(hops)
                if FailurePoint.for_service(hop.service) is failure_point
            ),
            None,
        )
        if index is None:
            raise ValueError(f"no hop matches failure point {failure_point.value}")

        broken_separator = min(index, len(hops) - 2)
        rendered = hops[0].label
        for i, hop in enumerate(hops[1:]):
            rendered += (BROKEN if i == broken_separator else WORKING) + hop.label
        return rendered
