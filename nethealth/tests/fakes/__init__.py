"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeConnectivityProbePort: Canned ping results per interface address
- FakeDnsProbePort: Canned DNS results per resolver endpoint
- FakeInterfaceEnumeratorPort: Fixed interface list
- FakeStatusLogPort: In-memory status log with a controllable mtime
"""

from .interfaces import FakeInterfaceEnumeratorPort
from .probes import FakeConnectivityProbePort, FakeDnsProbePort
from .status_log import FakeStatusLogPort

__all__ = [
    "FakeConnectivityProbePort",
    "FakeDnsProbePort",
    "FakeInterfaceEnumeratorPort",
    "FakeStatusLogPort",
]
