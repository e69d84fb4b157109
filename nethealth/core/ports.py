"""Port interfaces for the nethealth probe.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Probe Ports** (core calls out to the network)
   - ConnectivityProbePort: Ping a target from an interface address
   - DnsProbePort: Resolve a domain against one server from an interface address

2. **Host Ports** (core calls out to the operating system)
   - InterfaceEnumeratorPort: Discover active interfaces and their IPv4 addresses
   - StatusLogPort: Append status lines, read history, report file state, rotate

The core never branches on platform; platform differences are
confined to the adapters.
"""

from abc import ABC, abstractmethod

from .models import LogFileState, NetworkInterface


class ConnectivityProbePort(ABC):
    """Port for raw connectivity checks (ping).

    Implementations must:
    - Bind the probe to the given interface address
    - Respect the timeout; a timed-out probe is a failed probe
    - Return False rather than raise for expected failures
      (unreachable target, missing tool, non-zero exit)
    """

    @abstractmethod
    def probe(
        self,
        interface_address: str,
        target: str,
        count: int,
        timeout_seconds: float,
    ) -> bool:
        """Check whether ``target`` answers from ``interface_address``.

        Args:
            interface_address: IPv4 address of the interface to send from.
            target: Host or IP to ping.
            count: Number of echo requests.
            timeout_seconds: Per-probe timeout.

        Returns:
            True if the target responded, False otherwise.
        """


class DnsProbePort(ABC):
    """Port for a single DNS query against one server.

    Implementations must:
    - Send the query from the given interface address
    - Treat timeouts and error responses as failure
    - Never retry; retries belong to the next scheduled invocation
    """

    @abstractmethod
    def probe(
        self,
        interface_address: str,
        server: str,
        port: int,
        domain: str,
    ) -> bool:
        """Check whether ``server:port`` resolves ``domain``.

        Args:
            interface_address: IPv4 address of the interface to query from.
            server: Resolver address.
            port: Resolver port.
            domain: Name to resolve.

        Returns:
            True if the server answered successfully, False otherwise.
        """


class InterfaceEnumeratorPort(ABC):
    """Port for discovering active network interfaces."""

    @abstractmethod
    def list_active_interfaces(self) -> list[NetworkInterface]:
        """Return the interfaces that are up and carry an IPv4 address.

        Loopback interfaces are excluded. The result is finite and is
        consumed once per invocation.

        Returns:
            Interfaces in the order the operating system reports them.
            Empty list if none are active or enumeration failed.
        """


class StatusLogPort(ABC):
    """Port for the status log, the only durable store.

    The log is append-only except for rotation, which truncates it
    to empty after archiving.
    """

    @property
    @abstractmethod
    def durable(self) -> bool:
        """True if lines persist (a file), False for console output."""

    @abstractmethod
    def append(self, body: str) -> None:
        """Write one timestamped, tagged line with the given body.

        Raises:
            OSError: If the underlying write fails.
        """

    @abstractmethod
    def state(self) -> LogFileState:
        """Report existence, size and modification time of the log.

        Never raises; an unreadable log is reported as not existing.
        """

    @abstractmethod
    def read_tail(self) -> list[str]:
        """Return the most recent lines of the log, oldest first.

        Never raises; a missing or unreadable log yields an empty list.
        """

    @abstractmethod
    def rotate_if_needed(self) -> bool:
        """Archive and truncate the log if it exceeds its size limit.

        Returns:
            True if a rotation happened.

        Raises:
            OSError: If archiving or truncation fails part way.
        """
