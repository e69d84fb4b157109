"""Ping connectivity adapters.

Implements ConnectivityProbePort by invoking the system ping binary.
Flags differ between platforms, so there is one adapter per platform:

Linux (iputils):  ping -I <source> -c <count> -W <timeout> <target>
macOS (BSD):      ping -S <source> -c <count> -t <timeout> <target>
"""

import logging
import math
import subprocess
from abc import abstractmethod

from nethealth.core.ports import ConnectivityProbePort

logger = logging.getLogger(__name__)

# Slack on top of the ping's own timeout before the process is killed
PROCESS_GRACE_SECONDS = 5


class PingProbe(ConnectivityProbePort):
    """Shared subprocess handling for the platform ping adapters."""

    def __init__(self, ping_binary: str = "ping"):
        """Initialize the ping probe.

        Args:
            ping_binary: Name or path of the ping executable.
        """
        self.ping_binary = ping_binary

    @abstractmethod
    def build_command(
        self,
        interface_address: str,
        target: str,
        count: int,
        timeout_seconds: float,
    ) -> list[str]:
        """Build the platform-specific ping command line."""

    def probe(
        self,
        interface_address: str,
        target: str,
        count: int,
        timeout_seconds: float,
    ) -> bool:
        """Ping ``target`` from ``interface_address``; exit status 0 is success."""
        command = self.build_command(interface_address, target, count, timeout_seconds)
        hard_timeout = count * timeout_seconds + PROCESS_GRACE_SECONDS

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=hard_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"ping to {target} from {interface_address} timed out after {hard_timeout}s")
            return False
        except FileNotFoundError:
            logger.error(f"ping binary not found: {self.ping_binary}")
            return False
        except OSError as e:
            logger.error(f"Failed to run ping: {e}")
            return False

        if result.returncode != 0:
            logger.debug(
                f"ping to {target} from {interface_address} exited with {result.returncode}: "
                f"{result.stderr.strip()}"
            )
            return False
        return True

    @staticmethod
    def _whole_seconds(timeout_seconds: float) -> str:
        return str(max(1, math.ceil(timeout_seconds)))


class LinuxPingProbe(PingProbe):
    """iputils ping: -I binds the source, -W is the per-reply wait."""

    def build_command(
        self,
        interface_address: str,
        target: str,
        count: int,
        timeout_seconds: float,
    ) -> list[str]:
        return [
            self.ping_binary,
            "-I", interface_address,
            "-c", str(count),
            "-W", self._whole_seconds(timeout_seconds),
            target,
        ]


class MacOSPingProbe(PingProbe):
    """BSD ping: -S binds the source, -t is the overall timeout."""

    def build_command(
        self,
        interface_address: str,
        target: str,
        count: int,
        timeout_seconds: float,
    ) -> list[str]:
        return [
            self.ping_binary,
            "-S", interface_address,
            "-c", str(count),
            "-t", self._whole_seconds(timeout_seconds),
            target,
        ]
