"""Shared subprocess handling for interface enumerators."""

import logging
import subprocess
from abc import abstractmethod

from nethealth.core.models import NetworkInterface
from nethealth.core.ports import InterfaceEnumeratorPort

logger = logging.getLogger(__name__)

COMMAND_TIMEOUT_SECONDS = 10


class CommandInterfaceEnumerator(InterfaceEnumeratorPort):
    """Runs a listing command and parses its output.

    Subclasses supply the command and the parser. Any failure to run
    the command yields no interfaces rather than an exception.
    """

    command: list[str]

    @staticmethod
    @abstractmethod
    def parse_output(output: str) -> list[NetworkInterface]:
        """Extract active, non-loopback IPv4 interfaces from command output."""

    def list_active_interfaces(self) -> list[NetworkInterface]:
        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                timeout=COMMAND_TIMEOUT_SECONDS,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error(f"Failed to run {' '.join(self.command)}: {e}")
            return []

        if result.returncode != 0:
            logger.error(
                f"{' '.join(self.command)} exited with {result.returncode}: "
                f"{result.stderr.strip()}"
            )
            return []

        interfaces = self.parse_output(result.stdout)
        logger.debug(f"Active interfaces: {[i.name for i in interfaces]}")
        return interfaces
