"""macOS interface enumerator.

Parses ``ifconfig`` blocks:

    en0: flags=8863<UP,BROADCAST,SMART,RUNNING,SIMPLEX,MULTICAST> mtu 1500
    	inet 192.168.1.10 netmask 0xffffff00 broadcast 192.168.1.255
    	status: active
"""

import re

from nethealth.core.models import NetworkInterface

from .base import CommandInterfaceEnumerator

_HEADER = re.compile(r"^(?P<name>[^\s:]+): flags=\d+<(?P<flags>[^>]*)>")
_INET = re.compile(r"^\s+inet (?P<address>\d{1,3}(?:\.\d{1,3}){3})\s")
_STATUS = re.compile(r"^\s+status: (?P<status>\w+)")


class IfconfigInterfaceEnumerator(CommandInterfaceEnumerator):
    """Lists interfaces that are up via ifconfig."""

    command = ["ifconfig"]

    @staticmethod
    def parse_output(output: str) -> list[NetworkInterface]:
        interfaces: list[NetworkInterface] = []

        name: str | None = None
        flags: set[str] = set()
        address: str | None = None
        status: str | None = None

        def flush() -> None:
            if name is None or address is None:
                return
            if "UP" not in flags or "LOOPBACK" in flags:
                return
            if status is not None and status != "active":
                return
            interfaces.append(NetworkInterface(name=name, ipv4_address=address))

        for line in output.splitlines():
            header = _HEADER.match(line)
            if header is not None:
                flush()
                name = header.group("name")
                flags = set(header.group("flags").split(","))
                address = None
                status = None
                continue

            inet = _INET.match(line)
            if inet is not None and address is None:
                address = inet.group("address")
                continue

            status_match = _STATUS.match(line)
            if status_match is not None:
                status = status_match.group("status")

        flush()
        return interfaces
