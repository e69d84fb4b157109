"""Linux interface enumerator.

Parses the one-line-per-address output of ``ip -4 -o addr show up``:

    2: eth0    inet 192.168.1.100/24 brd 192.168.1.255 scope global eth0\\ ...
"""

import re

from nethealth.core.models import NetworkInterface

from .base import CommandInterfaceEnumerator

_ADDR_LINE = re.compile(
    r"^\d+:\s+(?P<name>[^\s@]+)(?:@\S+)?\s+inet\s+(?P<address>\d{1,3}(?:\.\d{1,3}){3})/"
)


class IpCommandInterfaceEnumerator(CommandInterfaceEnumerator):
    """Lists interfaces that are up via iproute2."""

    command = ["ip", "-4", "-o", "addr", "show", "up"]

    @staticmethod
    def parse_output(output: str) -> list[NetworkInterface]:
        interfaces: list[NetworkInterface] = []
        seen: set[str] = set()
        for line in output.splitlines():
            match = _ADDR_LINE.match(line.strip())
            if match is None:
                continue
            name = match.group("name")
            address = match.group("address")
            if name == "lo" or address.startswith("127.") or name in seen:
                continue
            seen.add(name)
            interfaces.append(NetworkInterface(name=name, ipv4_address=address))
        return interfaces
