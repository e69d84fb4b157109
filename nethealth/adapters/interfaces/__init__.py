"""Interface enumeration adapters.

Implementations support multiple platforms:
- Linux (iproute2 ``ip``)
- macOS (``ifconfig``)
"""
