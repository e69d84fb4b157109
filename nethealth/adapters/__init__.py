"""External adapters for the nethealth probe.

This package contains all external dependencies (ping, dnspython,
iproute2/ifconfig, the filesystem) and provides implementations of
the core port interfaces.

Adapter Organization:

- connectivity/: Ping probes (Linux, macOS)
- dnsprobe/: DNS chain probes (dnspython)
- interfaces/: Active interface discovery (Linux, macOS)
- status_log/: Status log sinks (file, stderr) and log rotation
"""
