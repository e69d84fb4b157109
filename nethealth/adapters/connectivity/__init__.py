"""Connectivity probe adapters.

Implementations support multiple platforms:
- Linux (iputils ping)
- macOS (BSD ping)
"""
