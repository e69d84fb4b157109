"""Status log adapters.

Implementations support two output channels:
- File (durable, rotated, readable history)
- Stderr (console mode, no history)
"""
