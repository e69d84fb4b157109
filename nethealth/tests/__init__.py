"""Test suite for the nethealth probe.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Real filesystem via tmp_path; subprocess and dnspython mocked
   - Validates adapter behavior and error handling

3. fakes/: Port implementations for testing
   - In-memory implementations of the probe, interface and status log ports
   - Used by core unit tests
"""
