"""Integration tests for adapter implementations.

These tests exercise adapters against the real filesystem or mocked
external tools to validate correct translation between core domain
models and external formats.
"""
