"""
Test package for dns-do.

This package contains:
- test_conformance.py: Display conformance tests from YAML specs
- test_kind.py: ErrorKind unit tests
- test_error.py: Error envelope tests
- test_conversion.py: Inbound and outbound conversion tests
- test_backtrace.py: Backtrace capture tests
- test_config.py: Diagnostics configuration tests
- test_channel.py: Sender/SendError tests
- conftest.py: Pytest configuration and fixtures
"""
