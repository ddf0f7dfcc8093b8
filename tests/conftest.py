"""
Pytest configuration and fixtures for dns-do tests.

This module provides fixtures for:
- Pinning the diagnostics configuration per test
- Building subsystem errors and error kinds
- Loading the display conformance table (tests/conformance/*.yaml)
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Any, Generator

import pytest
import yaml

from dns_do import (
    ErrorKind,
    ProtoError,
    ProtoErrorKind,
    QueueSendError,
    SecurityError,
    SecurityErrorKind,
    SendErrorKind,
    config,
)

CONFORMANCE_DIR = Path(__file__).parent / "conformance"


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def diagnostics_off() -> Generator[None, None, None]:
    """Run every test with backtrace capture off unless it opts in."""
    saved = config.get_config()
    config.configure(backtrace=False)
    yield
    config._global_config = saved


@pytest.fixture
def backtraces_on() -> None:
    """Enable backtrace capture for one test."""
    config.configure(backtrace=True)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove backtrace settings from the environment."""
    monkeypatch.delenv("DNS_DO_BACKTRACE", raising=False)
    monkeypatch.delenv("PYTHON_BACKTRACE", raising=False)
    return monkeypatch


# ============================================================================
# Error Fixtures
# ============================================================================

@pytest.fixture
def io_error() -> OSError:
    """A non-timeout socket error with a detailed message."""
    return OSError(errno.ECONNREFUSED, "Connection refused by 192.0.2.53:53")


@pytest.fixture
def security_error() -> SecurityError:
    return SecurityError(SecurityErrorKind.VALIDATION_FAILED, "RRSIG expired for example.com.")


@pytest.fixture
def proto_error() -> ProtoError:
    return ProtoError(ProtoErrorKind.MALFORMED, "label exceeds 63 octets")


@pytest.fixture
def send_error() -> QueueSendError:
    return QueueSendError(SendErrorKind.FULL)


def build_kind(case: dict[str, Any]) -> ErrorKind:
    """Build an ErrorKind from a conformance case."""
    variant = case["kind"]
    payload = case.get("payload")

    if variant == "Message":
        return ErrorKind.Message(payload)
    if variant == "Msg":
        return ErrorKind.Msg(payload)
    if variant == "Security":
        return ErrorKind.Security(SecurityError(SecurityErrorKind(payload)))
    if variant == "Io":
        code = getattr(errno, payload)
        return ErrorKind.Io(OSError(code, os.strerror(code)))
    if variant == "Protocol":
        return ErrorKind.Protocol(ProtoError(ProtoErrorKind(payload)))
    if variant == "SendError":
        return ErrorKind.SendError(QueueSendError(SendErrorKind(payload)))
    if variant == "Timeout":
        return ErrorKind.Timeout()
    raise ValueError(f"unknown kind in conformance spec: {variant}")


# ============================================================================
# Conformance Specs
# ============================================================================

def load_test_specs(spec_dir: Path) -> list[dict[str, Any]]:
    """Load all conformance test specifications from YAML files."""
    specs = []
    if not spec_dir.exists():
        return specs

    for spec_file in sorted(spec_dir.glob("*.yaml")):
        with open(spec_file) as f:
            spec = yaml.safe_load(f)
            if spec and "tests" in spec:
                for test in spec["tests"]:
                    test["_file"] = spec_file.name
                    test["_category"] = spec.get("name", spec_file.stem)
                    specs.append(test)
    return specs


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Generate test cases from conformance specs."""
    if "conformance_test" in metafunc.fixturenames:
        tests = load_test_specs(CONFORMANCE_DIR)
        metafunc.parametrize(
            "conformance_test",
            tests,
            ids=[f"{t.get('_category', 'test')}::{t['name']}" for t in tests],
        )
