"""
Unit tests for the Error envelope.

Tests cover:
- Construction and read accessors
- Display composition with and without a backtrace
- Exception chaining (__cause__)
- Clone/copy
- Dictionary representation
"""

from __future__ import annotations

import copy

import pytest

from dns_do import (
    Error,
    ErrorKind,
    ProtoError,
    ProtoErrorKind,
    SecurityError,
    SecurityErrorKind,
    is_timeout,
)


class TestConstruction:
    """Tests for Error(kind)."""

    def test_kind_accessor(self):
        kind = ErrorKind.Msg("no answer")
        error = Error(kind)
        assert error.kind is kind

    def test_kind_is_read_only(self):
        error = Error(ErrorKind.Timeout())
        with pytest.raises(AttributeError):
            error.kind = ErrorKind.Msg("changed")  # type: ignore[misc]

    def test_rejects_non_kind(self):
        with pytest.raises(TypeError):
            Error("just a string")  # type: ignore[arg-type]

    def test_from_kind_matches_constructor(self):
        kind = ErrorKind.Message("fixed")
        assert Error.from_kind(kind).kind is kind

    def test_is_exception(self):
        """Errors can be raised and caught."""
        with pytest.raises(Error) as exc_info:
            raise Error.from_static("no nameservers configured")
        assert str(exc_info.value) == "no nameservers configured"

    def test_no_backtrace_by_default(self):
        assert Error(ErrorKind.Timeout()).backtrace is None

    def test_repr(self):
        assert repr(Error(ErrorKind.Timeout())) == "Error(Timeout())"


class TestDisplay:
    """Tests for str(Error)."""

    def test_display_is_kind_text(self):
        assert str(Error(ErrorKind.Msg("SERVFAIL from 192.0.2.53"))) == "SERVFAIL from 192.0.2.53"

    def test_display_appends_backtrace(self, backtraces_on):
        error = Error(ErrorKind.Timeout())

        assert error.backtrace is not None
        text = str(error)
        assert text.startswith("request timed out\nstack backtrace:\n")
        assert text == f"request timed out\n{error.backtrace!r}"

    def test_empty_message_not_empty(self):
        assert str(Error.from_static("")) != ""


class TestChaining:
    """The wrapped subsystem error is the Error's __cause__."""

    def test_wrapped_error_is_cause(self, proto_error):
        error = Error.from_proto(proto_error)
        assert error.__cause__ is proto_error

    def test_local_kind_has_no_cause(self):
        assert Error.from_msg("local").__cause__ is None

    def test_normalized_timeout_drops_source(self):
        """A re-tagged timeout keeps nothing of the subsystem error."""
        error = Error.from_security(SecurityError(SecurityErrorKind.TIMEOUT))

        assert error.__cause__ is None
        assert error.__suppress_context__ is True
        assert error.kind.source is None

    def test_normalized_timeout_hides_context_when_raised(self):
        with pytest.raises(Error) as exc_info:
            try:
                raise ProtoError(ProtoErrorKind.TIMEOUT)
            except ProtoError as e:
                raise Error.from_proto(e)

        assert exc_info.value.is_timeout
        assert exc_info.value.__suppress_context__ is True


class TestClone:
    """Tests for Error.clone()."""

    def test_clone_is_new_error(self, security_error):
        error = Error.from_security(security_error)
        cloned = error.clone()

        assert cloned is not error
        assert isinstance(cloned.kind, ErrorKind.Security)
        assert cloned.kind.error is not security_error
        assert cloned.__cause__ is cloned.kind.error

    def test_copy_and_deepcopy(self):
        error = Error.from_msg("dynamic")
        assert copy.copy(error).kind == error.kind
        assert copy.deepcopy(error).kind == error.kind

    def test_clone_keeps_backtrace(self, backtraces_on):
        error = Error(ErrorKind.Timeout())
        cloned = error.clone()

        assert cloned.backtrace is not None
        assert cloned.backtrace is not error.backtrace
        assert cloned.backtrace.frames == error.backtrace.frames
        assert str(cloned) == str(error)

    def test_clone_does_not_capture_new_backtrace(self):
        """A clone of an error without a backtrace stays without one."""
        error = Error(ErrorKind.Timeout())
        from dns_do import configure

        configure(backtrace=True)
        assert error.clone().backtrace is None

    def test_io_clone_loses_message(self, io_error):
        error = Error.from_io(io_error)
        cloned = error.clone()

        assert str(cloned) == str(error) == "io error"
        assert cloned.kind.error.errno == io_error.errno
        assert cloned.kind.error.strerror != io_error.strerror


class TestHelpers:
    """Tests for is_timeout() and to_dict()."""

    def test_is_timeout(self):
        assert is_timeout(Error(ErrorKind.Timeout())) is True
        assert is_timeout(Error.from_static("timeout")) is False
        assert is_timeout(TimeoutError("not a dns-do error")) is False

    def test_to_dict(self):
        assert Error(ErrorKind.Timeout()).to_dict() == {
            "name": "Error",
            "kind": "Timeout",
            "message": "request timed out",
            "timeout": True,
        }

    def test_to_dict_omits_backtrace(self, backtraces_on, proto_error):
        data = Error.from_proto(proto_error).to_dict()
        assert data["kind"] == "Protocol"
        assert data["message"] == "proto error"
        assert data["timeout"] is False
