"""
Errors raised by the DNSSEC validation layer.

Only the error surface lives here; the error core converts these into
``dns_do.Error`` values.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["SecurityError", "SecurityErrorKind"]


class SecurityErrorKind(str, Enum):
    """Classification of a security/validation failure."""
    MESSAGE = "message"
    PROTO = "proto"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    VALIDATION_FAILED = "validation_failed"
    TIMEOUT = "timeout"


_DEFAULT_MESSAGES: dict[SecurityErrorKind, str] = {
    SecurityErrorKind.MESSAGE: "security failure",
    SecurityErrorKind.PROTO: "protocol error during validation",
    SecurityErrorKind.UNSUPPORTED_ALGORITHM: "unsupported algorithm",
    SecurityErrorKind.VALIDATION_FAILED: "validation failed",
    SecurityErrorKind.TIMEOUT: "validation timed out",
}


class SecurityError(Exception):
    """
    Validation or crypto failure from the security layer.

    Attributes:
        kind: What went wrong
        message: Optional human-readable detail
    """

    def __init__(
        self,
        kind: SecurityErrorKind,
        message: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(kind, message)
        self.kind = kind
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message or _DEFAULT_MESSAGES[self.kind]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind.name}, {self.message!r})"
