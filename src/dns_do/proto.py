"""
Errors raised by the DNS wire-protocol layer.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["ProtoError", "ProtoErrorKind"]


class ProtoErrorKind(str, Enum):
    """Classification of a wire-protocol failure."""
    MESSAGE = "message"
    MALFORMED = "malformed"
    BUSY = "busy"
    CANCELED = "canceled"
    NO_CONNECTIONS = "no_connections"
    IO = "io"
    TIMEOUT = "timeout"


_DEFAULT_MESSAGES: dict[ProtoErrorKind, str] = {
    ProtoErrorKind.MESSAGE: "protocol failure",
    ProtoErrorKind.MALFORMED: "malformed message",
    ProtoErrorKind.BUSY: "resource too busy",
    ProtoErrorKind.CANCELED: "request canceled",
    ProtoErrorKind.NO_CONNECTIONS: "no connections available",
    ProtoErrorKind.IO: "io error",
    ProtoErrorKind.TIMEOUT: "request timed out",
}


class ProtoError(Exception):
    """
    Failure while encoding, decoding or exchanging DNS messages.

    Attributes:
        kind: What went wrong
        message: Optional human-readable detail
    """

    def __init__(
        self,
        kind: ProtoErrorKind,
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
