"""
Error kinds for dns.do.

Every ``dns_do.Error`` carries exactly one ``ErrorKind``. Kinds are either
local conditions (``Message``, ``Msg``, ``Timeout``) or wrap an error raised
by one of the client's subsystems (``Security``, ``Io``, ``Protocol``,
``SendError``).

Kind Hierarchy:
- ErrorKind (base)
  - Message: fixed message, usually a module-level constant
  - Msg: message built at runtime
  - Security: DNSSEC validation failure (wraps SecurityError)
  - Io: socket or stream failure (wraps OSError)
  - Protocol: wire-protocol failure (wraps ProtoError)
  - SendError: internal queue delivery failure (wraps channel.SendError)
  - Timeout: the request exceeded its deadline

Every variant is also reachable from the base class, so callers can write::

    if isinstance(error.kind, ErrorKind.Timeout):
        ...

``Timeout`` is the only representation of an expired deadline. Subsystem
timeouts are re-tagged by the conversions in ``dns_do.error`` before they
reach this module.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from typing import Any, TypeVar

from .channel import SendError as QueueSendError
from .proto import ProtoError
from .security import SecurityError

__all__ = [
    "ErrorKind",
    "Message",
    "Msg",
    "Security",
    "Io",
    "Protocol",
    "SendError",
    "Timeout",
]

E = TypeVar("E", bound=BaseException)

EMPTY_MESSAGE = "<empty error message>"


class ErrorKind:
    """
    Base class for all error kinds.

    Kinds are immutable. ``clone()`` (and ``copy.copy``/``copy.deepcopy``)
    returns an equivalent kind, with one documented exception: cloning an
    ``Io`` kind keeps only the I/O error's classification and drops its
    message. See ``Io``.
    """

    __slots__ = ()

    Message: type[Message]
    Msg: type[Msg]
    Security: type[Security]
    Io: type[Io]
    Protocol: type[Protocol]
    SendError: type[SendError]
    Timeout: type[Timeout]

    @property
    def is_timeout(self) -> bool:
        """Whether this kind is Timeout."""
        return False

    @property
    def source(self) -> BaseException | None:
        """The wrapped subsystem error, or None for local kinds."""
        return None

    def clone(self) -> ErrorKind:
        raise NotImplementedError

    def __copy__(self) -> ErrorKind:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> ErrorKind:
        return self.clone()


def _check_payload(kind: ErrorKind, value: object, expected: type) -> None:
    if not isinstance(value, expected):
        raise TypeError(
            f"{type(kind).__name__} expects {expected.__name__}, got {type(value).__name__}"
        )


def _clone_foreign(error: E) -> E:
    """Copy a subsystem error, keeping its chain and traceback."""
    dup = copy.copy(error)
    dup.__cause__ = error.__cause__
    dup.__context__ = error.__context__
    dup.__suppress_context__ = error.__suppress_context__
    return dup.with_traceback(error.__traceback__)


def _io_error_from_classification(error: OSError) -> OSError:
    """
    Rebuild an OSError from its classification alone.

    For built-in OSErrors the errno wins (OSError maps it back to the
    matching subclass, e.g. ETIMEDOUT -> TimeoutError). Other subclasses
    such as ``ssl.SSLError`` or ``socket.gaierror`` keep codes from their
    own namespace in ``errno``; those become the nearest built-in ancestor,
    created without arguments, with the code copied onto ``errno``.
    """
    if error.errno is not None and type(error).__module__ == "builtins":
        return OSError(error.errno, os.strerror(error.errno))

    rebuilt = OSError()
    for cls in type(error).__mro__:
        if cls.__module__ == "builtins" and issubclass(cls, OSError):
            rebuilt = cls()
            break
    rebuilt.errno = error.errno
    return rebuilt


@dataclass(frozen=True, slots=True)
class Message(ErrorKind):
    """An error with a fixed message."""

    msg: str

    def __post_init__(self) -> None:
        _check_payload(self, self.msg, str)

    def clone(self) -> Message:
        return Message(self.msg)

    def __str__(self) -> str:
        return self.msg or EMPTY_MESSAGE


@dataclass(frozen=True, slots=True)
class Msg(ErrorKind):
    """An error with a message built at runtime."""

    msg: str

    def __post_init__(self) -> None:
        _check_payload(self, self.msg, str)

    def clone(self) -> Msg:
        return Msg(self.msg)

    def __str__(self) -> str:
        return self.msg or EMPTY_MESSAGE


@dataclass(frozen=True, slots=True)
class Security(ErrorKind):
    """A DNSSEC validation error."""

    error: SecurityError

    def __post_init__(self) -> None:
        _check_payload(self, self.error, SecurityError)

    @property
    def source(self) -> SecurityError:
        return self.error

    def clone(self) -> Security:
        return Security(_clone_foreign(self.error))

    def __str__(self) -> str:
        return "security error"


@dataclass(frozen=True, slots=True)
class Io(ErrorKind):
    """
    An error returned from socket or stream I/O.

    Cloning is lossy: the clone wraps a new built-in OSError that keeps
    only the original's classification (errno and built-in exception
    class). The message, filename and any other attributes are not carried
    over, because arbitrary OSError subclasses cannot be copied reliably.
    """

    error: OSError

    def __post_init__(self) -> None:
        _check_payload(self, self.error, OSError)

    @property
    def source(self) -> OSError:
        return self.error

    def clone(self) -> Io:
        return Io(_io_error_from_classification(self.error))

    def __str__(self) -> str:
        return "io error"


@dataclass(frozen=True, slots=True)
class Protocol(ErrorKind):
    """An error from the wire-protocol layer."""

    error: ProtoError

    def __post_init__(self) -> None:
        _check_payload(self, self.error, ProtoError)

    @property
    def source(self) -> ProtoError:
        return self.error

    def clone(self) -> Protocol:
        return Protocol(_clone_foreign(self.error))

    def __str__(self) -> str:
        return "proto error"


@dataclass(frozen=True, slots=True)
class SendError(ErrorKind):
    """Failure delivering a message on the internal queue."""

    error: QueueSendError

    def __post_init__(self) -> None:
        _check_payload(self, self.error, QueueSendError)

    @property
    def source(self) -> QueueSendError:
        return self.error

    def clone(self) -> SendError:
        return SendError(_clone_foreign(self.error))

    def __str__(self) -> str:
        return f"error sending to queue: {self.error}"


@dataclass(frozen=True, slots=True)
class Timeout(ErrorKind):
    """A request timed out."""

    @property
    def is_timeout(self) -> bool:
        return True

    def clone(self) -> Timeout:
        return Timeout()

    def __str__(self) -> str:
        return "request timed out"


ErrorKind.Message = Message
ErrorKind.Msg = Msg
ErrorKind.Security = Security
ErrorKind.Io = Io
ErrorKind.Protocol = Protocol
ErrorKind.SendError = SendError
ErrorKind.Timeout = Timeout
