"""
The error type returned by every fallible operation in dns.do.

``Error`` wraps an ``ErrorKind`` plus an optional diagnostic ``Backtrace``.
Errors raised by the client's subsystems are converted at the boundary
where they are first seen, so callers only ever have to catch ``Error``::

    def send_request(tx: Sender[bytes], request: bytes) -> None:
        try:
            tx.try_send(request)
        except SendError as e:
            raise Error.from_send(e)

    try:
        send_request(tx, request)
    except Error as error:
        if error.is_timeout:
            ...  # retry with a longer deadline
        else:
            print(f"send failed: {error}")

Timeout normalization: the security layer, the protocol layer and OSError
each report an expired deadline their own way. All three become
``ErrorKind.Timeout`` here. Only the immediate classification of the
incoming error is checked; a timeout nested in its cause chain stays wrapped.
"""

from __future__ import annotations

import asyncio
import errno
import functools
import logging
from typing import Any

from .backtrace import Backtrace, trace
from .channel import SendError as QueueSendError
from .kind import ErrorKind, Io, Message, Msg, Protocol, Security, SendError, Timeout
from .proto import ProtoError, ProtoErrorKind
from .security import SecurityError, SecurityErrorKind

__all__ = ["Error", "into_error", "to_io_error", "is_timeout"]

logger = logging.getLogger(__name__)


class Error(Exception):
    """
    The error type for errors that get returned in dns.do.

    ``Error(kind)`` is the generic constructor; the ``from_*`` class methods
    convert specific sources. Every construction path captures a backtrace
    when diagnostics are enabled (see ``dns_do.configure``).

    Attributes:
        kind: The classified error kind (read-only)
        backtrace: Stack snapshot taken at construction, or None
    """

    def __init__(self, kind: ErrorKind) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError(f"Error expects an ErrorKind, got {type(kind).__name__}")
        super().__init__(kind)
        self._kind = kind
        self._backtrace = trace(skip=1)
        self._link_source()

    @classmethod
    def _from_parts(cls, kind: ErrorKind, backtrace: Backtrace | None) -> Error:
        error = cls.__new__(cls)
        Exception.__init__(error, kind)
        error._kind = kind
        error._backtrace = backtrace
        error._link_source()
        return error

    def _link_source(self) -> None:
        source = self._kind.source
        if source is not None:
            self.__cause__ = source
        elif self._kind.is_timeout:
            # the subsystem's own timeout error must not leak through
            self.__suppress_context__ = True

    @property
    def kind(self) -> ErrorKind:
        """Get the kind of the error."""
        return self._kind

    @property
    def backtrace(self) -> Backtrace | None:
        return self._backtrace

    @property
    def is_timeout(self) -> bool:
        """Whether the error is classified as Timeout."""
        return self._kind.is_timeout

    # ------------------------------------------------------------------
    # Inbound conversions
    # ------------------------------------------------------------------

    @classmethod
    def from_kind(cls, kind: ErrorKind) -> Error:
        """Same as ``Error(kind)``."""
        return cls(kind)

    @classmethod
    def from_static(cls, msg: str) -> Error:
        """
        Create an error from a fixed message.

        Use for module-level constants. The text is never inspected, so a
        message reading "timeout" is still a Message.
        """
        return cls(Message(msg))

    @classmethod
    def from_msg(cls, msg: str) -> Error:
        """Create an error from a message built at runtime."""
        return cls(Msg(msg))

    @classmethod
    def from_send(cls, error: QueueSendError) -> Error:
        """Wrap a queue delivery failure."""
        return cls(SendError(error))

    @classmethod
    def from_security(cls, error: SecurityError) -> Error:
        """
        Convert a security-layer error.

        A TIMEOUT classification becomes ``Timeout`` and the original error
        is dropped; anything else is wrapped as ``Security``.
        """
        if error.kind is SecurityErrorKind.TIMEOUT:
            logger.debug("Normalized security timeout: %s", error)
            return cls(Timeout())
        return cls(Security(error))

    @classmethod
    def from_io(cls, error: OSError) -> Error:
        """
        Convert an OSError.

        ``TimeoutError`` becomes ``Timeout``. That covers errno ETIMEDOUT,
        ``socket.timeout`` and, from Python 3.11, ``asyncio.TimeoutError``.
        Anything else is wrapped as ``Io``.
        """
        if isinstance(error, TimeoutError):
            logger.debug("Normalized io timeout: %s", error)
            return cls(Timeout())
        return cls(Io(error))

    @classmethod
    def from_proto(cls, error: ProtoError) -> Error:
        """
        Convert a protocol-layer error.

        A TIMEOUT classification becomes ``Timeout``; anything else is
        wrapped as ``Protocol``.
        """
        if error.kind is ProtoErrorKind.TIMEOUT:
            logger.debug("Normalized proto timeout: %s", error)
            return cls(Timeout())
        return cls(Protocol(error))

    # ------------------------------------------------------------------
    # Outbound conversion
    # ------------------------------------------------------------------

    def into_io_error(self) -> OSError:
        """
        Convert to an OSError for code that only understands OSError.

        Timeout maps to ``TimeoutError`` with errno ETIMEDOUT; every other
        kind maps to a plain ``OSError``. The Display text is the OSError's
        message and this error is its ``__cause__``.
        """
        if self._kind.is_timeout:
            io_error: OSError = TimeoutError(errno.ETIMEDOUT, str(self))
        else:
            io_error = OSError(str(self))
        io_error.__cause__ = self
        return io_error

    # ------------------------------------------------------------------

    def clone(self) -> Error:
        """
        Return a copy of this error.

        The kind is cloned with ``ErrorKind.clone()``, so an Io error loses
        its message and keeps only its classification.
        """
        backtrace = self._backtrace.clone() if self._backtrace is not None else None
        return self._from_parts(self._kind.clone(), backtrace)

    def __copy__(self) -> Error:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> Error:
        return self.clone()

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "name": self.__class__.__name__,
            "kind": type(self._kind).__name__,
            "message": str(self._kind),
            "timeout": self._kind.is_timeout,
        }

    def __str__(self) -> str:
        if self._backtrace is not None:
            return f"{self._kind}\n{self._backtrace!r}"
        return str(self._kind)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._kind!r})"


# ============================================================================
# Conversion utilities
# ============================================================================


@functools.singledispatch
def into_error(value: object) -> Error:
    """
    Convert any supported value into an ``Error``.

    Supported: Error (returned unchanged), ErrorKind, str (as Msg),
    SecurityError, ProtoError, channel.SendError, OSError and
    asyncio.TimeoutError (as Timeout).

    Raises:
        TypeError: If the value's type has no conversion

    Example:
        ```python
        try:
            data = sock.recv(512)
        except OSError as e:
            raise into_error(e)
        ```
    """
    raise TypeError(f"cannot convert {type(value).__name__} into Error")


@into_error.register(Error)
def _(value: Error) -> Error:
    return value


@into_error.register(ErrorKind)
def _(value: ErrorKind) -> Error:
    return Error(value)


@into_error.register(str)
def _(value: str) -> Error:
    return Error.from_msg(value)


@into_error.register(SecurityError)
def _(value: SecurityError) -> Error:
    return Error.from_security(value)


@into_error.register(ProtoError)
def _(value: ProtoError) -> Error:
    return Error.from_proto(value)


@into_error.register(QueueSendError)
def _(value: QueueSendError) -> Error:
    return Error.from_send(value)


@into_error.register(OSError)
def _(value: OSError) -> Error:
    return Error.from_io(value)


# From 3.11 asyncio.TimeoutError is the built-in TimeoutError and is
# handled by the OSError conversion above.
if not issubclass(asyncio.TimeoutError, OSError):

    @into_error.register(asyncio.TimeoutError)
    def _(value: asyncio.TimeoutError) -> Error:
        logger.debug("Normalized asyncio timeout: %s", value)
        return Error(Timeout())


def to_io_error(error: Error) -> OSError:
    """Convert an ``Error`` to an OSError. See ``Error.into_io_error``."""
    return error.into_io_error()


def is_timeout(error: BaseException) -> bool:
    """
    Check if an exception is a dns.do ``Error`` classified as Timeout.

    Example:
        ```python
        try:
            await resolve(name)
        except Exception as error:
            if is_timeout(error):
                # Handle timeout specifically
                pass
        ```
    """
    return isinstance(error, Error) and error.is_timeout
