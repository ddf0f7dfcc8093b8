"""
dns-do - DotDo DNS client SDK for Python.

Unified error handling for the DNS client.

Every fallible operation raises ``dns_do.Error``. Failures from the DNSSEC
validation layer, the wire-protocol layer, socket I/O and the internal
message queue are converted into it, and their separate timeout signals are
all reported as ``ErrorKind.Timeout``.

Example usage:
    from dns_do import Error, ErrorKind, into_error

    try:
        sock.sendto(packet, server)
    except OSError as e:
        error = into_error(e)
        if isinstance(error.kind, ErrorKind.Timeout):
            print("server did not answer in time")
        else:
            print(f"send failed: {error}")

Set ``DNS_DO_BACKTRACE=1`` (or call ``configure(backtrace=True)``) to
attach a stack snapshot to every error.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .backtrace import Backtrace
from .channel import Sender, SendErrorKind
from .channel import SendError as QueueSendError
from .config import DiagnosticsConfig, configure, configure_from_env, get_config
from .error import Error, into_error, is_timeout, to_io_error
from .kind import ErrorKind
from .proto import ProtoError, ProtoErrorKind
from .security import SecurityError, SecurityErrorKind

__all__ = [
    # Error type
    "Error",
    "ErrorKind",
    "Backtrace",
    # Conversions
    "into_error",
    "to_io_error",
    "is_timeout",
    # Subsystem errors
    "SecurityError",
    "SecurityErrorKind",
    "ProtoError",
    "ProtoErrorKind",
    "QueueSendError",
    "SendErrorKind",
    "Sender",
    # Configuration
    "DiagnosticsConfig",
    "configure",
    "configure_from_env",
    "get_config",
    # Version
    "__version__",
]
