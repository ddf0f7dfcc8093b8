"""
Diagnostic backtraces captured when an error is created.

Capture is gated on ``get_config().backtrace`` so the cost is only paid when
diagnostics are switched on (``DNS_DO_BACKTRACE=1``).
"""

from __future__ import annotations

import functools
import os
import traceback

from .config import get_config

__all__ = ["Backtrace", "trace"]

_PACKAGE_DIR = os.path.normcase(os.path.dirname(os.path.abspath(__file__))) + os.sep
# singledispatch wrappers sit between into_error() and its caller
_DISPATCH_FILE = os.path.normcase(os.path.abspath(functools.__file__ or "functools.py"))


def _is_plumbing(frame: traceback.FrameSummary) -> bool:
    filename = os.path.normcase(os.path.abspath(frame.filename))
    return filename.startswith(_PACKAGE_DIR) or filename == _DISPATCH_FILE


class Backtrace:
    """
    An immutable snapshot of the call stack.

    The debug rendering (``repr``) lists the frames oldest first, the same
    layout Python uses for tracebacks.
    """

    __slots__ = ("_frames",)

    def __init__(self, frames: traceback.StackSummary) -> None:
        self._frames = frames

    @classmethod
    def capture(cls, skip: int = 0) -> Backtrace:
        """
        Snapshot the caller's stack.

        Args:
            skip: Number of innermost frames to drop, on top of this call

        Returns:
            A new Backtrace
        """
        frames = traceback.extract_stack()
        # drop capture() itself plus whatever the caller asked for
        cut = len(frames) - 1 - skip
        return cls(traceback.StackSummary.from_list(frames[: max(cut, 0)]))

    @property
    def frames(self) -> tuple[traceback.FrameSummary, ...]:
        """The captured frames, outermost first."""
        return tuple(self._frames)

    def without_plumbing(self) -> Backtrace:
        """
        Drop the innermost frames that belong to dns_do itself.

        Conversion helpers (``from_*`` class methods, ``into_error``
        dispatch, ``Error.__init__``) are removed so the snapshot ends at
        the code that created the error.
        """
        frames = list(self._frames)
        while frames and _is_plumbing(frames[-1]):
            frames.pop()
        return Backtrace(traceback.StackSummary.from_list(frames))

    def clone(self) -> Backtrace:
        """Return an independent copy of this snapshot."""
        return Backtrace(traceback.StackSummary.from_list(list(self._frames)))

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        return "stack backtrace:\n" + "".join(self._frames.format()).rstrip("\n")


def trace(skip: int = 0) -> Backtrace | None:
    """
    Capture a backtrace if diagnostics are enabled.

    The innermost dns_do frames are dropped, so the snapshot ends at the
    caller of the library.

    Args:
        skip: Extra innermost frames to drop

    Returns:
        A Backtrace, or None when capture is disabled
    """
    if not get_config().backtrace:
        return None
    # skip trace() as well
    return Backtrace.capture(skip + 1).without_plumbing()
