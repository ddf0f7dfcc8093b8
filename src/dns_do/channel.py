"""
Bounded message channel used between the client's background tasks.

``Sender`` wraps an ``asyncio.Queue`` and reports delivery failures as
``SendError`` so they can be folded into ``dns_do.Error``.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Generic, TypeVar

__all__ = ["Sender", "SendError", "SendErrorKind"]

T = TypeVar("T")


class SendErrorKind(str, Enum):
    """Why a send failed."""
    FULL = "full"
    DISCONNECTED = "disconnected"


class SendError(Exception):
    """Error raised when a message cannot be delivered on a channel."""

    def __init__(self, kind: SendErrorKind) -> None:
        super().__init__(kind)
        self.kind = kind

    def is_full(self) -> bool:
        """True if the channel had no room for the message."""
        return self.kind is SendErrorKind.FULL

    def is_disconnected(self) -> bool:
        """True if the receiving side is gone."""
        return self.kind is SendErrorKind.DISCONNECTED

    def __str__(self) -> str:
        if self.is_full():
            return "send failed because channel is full"
        return "send failed because receiver is gone"

    def __repr__(self) -> str:
        return f"SendError({self.kind.name})"


class Sender(Generic[T]):
    """
    Sending half of a bounded channel.

    Example:
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=16)
        tx = Sender(queue)
        await tx.send("query")
        tx.close()
    """

    __slots__ = ("_queue", "_closed")

    def __init__(self, queue: asyncio.Queue[T]) -> None:
        self._queue = queue
        self._closed = False

    @property
    def is_closed(self) -> bool:
        """Whether the channel has been closed."""
        return self._closed

    def try_send(self, item: T) -> None:
        """
        Send without waiting.

        Raises:
            SendError: FULL if the queue has no room, DISCONNECTED if closed
        """
        if self._closed:
            raise SendError(SendErrorKind.DISCONNECTED)
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            raise SendError(SendErrorKind.FULL) from None

    async def send(self, item: T) -> None:
        """
        Send, waiting for room in the queue.

        Raises:
            SendError: DISCONNECTED if the channel is closed
        """
        if self._closed:
            raise SendError(SendErrorKind.DISCONNECTED)
        await self._queue.put(item)

    def close(self) -> None:
        """Close the channel; later sends fail with DISCONNECTED."""
        self._closed = True

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"{self._queue.qsize()}/{self._queue.maxsize}"
        return f"Sender({state})"
