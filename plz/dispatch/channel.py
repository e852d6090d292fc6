"""Multiple-producer, single-consumer result channel.

``channel()`` returns a connected ``(Sender, Receiver)`` pair. Senders are
cloned, one per producer thread, and each clone is closed independently.
The channel closes when the last open sender is closed: the receiver then
yields whatever is still buffered and stops. A receiver never stops while
any sender is still open, so every sent item is delivered exactly once.

Usage:
    tx, rx = channel()
    for _ in range(n):
        start_worker(tx.clone())
    tx.close()  # the workers now hold the only open senders
    for item in rx:
        ...
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from typing import Final


__all__ = ["ChannelClosed", "Receiver", "Sender", "channel"]


class ChannelClosed(Exception):
    """Raised when using a closed sender or receiving from a drained channel."""


class _Closed:
    def __repr__(self) -> str:
        return "<closed>"


_CLOSED: Final = _Closed()


class _State[T]:
    """Buffer plus open-sender count shared by one channel's endpoints."""

    def __init__(self) -> None:
        self.buffer: queue.SimpleQueue[T | _Closed] = queue.SimpleQueue()
        self.lock = threading.Lock()
        self.open_senders = 1

    def acquire(self) -> None:
        with self.lock:
            if self.open_senders == 0:
                raise ChannelClosed("channel is closed")
            self.open_senders += 1

    def release(self) -> None:
        with self.lock:
            self.open_senders -= 1
            last = self.open_senders == 0
        if last:
            self.buffer.put(_CLOSED)


class Sender[T]:
    """Producing end. Owned by a single thread; safe to clone across threads."""

    __slots__ = ("_state", "_open")

    def __init__(self, state: _State[T]) -> None:
        self._state = state
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def send(self, item: T) -> None:
        if not self._open:
            raise ChannelClosed("send on closed sender")
        self._state.buffer.put(item)

    def clone(self) -> Sender[T]:
        """New independent sender on the same channel."""
        if not self._open:
            raise ChannelClosed("clone of closed sender")
        self._state.acquire()
        return Sender(self._state)

    def close(self) -> None:
        """Close this sender. Idempotent."""
        if self._open:
            self._open = False
            self._state.release()

    def __enter__(self) -> Sender[T]:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class Receiver[T]:
    """Consuming end. Iterating blocks until an item arrives or the channel closes."""

    __slots__ = ("_state", "_drained")

    def __init__(self, state: _State[T]) -> None:
        self._state = state
        self._drained = False

    def recv(self) -> T:
        """Block for the next item.

        Raises:
            ChannelClosed: once every sender is closed and the buffer is empty
        """
        if self._drained:
            raise ChannelClosed("channel is closed")
        item = self._state.buffer.get()
        if isinstance(item, _Closed):
            self._drained = True
            raise ChannelClosed("channel is closed")
        return item

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                item = self.recv()
            except ChannelClosed:
                return
            yield item


def channel[T]() -> tuple[Sender[T], Receiver[T]]:
    """Create a channel with one open sender."""
    state: _State[T] = _State()
    return Sender(state), Receiver(state)
