"""Ordered multi-producer, single-consumer channel of formatted lines.

The channel is the only state shared between producers and the worker.
Producers call enqueue() from any thread or enqueue_async() from a
coroutine; exactly one consumer calls receive(). A single
threading.Condition guards the buffer, the closed flag and the list of
producers waiting for space, so a line accepted before close() is always
ahead of the end-of-stream seen by the consumer.

Closing and cancelling are different signals. close() lets the consumer
drain what is already queued; a cancel event passed to receive() makes it
stop immediately.
"""

import asyncio
import threading
from collections import deque
from concurrent.futures import Future

from spectral_logger.constants import DEFAULT_MAX_QUEUE_SIZE


class LogChannel:
    """FIFO channel of formatted lines, unbounded unless maxsize is set.

    Precondition: a single consumer. Several threads calling receive()
    would still get each line once, but no ordering is promised between
    them.

    Attributes:
        maxsize: Capacity; 0 means unbounded
        drain_completion: Resolved by the consumer with True once the
            channel is closed and empty, or False if it stopped early

    """

    def __init__(self, maxsize: int = DEFAULT_MAX_QUEUE_SIZE) -> None:
        """Initialize an open, empty channel.

        Args:
            maxsize: Capacity; 0 or less means unbounded

        """
        self.maxsize = max(maxsize, 0)
        self.drain_completion: Future[bool] = Future()
        self._lines: deque[str] = deque()
        self._condition = threading.Condition()
        self._closed = False
        self._space_waiters: list[Future[None]] = []

    def __len__(self) -> int:
        """Return the number of queued lines."""
        with self._condition:
            return len(self._lines)

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def _is_full(self) -> bool:
        return bool(self.maxsize) and len(self._lines) >= self.maxsize

    def _wake_space_waiters(self) -> None:
        # Caller holds the condition
        waiters, self._space_waiters = self._space_waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

    def enqueue(self, line: str) -> bool:
        """Append a line without blocking.

        Returns:
            True if accepted, False if the channel is closed or full

        """
        with self._condition:
            if self._closed or self._is_full():
                return False
            self._lines.append(line)
            self._condition.notify()
        return True

    async def enqueue_async(self, line: str) -> bool:
        """Append a line, suspending the calling task while the channel is full.

        An unbounded channel accepts immediately. No thread is blocked while
        waiting; the consumer resolves the waiter after taking a line.

        Returns:
            True if accepted, False if the channel is (or becomes) closed

        """
        while True:
            with self._condition:
                if self._closed:
                    return False
                if not self._is_full():
                    self._lines.append(line)
                    self._condition.notify()
                    return True
                waiter: Future[None] = Future()
                self._space_waiters.append(waiter)
            await asyncio.wrap_future(waiter)

    def close(self) -> None:
        """Stop accepting lines; queued lines stay available to receive()."""
        with self._condition:
            self._closed = True
            self._wake_space_waiters()
            self._condition.notify_all()

    def interrupt(self) -> None:
        """Wake a blocked consumer so it re-checks its cancel event."""
        with self._condition:
            self._condition.notify_all()

    def receive(self, cancel_event: threading.Event) -> str | None:
        """Take the next line, blocking until one is available.

        Args:
            cancel_event: When set, stop without taking further lines.
                Setters must call interrupt() to wake a waiting consumer.

        Returns:
            The oldest queued line, or None once the channel is closed and
            empty or the cancel event is set

        """
        with self._condition:
            while (
                not self._lines
                and not self._closed
                and not cancel_event.is_set()
            ):
                self._condition.wait()
            if cancel_event.is_set() or not self._lines:
                return None
            line = self._lines.popleft()
            self._wake_space_waiters()
            return line

    def resolve_drain(self, drained: bool) -> None:
        """Resolve drain_completion once; later calls are ignored."""
        if not self.drain_completion.done():
            self.drain_completion.set_result(drained)
