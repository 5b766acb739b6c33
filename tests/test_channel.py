"""Tests for the LogChannel queue."""

import asyncio
import threading

import pytest

from spectral_logger import LogChannel


@pytest.fixture
def never_cancel():
    """Return an unset cancel event."""
    return threading.Event()


def drain(channel, cancel_event):
    """Receive until the channel reports end of stream."""
    lines = []
    while (line := channel.receive(cancel_event)) is not None:
        lines.append(line)
    return lines


def test_lines_are_received_in_enqueue_order(never_cancel):
    """The channel is FIFO."""
    channel = LogChannel()
    for i in range(100):
        assert channel.enqueue(f"line {i}")
    channel.close()

    assert drain(channel, never_cancel) == [f"line {i}" for i in range(100)]


def test_closed_channel_rejects_but_keeps_queued_lines(never_cancel):
    """close() stops intake without discarding what is queued."""
    channel = LogChannel()
    channel.enqueue("kept")
    channel.close()

    assert channel.closed
    assert channel.enqueue("late") is False
    assert drain(channel, never_cancel) == ["kept"]


def test_receive_returns_none_when_cancelled():
    """A set cancel event stops the consumer even with lines queued."""
    channel = LogChannel()
    channel.enqueue("abandoned")
    cancel = threading.Event()
    cancel.set()

    assert channel.receive(cancel) is None
    assert len(channel) == 1


def test_interrupt_wakes_blocked_consumer():
    """interrupt() lets a waiting consumer observe cancellation."""
    channel = LogChannel()
    cancel = threading.Event()
    results = []
    consumer = threading.Thread(
        target=lambda: results.append(channel.receive(cancel))
    )
    consumer.start()

    cancel.set()
    channel.interrupt()
    consumer.join(timeout=5)

    assert not consumer.is_alive()
    assert results == [None]


def test_consumer_wakes_on_enqueue_from_other_thread(never_cancel):
    """A blocked receive() returns the line enqueued by a producer."""
    channel = LogChannel()
    results = []
    consumer = threading.Thread(
        target=lambda: results.append(channel.receive(never_cancel))
    )
    consumer.start()

    channel.enqueue("wake up")
    consumer.join(timeout=5)

    assert results == ["wake up"]


def test_bounded_channel_rejects_sync_enqueue_when_full():
    """enqueue() never blocks; a full bounded channel returns False."""
    channel = LogChannel(maxsize=1)

    assert channel.enqueue("first")
    assert channel.enqueue("second") is False


def test_drain_completion_resolves_once():
    """resolve_drain keeps the first outcome."""
    channel = LogChannel()
    channel.resolve_drain(True)
    channel.resolve_drain(False)

    assert channel.drain_completion.result() is True


@pytest.mark.asyncio
async def test_enqueue_async_on_unbounded_channel_accepts_immediately(
    never_cancel,
):
    """Unbounded channels accept asynchronous lines without waiting."""
    channel = LogChannel()

    assert await channel.enqueue_async("a")
    assert channel.enqueue("b")
    channel.close()

    assert drain(channel, never_cancel) == ["a", "b"]


@pytest.mark.asyncio
async def test_enqueue_async_waits_for_space_on_bounded_channel(
    never_cancel,
):
    """A full bounded channel suspends the task until the consumer reads."""
    channel = LogChannel(maxsize=1)
    channel.enqueue("first")

    pending = asyncio.ensure_future(channel.enqueue_async("second"))
    await asyncio.sleep(0.05)
    assert not pending.done()

    assert channel.receive(never_cancel) == "first"
    assert await asyncio.wait_for(pending, timeout=5) is True
    assert channel.receive(never_cancel) == "second"


@pytest.mark.asyncio
async def test_close_releases_waiting_async_producers():
    """Producers waiting for space get False when the channel closes."""
    channel = LogChannel(maxsize=1)
    channel.enqueue("first")

    pending = asyncio.ensure_future(channel.enqueue_async("second"))
    await asyncio.sleep(0.05)
    channel.close()

    assert await asyncio.wait_for(pending, timeout=5) is False
    assert len(channel) == 1


@pytest.mark.asyncio
async def test_enqueue_async_on_closed_channel_returns_false():
    """Closed channels reject asynchronous submissions too."""
    channel = LogChannel()
    channel.close()

    assert await channel.enqueue_async("late") is False
