"""Manages active WebSocket subscriber queues and message broadcasting.

Messages are produced on the NMEA consumer thread but subscriber queues
belong to the event loop, so delivery is always scheduled onto the loop.
"""

import asyncio

__all__ = ["add_subscriber", "broadcast_message", "remove_subscriber", "subscriber_count"]

_subscriber_queues: list[asyncio.Queue[str]] = []


def add_subscriber(queue: asyncio.Queue[str]) -> None:
    """Start delivering broadcast messages to ``queue``."""
    _subscriber_queues.append(queue)


def remove_subscriber(queue: asyncio.Queue[str]) -> None:
    """Stop delivering to ``queue``. Unknown queues are ignored."""
    if queue in _subscriber_queues:
        _subscriber_queues.remove(queue)


def subscriber_count() -> int:
    return len(_subscriber_queues)


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    # Drop the oldest message so a slow client never blocks the others.
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


def _deliver(message: str) -> None:
    for queue in list(_subscriber_queues):
        _enqueue_message(queue, message)


def broadcast_message(message: str, loop: asyncio.AbstractEventLoop) -> None:
    """Send ``message`` to every subscriber. Safe to call from any thread."""
    loop.call_soon_threadsafe(_deliver, message)
