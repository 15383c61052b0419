"""In-process fan-out of map events to WebSocket subscribers."""

import asyncio
import logging

import orjson

logger = logging.getLogger(__name__)


class Broadcaster:
    """Publishes map events and manages WebSocket subscriber queues."""

    def __init__(self) -> None:
        self._subscribers: set[asyncio.Queue] = set()
        self._last_event: bytes | None = None

    async def publish(self, event: dict) -> None:
        """Fan out an event to every subscriber, dropping the ones that fell behind."""
        payload = orjson.dumps(event)
        self._last_event = payload

        dead = set()
        for q in self._subscribers:
            try:
                q.put_nowait(payload)
            except asyncio.QueueFull:
                dead.add(q)
        if dead:
            logger.warning("Dropping %d slow map event subscribers", len(dead))
        self._subscribers -= dead

    async def notify_map_finished(self) -> None:
        """Completion signal for the host: the current render cycle is done."""
        await self.publish({"type": "map_finished"})

    def get_last_event(self) -> bytes | None:
        return self._last_event

    def subscribe(self) -> asyncio.Queue:
        """Create a new subscriber queue for WebSocket fan-out."""
        q: asyncio.Queue = asyncio.Queue(maxsize=10)
        self._subscribers.add(q)
        return q

    def unsubscribe(self, q: asyncio.Queue) -> None:
        self._subscribers.discard(q)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
