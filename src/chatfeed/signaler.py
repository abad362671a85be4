from __future__ import annotations

import asyncio
from typing import Protocol

from loguru import logger


class Subscription(Protocol):
    topic: str

    async def wait(self) -> bool:
        """Block until new data is ready for the topic.

        Returns False once the subscription has been closed.
        """
        ...

    async def resubscribe(self, topic: str) -> None: ...

    async def close(self) -> None: ...


class Signaler(Protocol):
    async def subscribe(self, topic: str) -> Subscription: ...


class IntervalSubscription:
    """Fires one event per interval until closed.

    Stands in for a push channel: the topic is tracked so callers see the
    same rotation behaviour, but events are driven by a timer.
    """

    def __init__(self, topic: str, interval: float):
        self.topic = topic
        self.interval = interval
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    async def wait(self) -> bool:
        if self._closed.is_set():
            return False
        try:
            await asyncio.wait_for(self._closed.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            return True
        return False

    async def resubscribe(self, topic: str) -> None:
        if topic != self.topic:
            logger.debug(f"Signaler topic {self.topic} -> {topic}")
        self.topic = topic

    async def close(self) -> None:
        self._closed.set()


class IntervalSignaler:
    def __init__(self, interval: float = 5.0):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval

    async def subscribe(self, topic: str) -> IntervalSubscription:
        logger.debug(f"Subscribing to {topic} every {self.interval}s")
        return IntervalSubscription(topic, self.interval)
