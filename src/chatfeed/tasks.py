from __future__ import annotations

import asyncio
from typing import Coroutine, Set

from loguru import logger


class Tasks:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self.loop = loop or asyncio.get_running_loop()
        self.tasks: Set[asyncio.Task] = set()

    def create_task(self, coro: Coroutine) -> asyncio.Task:
        task = self.loop.create_task(coro)
        self.tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task):
        self.tasks.discard(task)
        if task.cancelled():
            return
        if exc := task.exception():
            logger.opt(exception=exc).error(f"Task {task.get_name()} failed")

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self.tasks)

    def terminate(self):
        for task in list(self.tasks):
            task.cancel()

    async def join(self):
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
