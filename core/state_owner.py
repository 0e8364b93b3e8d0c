# core/state_owner.py
from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Tuple, TypeVar

import structlog

from data.repo import HomeRepo

log = structlog.get_logger(__name__)

T = TypeVar("T")
Command = Callable[[HomeRepo], Any]


class HomeStateOwner:
    """
    Single writer for the home context.

    Every read or mutation is a command `fn(repo)` pushed onto one queue and run,
    in enqueue order, by a single consumer task. Callers await the result.
    Overlapping LLM completions each enqueue their own command; whichever runs
    last wins for the state it touches.
    """
    def __init__(self, repo: Optional[HomeRepo] = None):
        self.repo = repo or HomeRepo()
        self._queue: "Optional[asyncio.Queue[Optional[Tuple[Command, asyncio.Future]]]]" = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._queue = asyncio.Queue()
        self._task = asyncio.get_running_loop().create_task(self._run())
        log.info("state_owner_started")

    async def stop(self) -> None:
        if not self.running:
            return
        await self._queue.put(None)
        await self._task
        self._task = None
        log.info("state_owner_stopped")

    async def call(self, fn: Callable[[HomeRepo], T]) -> T:
        if not self.running:
            raise RuntimeError("HomeStateOwner is not running; call start() first.")
        fut = asyncio.get_running_loop().create_future()
        await self._queue.put((fn, fut))
        return await fut

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            if item is None:
                self._queue.task_done()
                return
            fn, fut = item
            try:
                result = fn(self.repo)
            except Exception as e:
                if not fut.cancelled():
                    fut.set_exception(e)
            else:
                if not fut.cancelled():
                    fut.set_result(result)
            finally:
                self._queue.task_done()
