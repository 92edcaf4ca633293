"""Background scheduling of embedding jobs."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

Job = Callable[[str], Awaitable[Any]]


class JobScheduler(ABC):
    """Defers embedding jobs so question creation never waits on the provider.

    Delivery is at-least-once: a job may run more than once for the same
    question, so jobs must be safe to repeat.
    """

    @abstractmethod
    def enqueue(self, question_id: str) -> None:
        """Schedule an embedding job for a question. Returns immediately."""
        ...

    @abstractmethod
    async def drain(self) -> None:
        """Wait until every job enqueued so far has finished."""
        ...


class AsyncioJobScheduler(JobScheduler):
    """Runs jobs as asyncio tasks behind a semaphore.

    Jobs enqueued while an event loop is running start right away. Jobs
    enqueued from synchronous code are held until the next ``drain()`` or
    the next enqueue made inside a running loop, whichever comes first.

    A failing job is logged and dropped; the scheduler never re-enqueues it.

    Example:
        scheduler = AsyncioJobScheduler(generator.generate, max_concurrent=4)
        scheduler.enqueue(question.id)
        await scheduler.drain()
    """

    def __init__(self, job: Job, max_concurrent: int = 4) -> None:
        """Initialize the scheduler.

        Args:
            job: Coroutine function run once per enqueued question id
            max_concurrent: Upper bound on jobs running at the same time
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self._job = job
        self.max_concurrent = max_concurrent
        self._pending: deque[str] = deque()
        self._tasks: set[asyncio.Task[None]] = set()
        self._semaphore: asyncio.Semaphore | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def pending_count(self) -> int:
        """Jobs waiting to start or still running."""
        return len(self._pending) + len(self._tasks)

    def enqueue(self, question_id: str) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self._pending.append(question_id)
            return
        self._start_pending()
        self._start(question_id)

    async def drain(self) -> None:
        self._start_pending()
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _start_pending(self) -> None:
        while self._pending:
            self._start(self._pending.popleft())

    def _start(self, question_id: str) -> None:
        loop = asyncio.get_running_loop()
        # A semaphore belongs to one loop; CLI commands each run their own
        if self._semaphore is None or self._loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
            self._loop = loop
        task = loop.create_task(self._run(question_id, self._semaphore))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, question_id: str, semaphore: asyncio.Semaphore) -> None:
        async with semaphore:
            try:
                await self._job(question_id)
            except Exception as e:
                logger.warning("Embedding job for question %s failed: %s", question_id, e)
            else:
                logger.info("Embedding job for question %s finished", question_id)
