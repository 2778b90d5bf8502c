# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Fan-out/fan-in bookkeeping for classification tasks.

Producers (one task per commit) put records on a bounded queue; a single
consumer drains it while tracking how many tasks are still in flight. The
count includes one token held by the backend while it is still scheduling,
so completion cannot fire before every task exists.
"""

import asyncio
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any

from loguru import logger

from changelog.core.data.change_record import ChangeRecord
from changelog.core.exceptions import ClassificationError

if TYPE_CHECKING:
    from changelog.core.sources.interface import SourceBackend


class RetrievalCoordinator:
    def __init__(self, queue_size: int = 1):
        self._queue: asyncio.Queue[ChangeRecord] = asyncio.Queue(maxsize=queue_size)
        self._errors: asyncio.Queue[BaseException] = asyncio.Queue()
        self._completed = asyncio.Event()
        self._pending = 0
        self._tasks: set[asyncio.Task] = set()

    def add(self, count: int = 1) -> None:
        if self._completed.is_set():
            raise RuntimeError("cannot add work after completion was signaled")
        self._pending += count

    def done(self) -> None:
        if self._pending <= 0:
            raise RuntimeError("done() called more times than add()")
        self._pending -= 1
        if self._pending == 0:
            logger.debug("All classification tasks finished")
            self._completed.set()

    def spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        """Run coro as a tracked task; it counts as pending until it finishes."""
        self.add()
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            exc = task.exception()
            logger.debug(f"Classification task failed: {exc!r}")
            self.fail(
                ClassificationError("A commit could not be classified", repr(exc))
            )
        self.done()

    async def emit(self, record: ChangeRecord) -> None:
        """Hand a finished record to the consumer, waiting while the queue is full."""
        await self._queue.put(record)

    def fail(self, error: BaseException) -> None:
        self._errors.put_nowait(error)

    async def run(
        self, backend: "SourceBackend", from_ref: str, to_ref: str
    ) -> list[ChangeRecord]:
        """
        Let backend schedule its tasks, then collect everything they emit.

        The backend holds one pending token while scheduling. A setup error
        from the backend propagates before any record is collected.
        """
        self.add()
        try:
            await backend.process(self, from_ref, to_ref)
        except BaseException:
            await self.shutdown()
            raise
        finally:
            self.done()
        return await self.collect()

    async def collect(self) -> list[ChangeRecord]:
        """
        Drain records until completion is signaled or an error is reported.

        Records are returned in arrival order, which is arbitrary.
        """
        records: list[ChangeRecord] = []
        done_wait = asyncio.create_task(self._completed.wait())
        error_wait = asyncio.create_task(self._errors.get())
        record_wait: asyncio.Task | None = None

        try:
            while True:
                record_wait = asyncio.create_task(self._queue.get())
                finished, _ = await asyncio.wait(
                    {record_wait, done_wait, error_wait},
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if record_wait in finished:
                    records.append(record_wait.result())
                    record_wait = None

                if error_wait in finished:
                    raise error_wait.result()

                if done_wait in finished:
                    # completion only fires after every producer's put returned
                    while not self._queue.empty():
                        records.append(self._queue.get_nowait())
                    if not self._errors.empty():
                        raise self._errors.get_nowait()
                    return records
        finally:
            for waiter in (record_wait, done_wait, error_wait):
                if waiter is not None and not waiter.done():
                    waiter.cancel()

    async def shutdown(self) -> None:
        """Cancel tasks still in flight after an aborted run."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
