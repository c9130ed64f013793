"""
Cooperative task queue for multi-frame sequences (walks, attacks, enemy phase).

A task is a generator. Every bare ``yield`` is a "wait one tick" suspension
point; the queue resumes it on the next frame. Only the task at the head of
the queue runs, so sequences never interleave: a queued enemy phase starts
after the current move animation has finished.
"""
from __future__ import annotations
import logging
from collections import deque
from typing import Deque, Generator, Iterator

logger = logging.getLogger(__name__)

Task = Generator[None, None, None]


def wait_ticks(n: int) -> Iterator[None]:
    """``yield from wait_ticks(n)`` suspends the calling task for n frames."""
    for _ in range(n):
        yield


class TaskQueue:
    def __init__(self) -> None:
        self._tasks: Deque[Task] = deque()

    def queue(self, task: Task) -> None:
        self._tasks.append(task)

    def run_until_stall(self) -> None:
        """Advance the head task to its next suspension point."""
        while self._tasks:
            task = self._tasks[0]
            try:
                next(task)
            except StopIteration:
                self._tasks.popleft()
                logger.debug("task finished, %d left", len(self._tasks))
                continue
            return

    @property
    def busy(self) -> bool:
        return bool(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)
