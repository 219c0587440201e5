"""A fixed pool of worker threads draining a shared task queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, List

from blockworld.log import LogLevel, TextColor, app_log

Task = Callable[[], None]


class ThreadList:
    """Worker threads that run pushed tasks in order of arrival.

    Closing waits until every queued task has run.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("thread count must not be negative")
        self._condition = threading.Condition()
        self._work: Deque[Task] = deque()
        self._terminating = False
        self._threads: List[threading.Thread] = [
            threading.Thread(target=self._execution_loop, args=(worker_id,), daemon=True)
            for worker_id in range(size)
        ]
        for thread in self._threads:
            thread.start()

    def push_task(self, task: Task) -> None:
        """Queue ``task`` for the next free worker."""
        with self._condition:
            if self._terminating:
                raise RuntimeError("thread list is closed")
            self._work.append(task)
            self._condition.notify()

    def close(self) -> None:
        """Stop accepting tasks, finish queued work and join the workers."""
        with self._condition:
            self._terminating = True
            self._condition.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def __enter__(self) -> "ThreadList":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _execution_loop(self, worker_id: int) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._work or self._terminating)
                if not self._work and self._terminating:
                    app_log().print(
                        LogLevel.DEBUG, TextColor.GREEN, "<Thread %d closed.>", worker_id
                    )
                    return
                task = self._work.popleft()
            try:
                task()
            except Exception as error:  # a failing task must not stop the worker
                app_log().print(
                    LogLevel.ERROR, TextColor.BRIGHT_RED, "Task failed: %s", repr(error)
                )