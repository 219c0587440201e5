"""Scoped wall-clock timing reported through the application log."""

from __future__ import annotations

import time
from typing import Optional

from blockworld.log import LogLevel, TextColor, app_log


class Timer:
    """Measures the time from creation until :meth:`stop`, in milliseconds."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.elapsed_ms: Optional[float] = None
        self.start_time = time.perf_counter()

    def stop(self) -> float:
        """Log and return the milliseconds elapsed since creation."""
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000.0
        app_log().print(
            LogLevel.DEBUG, TextColor.GREEN, "<%s> took %f ms", self.name, self.elapsed_ms
        )
        return self.elapsed_ms

    def __enter__(self) -> "Timer":
        return self

    def __exit__(self, *args) -> None:
        self.stop()