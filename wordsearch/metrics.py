import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordsearch")


class StageTimer:
    """Collects per-stage timing for a single run or request.

    A stage entered more than once (e.g. "search" once per query) accumulates
    its elapsed time, and `counts` records how often it was entered.
    """

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counts: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - t0) * 1000
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed, 1)
            self.counts[name] = self.counts.get(name, 0) + 1
            logger.debug("stage=%s elapsed=%.1fms", name, elapsed)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}

    def log_summary(self):
        for name, ms in self.timings.items():
            logger.info("stage=%s runs=%d elapsed=%.1fms", name, self.counts[name], ms)
        logger.info("total elapsed=%.1fms", self.total_ms)
