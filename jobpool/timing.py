"""Wall-clock timing for job invocations."""

import time

from .utils import utcNow

NS_PER_SEC = 1000 * 1000 * 1000


def formatElapsed(elapsedNs: int) -> str:
    seconds, remainder = divmod(max(elapsedNs, 0), NS_PER_SEC)
    return f"{seconds}.{remainder:09d}s"


class Stopwatch(object):
    def __init__(self):
        self.startTime = utcNow()
        self._origin = time.perf_counter_ns()

    def elapsedNs(self) -> int:
        return time.perf_counter_ns() - self._origin
