"""
Value objects passed between the job queue, the workers and the result
aggregator.

None of these hold references back into the pool; a JobResult is handed to
the aggregator once and dropped after it has been reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..timing import formatElapsed

SPAWN_FAILURE_CODE = 1
UNKNOWN_STATUS_CODE = 127


@dataclass(frozen=True)
class Job:
    """One command line, tagged with its submission index."""

    seq: int
    text: str

    def argv(self) -> List[str]:
        """Program and arguments for direct execution (whitespace split)."""
        return self.text.split()

    def __str__(self):
        return self.text


@dataclass(frozen=True)
class ExecutionOutcome:
    """What running a single job produced."""

    code: Optional[int]
    stdout: bytes = b""
    stderr: bytes = b""
    signal: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def dryRun(cls) -> "ExecutionOutcome":
        return cls(code=0)

    @classmethod
    def spawnFailure(cls, message: str) -> "ExecutionOutcome":
        """
        Synthetic outcome for a job whose process never started, either
        because the OS refused to create it or the command was empty.
        """
        return cls(code=SPAWN_FAILURE_CODE, error=message)

    @classmethod
    def fromReturnCode(cls, returncode: int, stdout: bytes,
                       stderr: bytes) -> "ExecutionOutcome":
        # subprocess reports death-by-signal as a negative return code
        if returncode < 0:
            return cls(code=None, stdout=stdout, stderr=stderr,
                       signal=-returncode)
        return cls(code=returncode, stdout=stdout, stderr=stderr)

    @property
    def success(self) -> bool:
        return self.code == 0

    def exitCode(self) -> int:
        if self.code is None:
            return UNKNOWN_STATUS_CODE
        return self.code

    def statusStr(self) -> str:
        if self.error is not None:
            return "failed to start: {}".format(self.error)
        if self.signal is not None:
            return "signal {}".format(self.signal)
        return "exit status {}".format(self.code)


@dataclass(frozen=True)
class JobResult:
    job: Job
    worker: int
    startTime: datetime
    elapsedNs: int
    outcome: ExecutionOutcome

    @property
    def success(self) -> bool:
        return self.outcome.success

    def elapsedStr(self) -> str:
        return formatElapsed(self.elapsedNs)
