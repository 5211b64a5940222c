"""
Domain values for jobpool.

This package holds plain data with no knowledge of threads or processes.
"""

from .job import (
    SPAWN_FAILURE_CODE,
    UNKNOWN_STATUS_CODE,
    ExecutionOutcome,
    Job,
    JobResult,
)

__all__ = [
    "ExecutionOutcome",
    "Job",
    "JobResult",
    "SPAWN_FAILURE_CODE",
    "UNKNOWN_STATUS_CODE",
]
