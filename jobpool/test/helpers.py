from contextlib import contextmanager
import io
import logging
import sys
import threading

from jobpool.domain import ExecutionOutcome, Job, JobResult
from jobpool.utils import utcNow


class RecordingHandler(logging.Handler):
    def __init__(self):
        super(RecordingHandler, self).__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    def messages(self, level=None):
        return [r.getMessage() for r in self.records
                if level is None or r.levelno == level]


def recordingLogger(name):
    '''
    A private logger per test, so log assertions do not depend on global
    logging state.
    '''
    logger = logging.getLogger("jobpool-test." + name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RecordingHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, handler


class FakeRunner(object):
    '''
    Stands in for CommandRunner: records which thread ran each job and
    returns the outcome registered for the job text (success otherwise).
    '''

    def __init__(self, outcomes=None, delay=None):
        self.outcomes = outcomes or {}
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def run(self, job):
        with self._lock:
            self.calls.append((job, threading.current_thread().name))
        if self.delay is not None:
            self.delay(job)
        outcome = self.outcomes.get(job.text, ExecutionOutcome(code=0))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def makeResult(text, code=0, stdout=b"", stderr=b"", seq=0, worker=0,
               elapsedNs=1500000000, signal=None):
    return JobResult(
        job=Job(seq, text),
        worker=worker,
        startTime=utcNow(),
        elapsedNs=elapsedNs,
        outcome=ExecutionOutcome(code=code, stdout=stdout, stderr=stderr,
                                 signal=signal))


@contextmanager
def capturedOutput():
    ''' Used to capture stdout or stderr, including raw bytes written to
    their buffers.
    eg.
    with capturedOutput() as (out, err):
        print("foo")

    self.assertEqual(out.getvalue(), "foo\\n")
    '''
    newOut = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    newErr = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    oldOut, oldErr = sys.stdout, sys.stderr
    try:
        sys.stdout, sys.stderr = newOut, newErr
        yield _Captured(newOut), _Captured(newErr)
    finally:
        sys.stdout, sys.stderr = oldOut, oldErr


class _Captured(object):
    def __init__(self, stream):
        self._stream = stream

    def getvalue(self):
        self._stream.flush()
        return self._stream.buffer.getvalue().decode("utf-8")
