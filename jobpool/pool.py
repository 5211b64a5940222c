import logging
import threading

from .domain import ExecutionOutcome, JobResult
from .queue import CLOSED, ResultChannel
from .timing import Stopwatch
from .utils import MAX_THREADS

LOG = logging.getLogger(__name__)


class WorkerPool(object):
    """
    A fixed number of threads pulling from one JobQueue.

    Each worker sends one JobResult per job it pulled and signals the result
    channel when it exits, so the channel only closes after every worker is
    gone.
    """

    def __init__(self, threads, runner, jobs, logger=None):
        if not 1 <= threads <= MAX_THREADS:
            raise ValueError(
                "worker count must be between 1 and {}, got {}".format(
                    MAX_THREADS, threads))
        self.threads = threads
        self.runner = runner
        self.jobs = jobs
        self.results = ResultChannel(threads)
        self.log = logger or LOG
        self._workers = []

    def start(self):
        if self._workers:
            raise RuntimeError("worker pool already started")
        self.log.debug("Starting %d worker threads", self.threads)
        for index in range(self.threads):
            worker = threading.Thread(
                target=self._work,
                args=(index,),
                name="jobpool-worker-{}".format(index),
                daemon=True)
            self._workers.append(worker)
            worker.start()

    def _work(self, index):
        try:
            while True:
                job = self.jobs.pull()
                if job is CLOSED:
                    self.log.debug("worker %d: queue closed", index)
                    return
                self.log.debug("worker %d: starting job '%s'", index, job.text)
                self.results.send(self._runOne(index, job))
        finally:
            self.results.producerDone()

    def _runOne(self, index, job):
        watch = Stopwatch()
        try:
            outcome = self.runner.run(job)
        except Exception as err:  # pylint: disable=broad-except
            self.log.error("worker %d: job '%s' raised %r", index, job.text,
                           err, exc_info=True)
            outcome = ExecutionOutcome.spawnFailure(str(err) or repr(err))
        return JobResult(
            job=job,
            worker=index,
            startTime=watch.startTime,
            elapsedNs=watch.elapsedNs(),
            outcome=outcome)

    def alive(self):
        return sum(1 for worker in self._workers if worker.is_alive())

    def join(self, timeout=None):
        for worker in self._workers:
            worker.join(timeout)
