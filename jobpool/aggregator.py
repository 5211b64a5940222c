import logging
import sys

from .utils import writeBytes

LOG = logging.getLogger(__name__)


class HaltOnError(Exception):
    def __init__(self, result, rc=1):
        super(HaltOnError, self).__init__(
            "halting after '{}' failed".format(result.job.text))
        self.result = result
        self.rc = rc


class ResultAggregator(object):
    """
    Sole consumer of the result channel.

    Reports each result as it arrives and folds failures into the exit code:
    the last failure seen wins, unless haltOnError is set, in which case the
    first failure raises HaltOnError.
    """

    def __init__(self, logger=None, dryRun=False, haltOnError=False,
                 stdout=None, stderr=None):
        self.log = logger or LOG
        self.dryRun = dryRun
        self.haltOnError = haltOnError
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.exitCode = 0
        self.count = 0

    def consume(self, results):
        for result in results:
            self.count += 1
            self.handle(result)
        self.log.debug("%d results, exit code %d", self.count, self.exitCode)
        return self.exitCode

    def handle(self, result):
        if self.dryRun:
            return
        outcome = result.outcome
        self.log.info("'%s' took %s", result.job.text, result.elapsedStr())
        if not outcome.success:
            self.log.warning("'%s' exited with %s", result.job.text,
                             outcome.statusStr())
        writeBytes(self.stdout, outcome.stdout)
        writeBytes(self.stderr, outcome.stderr)

        if outcome.success:
            return
        if self.haltOnError:
            raise HaltOnError(result)
        self.exitCode = outcome.exitCode()
