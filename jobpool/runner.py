import logging
import os
from subprocess import DEVNULL, PIPE, run

from .domain import ExecutionOutcome

LOG = logging.getLogger(__name__)


def defaultShell():
    if os.name == 'nt':
        return "powershell"
    return "sh"


class CommandRunner(object):
    """
    Runs one job to completion in the calling thread.

    With a shell the job text is handed to `<shell> -c`, otherwise it is split
    on whitespace and executed directly. Failing to create the process is
    reported as a failed outcome rather than raised, so a worker never dies
    because of a bad job.
    """

    def __init__(self, dryRun=False, shell=None, logger=None):
        self.dryRun = dryRun
        self.shell = shell
        self.log = logger or LOG

    def command(self, job):
        if self.shell is not None:
            return [self.shell, "-c", job.text]
        return job.argv()

    def run(self, job):
        cmd = self.command(job)
        if self.dryRun:
            self.log.debug("dry-run, would run %r", cmd)
            return ExecutionOutcome.dryRun()
        if not cmd:
            self.log.debug("job %d has no program to run", job.seq)
            return ExecutionOutcome.spawnFailure("empty command")

        self.log.debug("execute: %r", cmd)
        try:
            proc = run(cmd, stdin=DEVNULL, stdout=PIPE, stderr=PIPE,
                       check=False)
        except (OSError, ValueError) as err:
            # ValueError: arguments the OS cannot take, eg. embedded NUL
            self.log.debug("spawn failed %s", err, exc_info=True)
            return ExecutionOutcome.spawnFailure(str(err))
        self.log.debug("%r => rc=%d", cmd, proc.returncode)
        return ExecutionOutcome.fromReturnCode(
            proc.returncode, proc.stdout, proc.stderr)
