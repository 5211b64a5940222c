#!/usr/bin/env python
import argparse
from importlib import metadata
import os
import sys
from typing import List, Optional

import jobpool.logging

from .aggregator import HaltOnError, ResultAggregator
from .argparse import addArgumentParserBaseFlags
from .config import RC_FILE_HELP, Config, ConfigError
from .pool import WorkerPool
from .queue import JobQueue
from .runner import CommandRunner
from .sources import JobSourceError, readJobs
from .utils import MAX_THREADS

LOG = jobpool.logging.getLogger(__name__)

DESC = """
jobpool - Run shell jobs in parallel

Jobs are taken from the command line, from --file, or one per line from
standard input, and run on a fixed number of worker threads. Each job's
stdout/stderr is printed once it finishes. The exit code is 0 when every job
succeeded, otherwise the exit status of the last job seen failing (127 if it
was killed by a signal). With --halt-on-error the first failure exits with 1
immediately.


Examples:
    # Run two commands at once
    $ jobpool -j2 'sleep 2; echo a' 'sleep 1; echo b'

    # Read jobs from a file, stop on the first failure
    $ jobpool --halt-on-error -f jobs.txt

    # Show what would run
    $ find . -name '*.gz' | sed 's/^/gunzip /' | jobpool --dry-run -vv


Configuration:
    The default configuration file location is `~/.config/jobpoolrc`, but
    can be overwritten using the --rc-file option.

{rcfile}
""".format(rcfile=RC_FILE_HELP)


def threadCount(value):
    try:
        count = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            "invalid job count {!r}".format(value)) from err
    if not 1 <= count <= MAX_THREADS:
        raise argparse.ArgumentTypeError(
            "job count must be between 1 and {}".format(MAX_THREADS))
    return count


def parseArgs(args=None):
    if args is None:
        prog = sys.argv[0]
        args = sys.argv[1:]
    else:
        prog = None

    op = argparse.ArgumentParser(
        prog=os.path.basename(prog) if prog else "jobpool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=DESC)
    op.add_argument("cliJobs", metavar="JOB", nargs="*",
                    help="Command to run (takes precedence over --file/stdin)")

    addArgumentParserBaseFlags(op)

    op.add_argument("--version", action="store_true",
                    help="Print version and exit")
    op.add_argument("-f", "--file", metavar="FILE", dest="jobsFile",
                    help="Read commands from FILE (one command per line)")
    op.add_argument("-j", "--jobs", metavar="THREADS", type=threadCount,
                    help="Number of parallel executions (default=number of "
                    "CPUs)")
    op.add_argument("--dry-run", dest="dryRun", action="store_true",
                    help="Perform a trial run, only print what would be "
                    "done (with -vv)")
    shell = op.add_mutually_exclusive_group()
    shell.add_argument("--shell", metavar="PATH",
                       help="Run each job as `PATH -c JOB` (default=sh)")
    shell.add_argument("--no-shell", dest="noShell", action="store_true",
                       help="Split jobs on whitespace and run them without a "
                       "shell")
    op.add_argument("--halt-on-error", dest="haltOnError",
                    action="store_true",
                    help="Stop execution if an error occurs in any thread")

    return op.parse_args(args)


def runJobs(jobTexts: List[str], config: Config, logger,
            stdout=None, stderr=None) -> int:
    """
    Push every job through a fresh worker pool and return the exit code.

    Raises HaltOnError on the first failure when halt-on-error is set; the
    workers are daemon threads and are left behind.
    """
    jobs = JobQueue()
    runner = CommandRunner(dryRun=config.dryRun, shell=config.shell,
                           logger=logger)
    pool = WorkerPool(config.threads, runner, jobs, logger=logger)
    aggregator = ResultAggregator(
        logger=logger,
        dryRun=config.dryRun,
        haltOnError=config.haltOnError,
        stdout=stdout,
        stderr=stderr)

    with jobs.producer() as producer:
        pool.start()
        for text in jobTexts:
            LOG.debug("queue job %r", text)
            producer.push(text)
    logger.debug("queued %d jobs on %d workers", len(jobTexts), pool.threads)
    return aggregator.consume(pool.results)


def impl_main(args: Optional[List[str]] = None) -> int:
    options = parseArgs(args)
    if options.version:
        version = metadata.version("shell-jobpool")
        print(f"Version {version}")
        return 0

    config = Config(options)
    try:
        logger = jobpool.logging.setup(
            config.verbosity, quiet=config.quiet, logFile=config.logFile)
    except OSError as error:
        raise ConfigError("Could not create log file {}: {}".format(
            config.logFile, error)) from error
    logger.debug("starting with args %s", options)
    logger.debug("python: %s", sys.version)

    jobTexts = readJobs(options.cliJobs, options.jobsFile)
    return runJobs(jobTexts, config, logger)


def main(args=None):
    try:
        rc = impl_main(args=args)
    except (ConfigError, JobSourceError) as error:
        print("Error:", error, file=sys.stderr)
        sys.exit(1)
    except HaltOnError as halt:
        LOG.debug("halt: %s", halt)
        sys.exit(halt.rc)
    sys.exit(rc)


if __name__ == "__main__":
    main()
