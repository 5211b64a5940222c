import logging
import sys

LOG = logging.getLogger(__name__)


class JobSourceError(Exception):
    pass


def splitJobLines(data):
    """
    One job per line. A final line without a newline still counts, blank
    lines are kept as (empty) jobs, and lines that are not UTF-8 are dropped.
    """
    lines = data.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    jobs = []
    for lineno, raw in enumerate(lines, start=1):
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        try:
            jobs.append(raw.decode('utf-8'))
        except UnicodeDecodeError as err:
            LOG.warning("skipping line %d, not valid UTF-8: %s", lineno, err)
    return jobs


def _readAll(fp, what):
    try:
        return fp.read()
    except (OSError, ValueError) as err:
        raise JobSourceError("Could not read jobs from {}: {}".format(
            what, err)) from err


def readJobs(cliJobs, jobsFile=None, stdin=None):
    if cliJobs:
        return list(cliJobs)
    if jobsFile is not None:
        try:
            fp = open(jobsFile, 'rb')
        except OSError as err:
            raise JobSourceError("Could not open jobs file {}: {}".format(
                jobsFile, err)) from err
        with fp:
            data = _readAll(fp, jobsFile)
        return splitJobLines(data)

    if stdin is None:
        stdin = sys.stdin
    data = _readAll(getattr(stdin, 'buffer', stdin), "standard input")
    if isinstance(data, str):
        data = data.encode('utf-8', errors='surrogateescape')
    return splitJobLines(data)
