import logging
import sys

RUN_LOGGER_NAME = "jobpool"
TIME_FMT = "%Y-%m-%dT%H:%M:%S%z"


def getLogger(name):
    return logging.getLogger(name)


def levelForVerbosity(verbosity, quiet=False):
    if quiet:
        return logging.ERROR
    if not verbosity:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup(verbosity=0, quiet=False, logFile=None, stream=None):
    '''
    Build the logger handed to the worker pool and the result aggregator.

    The terminal handler level follows -q/-v, an optional log file always
    receives INFO and above. Calling this again replaces earlier handlers.
    '''
    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-7s %(threadName)-18s %(message)s',
        datefmt=TIME_FMT)
    logger = logging.getLogger(RUN_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    termLevel = levelForVerbosity(verbosity, quiet)
    term = logging.StreamHandler(stream if stream is not None else sys.stderr)
    term.setLevel(termLevel)
    term.setFormatter(fmt)
    logger.addHandler(term)
    level = termLevel

    if logFile:
        fileHandler = logging.FileHandler(logFile, mode='w', encoding='utf-8')
        fileHandler.setLevel(logging.INFO)
        fileHandler.setFormatter(fmt)
        logger.addHandler(fileHandler)
        level = min(level, logging.INFO)

    logger.setLevel(level)
    logger.propagate = False
    return logger
