import configparser
import os

from .runner import defaultShell
from .utils import MAX_THREADS, cpuCount

DEFAULT_RC_FILE = "~/.config/jobpoolrc"
NO_SHELL = "none"

RC_FILE_HELP = """\
Sample rcfile:
    [run]
    jobs = 8                # default=number of CPUs
    shell = /bin/bash|none  # default=sh, none runs jobs without a shell
    halt on error = true|false  # default=false
    [log]
    file = ~/jobpool.log    # same as --log
"""


def _getConfig(cfgParser, section, option, defaultValue=None):
    if not cfgParser.has_section(section):
        return defaultValue
    if not cfgParser.has_option(section, option):
        return defaultValue
    return cfgParser.get(section, option)


def _getBoolConfig(cfgParser, section, option, default):
    val = _getConfig(cfgParser, section, option, None)
    if val is None:
        return default
    if val.lower() == 'true':
        return True
    elif val.lower() == 'false':
        return False
    else:
        raise ConfigError(
            "RC file has invalid \"{section}.{option}\" setting {optionVal}.  Valid "
            "options: true, false".format(
                section=section,
                option=option,
                optionVal=val))


def _getIntConfig(cfgParser, section, option, default, low, high):
    val = _getConfig(cfgParser, section, option, None)
    if val is None:
        return default
    try:
        intVal = int(val)
    except ValueError:
        intVal = None
    if intVal is None or not low <= intVal <= high:
        raise ConfigError(
            "RC file has invalid \"{section}.{option}\" setting {optionVal}.  Valid "
            "options: {low}..{high}".format(
                section=section,
                option=option,
                optionVal=val,
                low=low,
                high=high))
    return intVal


class ConfigError(Exception):
    pass


class Config(object):
    """
    Run settings: command line options first, then the rc file, then
    built-in defaults.
    """
    validConfig = {
        'run': {'jobs', 'shell', 'halt on error'},
        'log': {'file'},
    }

    def _validateConfigParser(self, cfgParser):
        cfgSections = set(cfgParser.sections())
        unknownSections = cfgSections - set(self.validConfig.keys())
        if unknownSections:
            raise ConfigError(
                "RC file has unknown configuration sections: {}".format(
                    ", ".join(sorted(unknownSections))))
        for section in cfgSections:
            cfgValues = set(cfgParser.options(section))
            unknownOptions = cfgValues - self.validConfig[section]
            if unknownOptions:
                raise ConfigError(
                    "RC file has unknown configuration options in "
                    "section \"{}\": {}".format(
                        section, ", ".join(sorted(unknownOptions))))

    def __init__(self, options):
        self.options = options

        rcFile = os.path.expanduser(options.rcFile)
        cfgParser = configparser.RawConfigParser(
            inline_comment_prefixes=("#",))
        try:
            cfgParser.read(rcFile)
        except configparser.Error as error:
            raise ConfigError("RC file {} is malformed: {}".format(
                rcFile, error)) from error
        self._validateConfigParser(cfgParser)

        self._rcJobs = _getIntConfig(
            cfgParser, 'run', 'jobs', None, 1, MAX_THREADS)
        self._rcShell = _getConfig(cfgParser, 'run', 'shell', None)
        self._rcHaltOnError = _getBoolConfig(
            cfgParser, 'run', 'halt on error', False)
        self._rcLogFile = _getConfig(cfgParser, 'log', 'file', None)

    @property
    def verbosity(self):
        return len(self.options.verbose) if self.options.verbose else 0

    @property
    def quiet(self):
        return bool(self.options.quiet)

    @property
    def threads(self):
        if self.options.jobs is not None:
            return self.options.jobs
        if self._rcJobs is not None:
            return self._rcJobs
        return cpuCount()

    @property
    def shell(self):
        """Shell path for `<shell> -c <job>`, or None for direct execution."""
        if self.options.noShell:
            return None
        if self.options.shell:
            return self.options.shell
        if self._rcShell is not None:
            if self._rcShell.lower() == NO_SHELL:
                return None
            return os.path.expanduser(self._rcShell)
        return defaultShell()

    @property
    def dryRun(self):
        return bool(self.options.dryRun)

    @property
    def haltOnError(self):
        return bool(self.options.haltOnError) or self._rcHaltOnError

    @property
    def logFile(self):
        logFile = self.options.log or self._rcLogFile
        if logFile:
            return os.path.expanduser(logFile)
        return None
