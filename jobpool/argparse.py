import os

from .config import DEFAULT_RC_FILE


def addArgumentParserBaseFlags(parser):
    '''
    Flags that only change how jobpool reports, never what it runs: log
    verbosity, the extra log file and the rc-file location.

    Provides the reporting flags required by the Config class.
    '''
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        help="Increase verbosity (multiple times for more verbose)",
        action="append_const",
        const=1)
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only print jobpool errors, no warnings")
    parser.add_argument(
        "-l",
        "--log",
        metavar="FILE",
        help="Also log to FILE (always at info level)")
    parser.add_argument("--rc-file", dest="rcFile",
                        help="Specify path to rc-file (default=\"%(default)s\")",
                        default=os.getenv('JOBPOOL_RC_FILE', DEFAULT_RC_FILE))
