import io
import time

import pytest

from jobpool.timing import Stopwatch, formatElapsed
from jobpool.utils import MAX_THREADS, autoDecode, cpuCount, utcNow, writeBytes


@pytest.mark.parametrize(("value", "encoding"), [
    (b"Waiting for '\xe2\x9d\xaf|[Pp]db' in session "
     b"routing-enabled-structure_0_64\n(Pdb++)\n", "utf-8"),
    (b"hi there", "ascii"),
])
def testAutoDecode(value, encoding):
    assert value.decode(encoding) == autoDecode(value)


def testAutoDecodeEmpty():
    assert autoDecode(b"") == ""


def testWriteBytesBinary():
    out = io.BytesIO()
    writeBytes(out, b"abc\n")
    writeBytes(out, b"")
    assert out.getvalue() == b"abc\n"


def testWriteBytesKeepsTextOrder():
    out = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    out.write("first\n")
    writeBytes(out, b"second\n")
    out.flush()
    assert out.buffer.getvalue() == b"first\nsecond\n"


def testWriteBytesTextOnly():
    out = io.StringIO()
    writeBytes(out, b"plain\n")
    assert out.getvalue() == "plain\n"


def testCpuCount():
    assert 1 <= cpuCount() <= MAX_THREADS


def testUtcNowIsAware():
    assert utcNow().utcoffset().total_seconds() == 0


@pytest.mark.parametrize(("elapsedNs", "expected"), [
    (0, "0.000000000s"),
    (999999999, "0.999999999s"),
    (3000000007, "3.000000007s"),
    (-5, "0.000000000s"),
])
def testFormatElapsed(elapsedNs, expected):
    assert expected == formatElapsed(elapsedNs)


def testStopwatch():
    watch = Stopwatch()
    time.sleep(0.01)
    assert watch.elapsedNs() >= 5 * 1000 * 1000
    assert watch.startTime.tzinfo is not None
