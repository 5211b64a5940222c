import datetime
import io
import logging
import os

import chardet
import dateutil.tz

MAX_THREADS = 4096

LOG = logging.getLogger(__name__)


def utcNow():
    return datetime.datetime.now(dateutil.tz.tzutc())


def cpuCount():
    count = os.cpu_count() or 1
    return min(count, MAX_THREADS)


def autoDecode(byteArray):
    detected = chardet.detect(byteArray)
    encoding = detected['encoding']
    if detected['confidence'] < 0.5:  # very arbitrary
        encoding = 'utf-8'
    try:
        return byteArray.decode(encoding, errors='replace')
    except LookupError:
        LOG.debug("unknown codec %r, using utf-8", encoding)
        return byteArray.decode('utf-8', errors='replace')


def writeBytes(stream, data):
    """Write captured job output to stream as a single write."""
    if not data:
        return
    if isinstance(stream, io.TextIOBase):
        binary = getattr(stream, 'buffer', None)
        if binary is None:
            stream.write(autoDecode(data))
            stream.flush()
            return
        # keep anything already written through the text layer ahead of us
        stream.flush()
        stream = binary
    stream.write(data)
    stream.flush()
