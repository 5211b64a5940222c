import io
import os
import tempfile
import unittest

import pytest

from jobpool.sources import JobSourceError, readJobs, splitJobLines


@pytest.mark.parametrize(("data", "expected"), [
    (b"", []),
    (b"a\nb\n", ["a", "b"]),
    (b"a\nb", ["a", "b"]),
    (b"a\r\nb\r\n", ["a", "b"]),
    (b"a\n\n  \nb\n", ["a", "", "  ", "b"]),
    (b"\n", [""]),
    (b"echo \xe2\x94\x80\n", ["echo ─"]),
])
def testSplitJobLines(data, expected):
    assert expected == splitJobLines(data)


def testUndecodableLineIsSkipped():
    assert ["a", "c"] == splitJobLines(b"a\nb\xff\nc\n")


class TestReadJobs(unittest.TestCase):
    def testCliJobsTakePrecedence(self):
        with tempfile.NamedTemporaryFile() as tmp:
            stdin = io.BytesIO(b"from stdin\n")
            self.assertEqual(["x", ""], readJobs(["x", ""], tmp.name, stdin))

    def testFile(self):
        with tempfile.NamedTemporaryFile(mode="wb") as tmp:
            tmp.write(b"echo 1\necho 2")
            tmp.flush()
            stdin = io.BytesIO(b"from stdin\n")
            self.assertEqual(["echo 1", "echo 2"],
                             readJobs([], tmp.name, stdin))

    def testMissingFile(self):
        with tempfile.TemporaryDirectory() as tmpDir:
            missing = os.path.join(tmpDir, "nope")
            with self.assertRaisesRegex(JobSourceError, "Could not open"):
                readJobs([], missing)

    def testDirectoryIsNotAJobFile(self):
        with tempfile.TemporaryDirectory() as tmpDir:
            with self.assertRaises(JobSourceError):
                readJobs([], tmpDir)

    def testBinaryStdin(self):
        self.assertEqual(["a", "b"], readJobs([], None, io.BytesIO(b"a\nb")))

    def testTextStdinUsesBuffer(self):
        stdin = io.TextIOWrapper(io.BytesIO(b"one\ntwo\n"), encoding="utf-8")
        self.assertEqual(["one", "two"], readJobs(None, None, stdin))

    def testPureTextStdin(self):
        self.assertEqual(["one", ""], readJobs([], None, io.StringIO("one\n\n")))

    def testStdinReadError(self):
        stdin = io.BytesIO(b"x")
        stdin.close()
        with self.assertRaisesRegex(JobSourceError, "standard input"):
            readJobs([], None, stdin)
