import os
import sys
import struct
import contextlib
from io import StringIO
from tempfile import mkstemp
from unittest import TestCase as BaseTestCase

try:
    import pytest
except ImportError:
    raise SystemExit("pytest missing: sudo apt-get install python3-pytest")

from id3edit import encode_synchsafe


_fs_enc = sys.getfilesystemencoding()
if "öäü".encode(_fs_enc, "replace").decode(_fs_enc) != u"öäü":
    raise RuntimeError("This test suite needs a unicode locale encoding. "
                       "Try setting LANG=C.UTF-8")


AUDIO = b"\xff\xfb\x90\x64" + bytes(range(256)) * 4 + b"\x00\xff\x00ID3"
"""Fake MPEG data following the tag, contains bytes that look like tag
data on purpose"""


def make_frame(frame_id, data, flags=0):
    """Raw bytes of a frame"""

    return struct.pack(">4sIH", frame_id, len(data), flags) + data


def make_tag(frames=(), padding=0, ext=None, flags=0, size=None,
             version=3):
    """Raw bytes of a tag.

    frames is a list of (id, data) tuples, ext the raw extended header.
    size overrides the declared tag size.
    """

    body = b"".join(make_frame(i, d) for i, d in frames)
    if ext is not None:
        flags |= 0x40
        body = ext + body
    body += b"\x00" * padding
    if size is None:
        size = len(body)
    return (struct.pack(">3sBBB", b"ID3", version, 0, flags) +
            encode_synchsafe(size) + body)


def get_temp_mp3(data):
    """Returns the path of a new .mp3 file containing data"""

    fd, filename = mkstemp(suffix="öäü.mp3")
    with os.fdopen(fd, "wb") as h:
        h.write(data)
    return filename


def get_temp_empty(ext=""):
    """Returns an empty file with the extension"""

    fd, filename = mkstemp(suffix=ext)
    os.close(fd)
    return filename


def read_file(filename):
    with open(filename, "rb") as h:
        return h.read()


@contextlib.contextmanager
def capture_output():
    """
    with capture_output() as (stdout, stderr):
        some_action()
    print stdout.getvalue(), stderr.getvalue()
    """

    err = StringIO()
    out = StringIO()
    old_err = sys.stderr
    old_out = sys.stdout
    sys.stderr = err
    sys.stdout = out

    try:
        yield (out, err)
    finally:
        sys.stderr = old_err
        sys.stdout = old_out


class TestCase(BaseTestCase):

    def assertReallyEqual(self, a, b):
        self.assertEqual(a, b)
        self.assertEqual(b, a)
        self.assertTrue(a == b)
        self.assertTrue(b == a)
        self.assertFalse(a != b)
        self.assertFalse(b != a)


def unit(run=(), exitfirst=False, quality=True):
    """Runs the test suite with pytest, returns the exit status.

    run is a list of -k patterns, quality=False deselects the
    flake8/pycodestyle/pyflakes checks.
    """

    args = [os.path.dirname(os.path.abspath(__file__))]
    if run:
        args += ["-k", " or ".join(run)]
    if exitfirst:
        args.append("-x")
    if not quality:
        args += ["-m", "not quality"]
    return pytest.main(args=args)
