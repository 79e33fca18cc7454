"""Helpers for fuzzing the tag reader and writer with AFL.

    python fuzztools.py seeds DIR      write starting inputs to DIR
    python fuzztools.py crashes DIR    re-run and group the crashes
                                       found in the AFL output DIR
"""

import collections
import glob
import os
import sys
import traceback
from io import BytesIO

from id3edit import error, read_tag, render_tag


def _tag(frames, flags=0, ext=b"", padding=0):
    body = ext + b"".join(
        fid + len(data).to_bytes(4, "big") + b"\x00\x00" + data
        for fid, data in frames) + b"\x00" * padding
    size = len(body)
    synchsafe = bytes((size >> s) & 0x7F for s in (21, 14, 7, 0))
    return b"ID3\x03\x00" + bytes([flags]) + synchsafe + body


SEEDS = [
    _tag([(b"TIT2", b"\x00Hello World")]),
    _tag([(b"TPE1", b"\x01\xff\xfe" + "Hi".encode("utf-16-le"))],
         padding=16),
    _tag([(b"TALB", b"\x00a\xff\xfeb\x00\x00\x00c")]),
    _tag([(b"APIC", b"\x00image/png\x00\x03\x00\x89PNG")],
         flags=0x40, ext=b"\x00\x00\x00\x06\x00\x00\x00\x00\x00\x00"),
]


def run(f):
    try:
        tag = read_tag(f)
    except error:
        return

    for frame in tag:
        frame.render()

    # a tag read from a file can still be impossible to write back
    try:
        data = render_tag(tag)
    except error:
        return

    new = read_tag(BytesIO(data))
    assert new.frames == tag.frames
    assert new.padding == 0
    assert new.header.size == tag.header.size


def run_all(data):
    run(BytesIO(data))


def write_seeds(directory):
    os.makedirs(directory, exist_ok=True)
    for i, seed in enumerate(SEEDS):
        with open(os.path.join(directory, "seed%d.mp3" % i), "wb") as h:
            h.write(seed)


def group_crashes(result_path):
    """Re-runs every crash AFL found and groups them by exception type
    and the line raising it.
    """

    groups = collections.defaultdict(list)
    pattern = os.path.join(result_path, "**", "crashes", "id:*")
    for path in glob.glob(pattern, recursive=True):
        with open(path, "rb") as h:
            data = h.read()
        try:
            run_all(data)
        except Exception as e:
            where = traceback.extract_tb(e.__traceback__)[-1]
            key = (type(e).__name__, where.filename, where.lineno)
            groups[key].append((path, str(e)))

    if not groups:
        print("No crashes found")
        return

    for (name, filename, lineno), crashes in sorted(groups.items()):
        print("%s at %s:%d (%d inputs)" % (
            name, filename, lineno, len(crashes)))
        for path, message in crashes:
            print("    %s: %s" % (path, message))


if __name__ == "__main__":
    command, directory = sys.argv[1:3]
    if command == "seeds":
        write_seeds(directory)
    elif command == "crashes":
        group_crashes(directory)
    else:
        raise SystemExit("unknown command %r" % command)
