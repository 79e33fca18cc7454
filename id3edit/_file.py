# Copyright (C) 2005  Michael Urman
#               2006  Lukas Lalinsky
#               2013  Christoph Reiter
#               2026  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from io import BytesIO

from ._tags import (
    TAG_HEADER_SIZE,
    ID3Header,
    ID3Tags,
    read_tag,
    write_tag,
)
from ._util import ID3NoHeaderError, TruncatedStreamError, copy_bytes, error

log = logging.getLogger(__name__)


def render_tag(tag: ID3Tags) -> bytes:
    """The tag as it would be written to a file, without padding"""

    tag.drop_padding()
    fileobj = BytesIO()
    write_tag(tag, fileobj)
    return fileobj.getvalue()


def rewrite_file(tag: ID3Tags, path: str) -> None:
    """Replace the tag at the start of `path` with `tag`.

    The audio data following the old tag (which starts at `tag.offset`)
    is copied verbatim. The new file is assembled next to the original
    and only moved over it once it is complete, so a failure at any
    point leaves the original untouched. Symlinks are followed, the
    file they point to gets replaced.

    Raises:
        id3edit.error: if the tag can't be written or the file can't
            be replaced
    """

    # render first so encoding errors surface before touching any file
    data = render_tag(tag)
    audio_start = tag.offset

    target = os.path.realpath(path)
    dirname, basename = os.path.split(target)
    fd, temp_path = tempfile.mkstemp(
        prefix="." + basename, suffix=".tmp", dir=dirname)
    log.debug("rewriting %s via %s", target, temp_path)
    try:
        with os.fdopen(fd, "wb") as temp:
            temp.write(data)
            with open(target, "rb") as source:
                source.seek(0, 2)
                if source.tell() < audio_start:
                    raise TruncatedStreamError(
                        "%s is smaller than its tag (%d bytes)" % (
                            path, audio_start))
                source.seek(audio_start)
                copied = copy_bytes(source, temp)
            temp.flush()
            os.fsync(temp.fileno())
        log.debug("wrote %d bytes of tag and %d bytes of audio",
                  len(data), copied)
        shutil.copymode(target, temp_path)
        os.replace(temp_path, target)
    except OSError as e:
        _remove(temp_path)
        raise error("can't rewrite %s: %s" % (path, e)) from e
    except BaseException:
        _remove(temp_path)
        raise

    tag.offset = len(data)


def _remove(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class ID3(ID3Tags):
    """ID3(filename=None)

    An ID3v2.3 tag loaded from a file.

    ::

        tag = ID3("song.mp3")
        tag.set_text("TIT2", "Title")
        tag.save()

    Attributes:
        filename (str): the file the tag was loaded from
    """

    __module__ = "id3edit"

    filename: str | None = None

    def __init__(self, filename: str | None = None):
        super().__init__()
        if filename is not None:
            self.load(filename)

    def load(self, filename: str) -> None:
        """Load the tag from a file.

        Raises:
            id3edit.ID3NoHeaderError: if the file doesn't start with a tag
            id3edit.error: if the tag is broken
            OSError: if the file can't be opened
        """

        with open(filename, "rb") as fileobj:
            tag = read_tag(fileobj)

        self.header = tag.header
        self.extended_header = tag.extended_header
        self.frames = tag.frames
        self.padding = tag.padding
        self.offset = tag.offset
        self.filename = filename

    def save(self, filename: str | None = None) -> None:
        """Write the tag back to a file.

        Args:
            filename (str): the file to write to or None to use the one
                the tag was loaded from. Any ID3 tag already present in
                that file gets replaced, everything after it is kept.
        """

        if filename is None:
            filename = self.filename
        if filename is None:
            raise ValueError("no filename given")

        if filename == self.filename:
            rewrite_file(self, filename)
            return

        # the offset belongs to the loaded file, which stays as it is
        offset = self.offset
        self.offset = _tag_size(filename)
        try:
            rewrite_file(self, filename)
        finally:
            self.offset = offset


def _tag_size(filename: str) -> int:
    with open(filename, "rb") as fileobj:
        try:
            header = ID3Header.from_fileobj(fileobj)
        except ID3NoHeaderError:
            return 0
    return TAG_HEADER_SIZE + header.size
