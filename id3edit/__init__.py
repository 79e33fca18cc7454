# Copyright (C) 2026  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""id3edit reads, queries and rewrites ID3v2.3 tags in MP3 files.

::

    import id3edit
    tag = id3edit.ID3("song.mp3")
    print(tag.get_text("TIT2"))
    tag.set_text("TIT2", "New Title")
    tag.save()

The audio data after the tag is never interpreted, it gets copied
verbatim when the file is rewritten. Only ID3v2.3 tags are supported.
"""

from ._util import ID3EditError, error, ID3NoHeaderError, NotATag, \
    ID3UnsupportedVersionError, CorruptTagError, TruncatedStreamError, \
    EncodingRangeError, InvalidArgument, decode_synchsafe, \
    encode_synchsafe, BitPaddedInt
from ._frames import Frame, read_frame, write_frame
from ._tags import ID3Header, ExtendedHeader, ID3Tags, read_tag, \
    write_tag, encode_text
from ._text import render_frame_data
from ._file import ID3, rewrite_file, render_tag

version = (1, 0, 0)
"""Version tuple."""

version_string = ".".join(map(str, version))
"""Version string."""

# support open(filename) as interface
Open = ID3

__all__ = [
    "ID3EditError", "error", "ID3NoHeaderError", "NotATag",
    "ID3UnsupportedVersionError", "CorruptTagError", "TruncatedStreamError",
    "EncodingRangeError", "InvalidArgument", "decode_synchsafe",
    "encode_synchsafe", "BitPaddedInt", "Frame", "read_frame",
    "write_frame", "ID3Header", "ExtendedHeader", "ID3Tags", "read_tag",
    "write_tag", "encode_text", "render_frame_data", "ID3", "rewrite_file",
    "render_tag", "Open", "version", "version_string",
]
