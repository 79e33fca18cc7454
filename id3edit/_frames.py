# Copyright (C) 2005  Michael Urman
#               2026  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import struct
from typing import BinaryIO

from ._text import render_frame_data
from ._util import EncodingRangeError, TruncatedStreamError, read_full

FRAME_HEADER_SIZE = 10

_HEADER = struct.Struct(">4sIH")


def _bytes2key(b: bytes) -> str:
    assert isinstance(b, bytes)

    return b.decode("latin1")


class Frame:
    """Fundamental unit of ID3 data.

    A frame is a 4 byte id, the payload size (a plain big endian int, not
    synchsafe), 2 bytes of flags and the raw payload. The payload is kept
    as is and only interpreted for display.

    Attributes:
        id (bytes): the frame id, e.g. b"TIT2"
        flags (int): the frame flags, written back verbatim
        data (bytes): the payload
    """

    FLAG23_COMPRESS: int = 0x0080
    FLAG23_ENCRYPT: int = 0x0040

    id: bytes
    flags: int
    data: bytes

    def __init__(self, id: bytes, data: bytes = b"", flags: int = 0):
        if len(id) != 4:
            raise ValueError("frame id must be 4 bytes, not %r" % id)
        self.id = bytes(id)
        self.data = bytes(data)
        self.flags = flags

    @property
    def size(self) -> int:
        """The payload size in bytes"""

        return len(self.data)

    @property
    def FrameID(self) -> str:
        """The frame id as text"""

        return _bytes2key(self.id)

    f_compressed = property(lambda s: bool(s.flags & s.FLAG23_COMPRESS))
    f_encrypted = property(lambda s: bool(s.flags & s.FLAG23_ENCRYPT))

    @property
    def is_padding(self) -> bool:
        return not self.id.strip(b"\x00")

    @classmethod
    def from_header(cls, header: bytes) -> tuple[Frame, int]:
        """Parse a 10 byte frame header.

        Returns a frame without payload and the declared payload size.
        """

        if len(header) != FRAME_HEADER_SIZE:
            raise TruncatedStreamError(
                "frame header needs %d bytes, got %d" % (
                    FRAME_HEADER_SIZE, len(header)))
        id_, size, flags = _HEADER.unpack(header)
        return cls(id_, flags=flags), size

    def header_bytes(self) -> bytes:
        try:
            return _HEADER.pack(self.id, self.size, self.flags)
        except struct.error as e:
            raise EncodingRangeError(
                "can't write frame %r: %s" % (self.FrameID, e))

    def render(self) -> str:
        """The payload as display text"""

        # the trailing NULL mimics a payload buffer allocated one byte
        # larger than the payload
        return render_frame_data(self.FrameID, self.data + b"\x00", self.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return (self.id, self.flags, self.data) == \
            (other.id, other.flags, other.data)

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return "%s(%r, %r, flags=%#06x)" % (
            type(self).__name__, self.id, self.data, self.flags)

    def pprint(self) -> str:
        return "%s=%s" % (self.FrameID, self.render())


def read_frame(fileobj: BinaryIO) -> Frame:
    """Read one frame, header and payload, from the current position.

    Raises TruncatedStreamError if the stream ends early.
    """

    frame, size = Frame.from_header(fileobj.read(FRAME_HEADER_SIZE))
    frame.data = read_full(fileobj, size)
    return frame


def write_frame(frame: Frame, fileobj: BinaryIO) -> None:
    """Write the frame header followed by the payload, unmodified"""

    fileobj.write(frame.header_bytes())
    fileobj.write(frame.data)
