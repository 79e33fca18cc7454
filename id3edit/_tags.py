# Copyright (C) 2005  Michael Urman
#               2026  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import logging
import struct
import zlib
from collections.abc import Iterator
from io import BytesIO
from typing import BinaryIO

from ._frames import FRAME_HEADER_SIZE, Frame, write_frame
from ._util import (
    CorruptTagError,
    ID3NoHeaderError,
    ID3UnsupportedVersionError,
    InvalidArgument,
    TruncatedStreamError,
    cdata,
    decode_synchsafe,
    encode_synchsafe,
    read_full,
)

log = logging.getLogger(__name__)

TAG_HEADER_SIZE = 10

TEXT_ENCODING_LATIN1 = b"\x00"
TEXT_ENCODING_UTF16 = b"\x01"


class ID3Header:
    """The 10 byte header at the start of every ID3v2 tag.

    Attributes:
        version_major (int): 3 for ID3v2.3
        version_minor (int): the revision
        flags (int): the header flags, written back verbatim
        size (int): size of the tag excluding this header
    """

    F_UNSYNCH = 0x80
    F_EXTENDED = 0x40
    F_EXPERIMENTAL = 0x20

    id = b"ID3"

    def __init__(self, version_major: int = 3, version_minor: int = 0,
                 flags: int = 0, size: int = 0):
        self.version_major = version_major
        self.version_minor = version_minor
        self.flags = flags
        self.size = size

    @classmethod
    def from_fileobj(cls, fileobj: BinaryIO) -> ID3Header:
        data = fileobj.read(TAG_HEADER_SIZE)
        if data[:3] != cls.id:
            raise ID3NoHeaderError("doesn't start with an ID3 tag")
        if len(data) != TAG_HEADER_SIZE:
            raise TruncatedStreamError(
                "ID3 header too small (%d bytes)" % len(data))

        id3, vmaj, vrev, flags, size = struct.unpack('>3sBBB4s', data)
        if vmaj != 3:
            raise ID3UnsupportedVersionError(
                "ID3v2.%d not supported" % vmaj)

        return cls(vmaj, vrev, flags, decode_synchsafe(size))

    @property
    def version(self) -> tuple[int, int, int]:
        return (2, self.version_major, self.version_minor)

    f_unsynch = property(lambda s: bool(s.flags & s.F_UNSYNCH))
    f_extended = property(lambda s: bool(s.flags & s.F_EXTENDED))
    f_experimental = property(lambda s: bool(s.flags & s.F_EXPERIMENTAL))

    def to_bytes(self) -> bytes:
        return struct.pack(
            '>3sBBB4s', self.id, self.version_major, self.version_minor,
            self.flags, encode_synchsafe(self.size))

    def __repr__(self) -> str:
        return "<%s version=%s flags=%#04x size=%d>" % (
            type(self).__name__, ".".join(map(str, self.version)),
            self.flags, self.size)


class ExtendedHeader:
    """The optional ID3v2.3 extended header.

    Attributes:
        header_size (int): size of the extended header excluding the size
            field itself, 6 or 10 (with CRC)
        flags (int): 0x8000 if a CRC follows
        padding_size (int): size of the padding after the frames
        crc (int): CRC-32 of the frame data or None
    """

    F_CRC = 0x8000

    def __init__(self, header_size: int = 6, flags: int = 0,
                 padding_size: int = 0, crc: int | None = None):
        self.header_size = header_size
        self.flags = flags
        self.padding_size = padding_size
        self.crc = crc

    @classmethod
    def from_fileobj(cls, fileobj: BinaryIO) -> ExtendedHeader:
        data = read_full(fileobj, 10)
        header_size, flags, padding_size = struct.unpack('>IHI', data)
        crc = None
        if flags & cls.F_CRC:
            crc = cdata.uint_be(read_full(fileobj, 4))
        return cls(header_size, flags, padding_size, crc)

    f_crc = property(lambda s: bool(s.flags & s.F_CRC))

    @property
    def disk_size(self) -> int:
        """Amount of bytes the extended header takes up in the file"""

        return 14 if self.f_crc else 10

    def to_bytes(self) -> bytes:
        data = struct.pack(
            '>IHI', self.header_size, self.flags, self.padding_size)
        if self.f_crc:
            data += cdata.to_uint_be(self.crc or 0)
        return data

    def __repr__(self) -> str:
        return "<%s flags=%#06x padding=%d crc=%r>" % (
            type(self).__name__, self.flags, self.padding_size, self.crc)


def _frame_key(frame_id: str | bytes) -> bytes:
    if isinstance(frame_id, str):
        try:
            frame_id = frame_id.encode("latin-1")
        except UnicodeEncodeError:
            raise InvalidArgument("invalid frame id %r" % frame_id)
    if len(frame_id) != 4:
        raise InvalidArgument(
            "frame id must be 4 characters, not %r" % frame_id)
    if not frame_id.strip(b"\x00"):
        raise InvalidArgument("frame id must not be empty")
    return frame_id


def encode_text(text: str) -> bytes:
    """Encode text for a text frame.

    Latin-1 is used where possible, anything else gets stored as
    UTF-16 with a little endian BOM.
    """

    try:
        return TEXT_ENCODING_LATIN1 + text.encode("latin-1")
    except UnicodeEncodeError:
        pass

    try:
        encoded = text.encode("utf-16-le")
    except UnicodeEncodeError:
        raise InvalidArgument("can't encode %r" % text)
    return TEXT_ENCODING_UTF16 + b"\xff\xfe" + encoded + b"\x00\x00"


class ID3Tags:
    """An ID3v2.3 tag: header, optional extended header and frames.

    Frames are kept in file order and the same frame id may occur more
    than once. Lookups by id return the last matching frame.

    Attributes:
        header (ID3Header)
        extended_header (ExtendedHeader): or None
        frames (list[Frame])
        padding (int): zero bytes following the frames in the file
        offset (int): size of the tag in the file, where the audio starts
    """

    def __init__(self, header: ID3Header | None = None,
                 extended_header: ExtendedHeader | None = None,
                 frames: list[Frame] | None = None):
        if header is None:
            header = ID3Header()
        self.header = header
        self.extended_header = extended_header
        self.frames = list(frames or [])
        self.padding = 0
        self.offset = 0

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    def __contains__(self, frame_id: object) -> bool:
        if not isinstance(frame_id, (str, bytes)):
            return False
        try:
            return self.get(frame_id) is not None
        except InvalidArgument:
            return False

    def getall(self, frame_id: str | bytes) -> list[Frame]:
        """Return all frames with the given id, in file order"""

        key = _frame_key(frame_id)
        return [f for f in self.frames if f.id == key]

    def get(self, frame_id: str | bytes) -> Frame | None:
        """Return the last frame with the given id or None"""

        found = None
        key = _frame_key(frame_id)
        for frame in self.frames:
            if frame.id == key:
                found = frame
        return found

    def get_text(self, frame_id: str | bytes) -> str | None:
        frame = self.get(frame_id)
        if frame is None:
            return None
        return frame.render()

    @property
    def content_size(self) -> int:
        """Size of the extended header and all frames"""

        size = sum(FRAME_HEADER_SIZE + f.size for f in self.frames)
        if self.extended_header is not None:
            size += self.extended_header.disk_size
        return size

    def update_frame(self, frame_id: str | bytes,
                     data: bytes) -> tuple[Frame, bytes | None]:
        """Replace the payload of the last frame with the given id or append
        a new frame if there is none.

        Keeps the tag size in the header in sync. Returns the frame and
        the old payload (None if the frame was created).
        """

        key = _frame_key(frame_id)
        frame = None
        for f in self.frames:
            if f.id == key:
                frame = f

        if frame is None:
            frame = Frame(key, data)
            self.frames.append(frame)
            self.header.size += FRAME_HEADER_SIZE + frame.size
            log.debug("added frame %s (%d bytes)", frame.FrameID, frame.size)
            return frame, None

        old_data = frame.data
        frame.data = bytes(data)
        self.header.size += frame.size - len(old_data)
        log.debug("replaced frame %s (%d -> %d bytes)",
                  frame.FrameID, len(old_data), frame.size)
        return frame, old_data

    def set_text(self, frame_id: str | bytes,
                 text: str) -> tuple[Frame, bytes | None]:
        """Set a text frame, see update_frame()"""

        return self.update_frame(frame_id, encode_text(text))

    def drop_padding(self) -> None:
        """Remove the padding from the declared tag size"""

        self.header.size -= self.padding
        self.padding = 0
        if self.extended_header is not None:
            self.extended_header.padding_size = 0

    def pprint(self) -> str:
        return "\n".join(f.pprint() for f in self.frames)

    def __repr__(self) -> str:
        return "<%s %r frames=%d padding=%d>" % (
            type(self).__name__, self.header, len(self.frames), self.padding)


def read_tag(fileobj: BinaryIO) -> ID3Tags:
    """Read an ID3v2.3 tag from the current position of fileobj.

    Raises ID3NoHeaderError if there is no tag, CorruptTagError if the
    frames don't fit the declared tag size and TruncatedStreamError if
    the stream ends early. On return fileobj points to the start of the
    padding, or the audio data if there is none.
    """

    header = ID3Header.from_fileobj(fileobj)
    log.debug("found %r", header)

    tag = ID3Tags(header)
    tag.offset = TAG_HEADER_SIZE + header.size

    available = header.size
    if header.f_extended:
        tag.extended_header = ExtendedHeader.from_fileobj(fileobj)
        log.debug("found %r", tag.extended_header)
        available -= tag.extended_header.disk_size
        if available < 0:
            raise CorruptTagError(
                "extended header larger than the tag (%d bytes)" %
                header.size)

    while available > 0:
        if available < FRAME_HEADER_SIZE:
            rest = read_full(fileobj, available)
            if rest.strip(b"\x00"):
                raise CorruptTagError(
                    "%d bytes of junk after the last frame" % available)
            fileobj.seek(-available, 1)
            tag.padding = available
            break

        frame, size = Frame.from_header(
            read_full(fileobj, FRAME_HEADER_SIZE))
        if frame.is_padding:
            fileobj.seek(-FRAME_HEADER_SIZE, 1)
            tag.padding = available
            break

        if FRAME_HEADER_SIZE + size > available:
            raise CorruptTagError(
                "frame %r (%d bytes) exceeds the tag size, %d bytes left" % (
                    frame.FrameID, size, available - FRAME_HEADER_SIZE))

        frame.data = read_full(fileobj, size)
        if frame.f_compressed or frame.f_encrypted:
            log.warning("frame %s is compressed or encrypted, its payload "
                        "is not decoded", frame.FrameID)
        tag.frames.append(frame)
        available -= FRAME_HEADER_SIZE + size

    log.debug("read %d frames, %d bytes padding",
              len(tag.frames), tag.padding)
    return tag


def write_tag(tag: ID3Tags, fileobj: BinaryIO) -> None:
    """Write the header, the extended header and all frames.

    Padding is never written, call ID3Tags.drop_padding() first if the
    tag was read from a file with padding. Raises CorruptTagError if
    the declared size doesn't match the data and EncodingRangeError if
    it can't be stored.
    """

    ext = tag.extended_header
    if tag.header.f_extended != (ext is not None):
        raise CorruptTagError(
            "extended header flag doesn't match the extended header")

    framedata = BytesIO()
    for frame in tag.frames:
        write_frame(frame, framedata)
    data = framedata.getvalue()

    if ext is not None and ext.f_crc:
        ext.crc = zlib.crc32(data) & 0xFFFFFFFF

    if tag.header.size != tag.content_size:
        raise CorruptTagError(
            "declared tag size %d doesn't match %d bytes of tag data" % (
                tag.header.size, tag.content_size))

    header = tag.header.to_bytes()
    fileobj.write(header)
    if ext is not None:
        fileobj.write(ext.to_bytes())
    fileobj.write(data)
