# Copyright (C) 2005  Michael Urman
#               2006  Joe Wreschnig
#               2013  Christoph Reiter
#               2026  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Utility classes for id3edit.

You should not rely on the interfaces here being stable. They are
intended for internal use in id3edit only.
"""

from __future__ import annotations

import codecs
import struct
from typing import BinaryIO

BUFFER_SIZE = 2 ** 16
"""Chunk size used when copying audio data between files"""

SYNCHSAFE_LIMIT = 1 << 28


class ID3EditError(Exception):
    """Base class for all custom exceptions in id3edit"""

    __module__ = "id3edit"


class error(ID3EditError):
    pass


class ID3NoHeaderError(error, ValueError):
    pass


NotATag = ID3NoHeaderError


class ID3UnsupportedVersionError(error, NotImplementedError):
    pass


class CorruptTagError(error, ValueError):
    pass


class TruncatedStreamError(error, EOFError):
    pass


class EncodingRangeError(error, OverflowError):
    pass


class InvalidArgument(error, ValueError):
    pass


class cdata:
    """C character buffer to Python numeric type conversions."""

    uint_be = staticmethod(lambda data: struct.unpack('>I', data)[0])

    to_uint_be = staticmethod(lambda data: struct.pack('>I', data))


class _BitPaddedMixin:

    @staticmethod
    def to_str(value: int, bits: int = 7, bigendian: bool = True,
               width: int = 4) -> bytes:
        if value < 0:
            raise EncodingRangeError("negative value %d" % value)

        mask = (1 << bits) - 1
        index = 0
        bytes_ = bytearray(width)
        try:
            while value:
                bytes_[index] = value & mask
                value >>= bits
                index += 1
        except IndexError:
            raise EncodingRangeError('Value too wide (>%d bytes)' % width)

        if bigendian:
            bytes_.reverse()
        return bytes(bytes_)

    @staticmethod
    def has_valid_padding(value: int | bytes, bits: int = 7) -> bool:
        """Whether the padding bits are all zero"""

        assert bits <= 8

        mask = (((1 << (8 - bits)) - 1) << bits)

        if isinstance(value, int):
            while value:
                if value & mask:
                    return False
                value >>= 8
        elif isinstance(value, bytes):
            for byte in bytearray(value):
                if byte & mask:
                    return False
        else:
            raise TypeError

        return True


class BitPaddedInt(int, _BitPaddedMixin):
    """An int decoded from bytes where only the low `bits` bits of every
    byte are significant (a synchsafe integer for bits=7).
    """

    def __new__(cls, value: int | bytes, bits: int = 7,
                bigendian: bool = True):

        mask = (1 << bits) - 1
        numeric_value = 0
        shift = 0

        if isinstance(value, int):
            if value < 0:
                raise ValueError
            while value:
                numeric_value += (value & mask) << shift
                value >>= 8
                shift += bits
        elif isinstance(value, bytes):
            if bigendian:
                value = bytes(reversed(value))
            for byte in bytearray(value):
                numeric_value += (byte & mask) << shift
                shift += bits
        else:
            raise TypeError

        return int.__new__(cls, numeric_value)


def decode_synchsafe(data: bytes, strict: bool = False) -> int:
    """Decode a 4 byte synchsafe integer.

    The top bit of every byte is ignored unless `strict` is True, in
    which case a set top bit raises CorruptTagError.
    """

    if len(data) != 4:
        raise TruncatedStreamError(
            "synchsafe integer needs 4 bytes, got %d" % len(data))
    if strict and not BitPaddedInt.has_valid_padding(data):
        raise CorruptTagError("invalid synchsafe integer %r" % data)
    return int(BitPaddedInt(data))


def encode_synchsafe(value: int) -> bytes:
    """Encode `value` as a 4 byte synchsafe integer.

    Raises EncodingRangeError if value doesn't fit into 28 bits.
    """

    if not 0 <= value < SYNCHSAFE_LIMIT:
        raise EncodingRangeError(
            "%d can't be stored as a synchsafe integer" % value)
    return BitPaddedInt.to_str(value, width=4)


def read_full(fileobj: BinaryIO, size: int) -> bytes:
    """Like fileobj.read but raises TruncatedStreamError if not all
    requested data is returned.
    """

    if size < 0:
        raise ValueError("size must not be negative")

    data = fileobj.read(size)
    if len(data) != size:
        raise TruncatedStreamError(
            "expected %d bytes, got %d" % (size, len(data)))
    return data


def copy_bytes(src: BinaryIO, dst: BinaryIO,
               buffer_size: int = BUFFER_SIZE) -> int:
    """Copy everything from the current position of `src` to `dst`.

    Returns the amount of bytes copied.
    """

    copied = 0
    while True:
        buf = src.read(buffer_size)
        if not buf:
            break
        dst.write(buf)
        copied += len(buf)
    return copied


def decode_terminated(data: bytes, encoding: str, strict: bool = True,
                      errors: str = "strict") -> tuple[str, bytes]:
    """Returns the decoded data until the first NULL terminator
    and all data after it.

    In case the data can't be decoded raises UnicodeError, unless
    `errors` names another codec error handler.
    In case the encoding is not found raises LookupError.
    In case the data isn't null terminated (even if it is encoded correctly)
    raises ValueError except if strict is False, then the decoded string
    will be returned anyway.
    """

    codec_info = codecs.lookup(encoding)

    # normalize encoding name so we can compare by name
    encoding = codec_info.name

    # fast path
    if encoding in ("utf-8", "iso8859-1"):
        index = data.find(b"\x00")
        if index == -1:
            # make sure we raise UnicodeError first, like in the slow path
            res = data.decode(encoding, errors), b""
            if strict:
                raise ValueError("not null terminated")
            else:
                return res
        return data[:index].decode(encoding, errors), data[index + 1:]

    # slow path
    decoder = codec_info.incrementaldecoder(errors)
    r = []
    for i in range(len(data)):
        c = decoder.decode(data[i:i + 1])
        # a replaced unit can be flushed together with the terminator
        index = c.find("\x00")
        if index != -1:
            r.append(c[:index])
            return "".join(r), data[i + 1:]
        r.append(c)
    else:
        # make sure the decoder is finished
        r.append(decoder.decode(b"", True))
        if strict:
            raise ValueError("not null terminated")
        return "".join(r), b""
