# Copyright (C) 2026  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Rendering of raw frame payloads as display text.

Taggers disagree on how text frames are laid out, so the payload is
classified by looking at the bytes instead of trusting the encoding byte:

* ``APIC`` frames hold binary image data and are shown as a placeholder
* a payload starting with ``01 FF FE`` is UTF-16LE text following a
  little endian byte order mark
* a NULL terminated buffer is scanned byte by byte, ``FF FE`` starts an
  embedded UTF-16LE run, everything else is Latin-1
* anything else is Latin-1
"""

from __future__ import annotations

from ._util import decode_terminated

IMAGE_PLACEHOLDER = "image"

LEGACY_UTF16_MARKER = b"\x01\xff\xfe"

BOM_LE = b"\xff\xfe"


def _decode_utf16_run(data: bytes) -> tuple[str, bytes]:
    # a trailing odd byte is not part of any code unit
    usable = len(data) - len(data) % 2
    text, rest = decode_terminated(
        data[:usable], "utf-16-le", strict=False, errors="replace")
    return text, data[usable - len(rest):]


def _render_scan(data: bytes) -> str:
    start = 1 if data[:1] == b"\x00" else 0
    parts = []
    pos = start
    while pos < len(data):
        if data[pos:pos + 2] == BOM_LE:
            text, rest = _decode_utf16_run(data[pos + 2:])
            parts.append(text)
            pos = len(data) - len(rest)
        else:
            parts.append(chr(data[pos]))
            pos += 1
    return "".join(parts)


def render_frame_data(frame_id: str, data: bytes,
                      size: int | None = None) -> str:
    """Render the payload of a frame as text.

    Args:
        frame_id (str): the 4 character frame id
        data (bytes): the payload, optionally followed by extra bytes
        size (int): the payload size, defaults to len(data)

    `data` may be longer than `size`, a NULL byte right after the
    payload selects the scanning decoder.
    """

    if size is None:
        size = len(data)
    if size > len(data):
        raise ValueError("size larger than the buffer")
    payload = data[:size]

    if frame_id == "APIC":
        return IMAGE_PLACEHOLDER
    elif payload[:3] == LEGACY_UTF16_MARKER:
        raw = payload[3:]
        raw = raw[:len(raw) - len(raw) % 2]
        return raw.decode("utf-16-le", "replace").rstrip("\x00")
    elif len(data) > size and data[size] == 0:
        return _render_scan(payload)
    else:
        return payload.decode("latin-1")
