# Copyright 2005 Joe Wreschnig
#           2026 The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Show, query and set ID3v2.3 frames of an MP3 file."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from ._util import SignalHandler, print_error, setup_logging

_sig = SignalHandler()

log = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_USAGE = 2


class Arguments(argparse.Namespace):
    filepath: str | None = None
    set: str | None = None
    get: str | None = None
    value: str | None = None
    show: bool = False
    debug: bool = False


def validate(args: Arguments) -> list[str]:
    """Returns a list of problems with the passed arguments"""

    problems = []

    if args.filepath is None:
        problems.append("Missing required parameter --filepath")
    elif not args.filepath.endswith(".mp3"):
        problems.append('Invalid input file name "%s"' % args.filepath)
    elif not os.path.isfile(args.filepath):
        problems.append('File "%s" does not exist' % args.filepath)

    for frame_id in (args.set, args.get):
        if frame_id is not None and len(frame_id) != 4:
            problems.append('Invalid frame id "%s"' % frame_id)

    if args.set is not None and args.value is None:
        problems.append(
            "Missing required parameter --value with parameter --set")
    if args.value is not None and args.set is None:
        problems.append("Parameter --value requires parameter --set")

    return problems


def show_frames(tag) -> None:
    print("ID   | size \t| data")
    for frame in tag:
        print("%s | %d \t| %s" % (frame.FrameID, frame.size, frame.render()))


def set_frame(tag, frame_id: str, value: str) -> None:
    frame, old_data = tag.set_text(frame_id, value)
    if old_data is None:
        print("created %s with data: %s" % (frame.FrameID, frame.render()))
    else:
        old = type(frame)(frame.id, old_data, frame.flags)
        print("%s: %s -> %s" % (frame.FrameID, old.render(), frame.render()))

    with _sig.block():
        tag.save()


def get_frame(tag, frame_id: str) -> None:
    text = tag.get_text(frame_id)
    if text is None:
        print("No frame found")
    else:
        print(text)


def main(argv: Sequence[str]) -> int:
    from id3edit import ID3, ID3NoHeaderError, error, version_string

    parser = argparse.ArgumentParser(
        usage="%(prog)s --filepath=FILE.mp3 [options]",
        description="Show, query and set ID3v2.3 frames.")
    parser.add_argument(
        "--version", action="version",
        version="id3edit %s" % version_string)
    parser.add_argument(
        "--filepath", metavar="FILE.mp3", help="the MP3 file to work on")
    parser.add_argument(
        "--set", metavar="ID", help="frame to set, needs --value")
    parser.add_argument(
        "--value", metavar="TEXT", help="new text of the frame to set")
    parser.add_argument(
        "--get", metavar="ID", help="print the content of a frame")
    parser.add_argument(
        "--show", action="store_true", help="list all frames")
    parser.add_argument(
        "--debug", action="store_true", help="print debug messages")

    args = parser.parse_args(argv[1:], namespace=Arguments())
    setup_logging(args.debug)

    problems = validate(args)
    if problems:
        for problem in problems:
            print_error(problem)
        return EXIT_USAGE

    try:
        tag = ID3(args.filepath)
    except ID3NoHeaderError:
        print_error('No ID3 header found in "%s"' % args.filepath)
        return EXIT_ERROR
    except (error, OSError) as e:
        print_error('Can\'t read "%s": %s' % (args.filepath, e))
        return EXIT_ERROR

    log.debug("loaded %r", tag)

    try:
        if args.set is not None:
            set_frame(tag, args.set, args.value)
        if args.get is not None:
            get_frame(tag, args.get)
    except error as e:
        print_error(str(e))
        return EXIT_ERROR

    if args.show:
        show_frames(tag)

    return 0


def entry_point() -> int:
    _sig.init()
    return main(sys.argv)
