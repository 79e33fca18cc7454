# Copyright 2015 Christoph Reiter
#           2026 The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import contextlib
import logging
import os
import signal
import sys
from collections.abc import Iterator
from types import FrameType

LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Log to stderr, warnings only unless debug is set"""

    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.WARNING)


def print_error(message: str) -> None:
    print("Error: %s" % message, file=sys.stderr)


class SignalHandler:
    """Turns SIGINT/SIGTERM/SIGHUP into SystemExit, or postpones them
    while a file is being rewritten.
    """

    _interrupted: bool
    _nosig: bool

    def __init__(self):
        self._interrupted = False
        self._nosig = False

    def init(self) -> None:
        _ = signal.signal(signal.SIGINT, self._handler)
        _ = signal.signal(signal.SIGTERM, self._handler)
        if os.name != "nt":
            _ = signal.signal(signal.SIGHUP, self._handler)

    def _handler(self, signum: int, frame: FrameType | None) -> None:
        self._interrupted = True
        if not self._nosig:
            raise SystemExit("Aborted...")

    @contextlib.contextmanager
    def block(self) -> Iterator[None]:
        """While this context manager is active any signals for aborting
        the process will be queued and exit the program once the context
        is left.
        """

        self._nosig = True
        try:
            yield
        finally:
            self._nosig = False
        if self._interrupted:
            raise SystemExit("Aborted...")
