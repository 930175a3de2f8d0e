"""Built-in terminal bell plugin.

Writes the BEL control character when a session expires, unless the
operator muted the timer or set the volume to 0. The terminal decides
how (or whether) to make it audible.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from pomoctl.plugins.hookspecs import hookimpl

logger = logging.getLogger(__name__)

BEL = "\a"


class TerminalBellPlugin:
    """Ring the terminal bell on expiry."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @hookimpl
    def pomoctl_expired(self, kind: str, muted: bool, volume: int) -> None:
        if muted or volume == 0:
            logger.debug("Bell suppressed for %s (muted=%s, volume=%d)", kind, muted, volume)
            return
        stream = self._stream or sys.stderr
        try:
            stream.write(BEL)
            stream.flush()
        except OSError:
            logger.debug("Bell write failed", exc_info=True)
