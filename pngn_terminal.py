#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Terminal Display
==========================================
Copyright (c) 2025 PNGN-Tec LLC

Raw Terminal Device
===================
Paints the canvas with ANSI cursor control and reads single keypresses
without echo or line buffering.

Core Features
=============
- cbreak-mode key input with optional timeout (select-based)
- Clear once, then cursor-home and full repaint every tick
- Cursor hidden while animating
- Optional 24-bit foreground color from the PNGN palette
- Control characters in cells blanked so frames cannot inject escapes

Resource Handling
=================
TerminalDisplay is a context manager. The saved terminal attributes
are captured on entry and restored on exit together with the cursor and
colors, whether the loop ended by quit key, by exception or by
KeyboardInterrupt.

When stdin is not a terminal the device still works: keys are read from
whatever stdin provides, and end of input counts as the quit key.

Example Usage
=============
```python
from pngn_terminal import TerminalDisplay
from pngn_loop import run_animation

with TerminalDisplay() as display:
    run_animation(scene, display, settings)
```
"""

import codecs
import io
import logging
import os
import select
import sys
import termios
import tty
from typing import List, Optional, TextIO

from config import DEFAULT_QUIT_KEY, DisplayConfig
from pngn_grid import Grid
from pngn_loop import DisplayDevice

logger = logging.getLogger('pngn_terminal')


class ANSI:
    CSI = "\033["
    RESET = "\033[0m"
    HOME = "\033[H"
    CLEAR = "\033[H\033[2J"
    HIDE_CURSOR = "\033[?25l"
    SHOW_CURSOR = "\033[?25h"


def sanitize_cell(cell: object) -> str:
    """Cell text with control characters replaced by a space"""
    text = str(cell)
    return ''.join(char if ord(char) >= 32 and char != '\x7f' else ' ' for char in text)


class TerminalDisplay(DisplayDevice):
    """
    Display device for an ANSI terminal.

    Args:
        config: Cursor and color options
        quit_key: Returned by read_key() once input is exhausted
        stdin, stdout: Streams to use (sys.stdin / sys.stdout by default)
    """

    def __init__(self, config: Optional[DisplayConfig] = None,
                 quit_key: str = DEFAULT_QUIT_KEY,
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        self.config = config or DisplayConfig()
        self.quit_key = quit_key
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[List] = None
        self._foreground = self.config.foreground_ansi
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
        self.paint_count = 0

    # ------------------------------------------------------------------
    # Scoped terminal acquisition
    # ------------------------------------------------------------------

    def __enter__(self) -> 'TerminalDisplay':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def open(self):
        """Capture terminal settings, enter cbreak mode and clear the screen"""
        try:
            self._fd = self.stdin.fileno()
        except (AttributeError, ValueError, io.UnsupportedOperation):
            self._fd = None
            logger.info("stdin has no file descriptor; key input disabled")

        if self._fd is not None and os.isatty(self._fd):
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
            logger.debug("Terminal switched to cbreak mode")

        try:
            self.stdout.write(ANSI.CLEAR)
            if self.config.hide_cursor:
                self.stdout.write(ANSI.HIDE_CURSOR)
            self.stdout.flush()
        except BaseException:
            self._restore_terminal()
            raise

    def close(self):
        """Restore colors, cursor and the captured terminal settings"""
        try:
            self.stdout.write(ANSI.RESET)
            if self.config.hide_cursor:
                self.stdout.write(ANSI.SHOW_CURSOR)
            self.stdout.flush()
        finally:
            self._restore_terminal()

    def _restore_terminal(self):
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
            logger.debug("Terminal settings restored")

    # ------------------------------------------------------------------
    # DisplayDevice
    # ------------------------------------------------------------------

    def paint(self, canvas: Grid):
        parts = [ANSI.HOME]
        if self._foreground:
            parts.append(self._foreground)
        for row in canvas.cells:
            parts.append(''.join(sanitize_cell(cell) for cell in row))
            parts.append('\n')
        if self._foreground:
            parts.append(ANSI.RESET)
        self.stdout.write(''.join(parts))
        self.stdout.flush()
        self.paint_count += 1

    def read_key(self, timeout: Optional[float]) -> Optional[str]:
        self.stdout.flush()
        if self._fd is None:
            return self.quit_key

        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return None

        # A multi-byte character arrives in one write; keep reading until it decodes
        while True:
            data = os.read(self._fd, 1)
            if not data:
                self._decoder.reset()
                logger.info("End of input; stopping")
                return self.quit_key
            key = self._decoder.decode(data)
            if key:
                return key
