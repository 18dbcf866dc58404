from __future__ import annotations

import io
import os
import termios

import pytest

from config import DisplayConfig
from pngn_grid import Grid
from pngn_terminal import ANSI, TerminalDisplay, sanitize_cell


def test_sanitize_cell_blanks_control_characters() -> None:
    assert sanitize_cell('\x1b') == ' '
    assert sanitize_cell('\t') == ' '
    assert sanitize_cell('a') == 'a'


def test_paint_homes_cursor_and_writes_rows() -> None:
    out = io.StringIO()
    display = TerminalDisplay(stdin=io.StringIO(), stdout=out)
    display.paint(Grid.from_lines(["ab", "c\x1b"]))
    assert out.getvalue() == ANSI.HOME + "ab\nc \n"
    assert display.paint_count == 1


def test_paint_applies_palette_color() -> None:
    out = io.StringIO()
    display = TerminalDisplay(DisplayConfig(color='neon-green'), stdin=io.StringIO(), stdout=out)
    display.paint(Grid.from_lines(["x"]))
    assert out.getvalue() == ANSI.HOME + "\033[38;2;0;255;0m" + "x\n" + ANSI.RESET


def test_context_manager_clears_and_restores_cursor() -> None:
    out = io.StringIO()
    with TerminalDisplay(stdin=io.StringIO(), stdout=out):
        pass
    text = out.getvalue()
    assert text.startswith(ANSI.CLEAR + ANSI.HIDE_CURSOR)
    assert text.endswith(ANSI.RESET + ANSI.SHOW_CURSOR)


def test_cursor_restored_when_loop_raises() -> None:
    out = io.StringIO()
    with pytest.raises(KeyboardInterrupt):
        with TerminalDisplay(stdin=io.StringIO(), stdout=out):
            raise KeyboardInterrupt
    assert out.getvalue().endswith(ANSI.SHOW_CURSOR)


def test_stdin_without_descriptor_reads_as_quit() -> None:
    with TerminalDisplay(quit_key='z', stdin=io.StringIO(), stdout=io.StringIO()) as display:
        assert display.read_key(0) == 'z'


def test_keys_read_from_pipe_with_timeout() -> None:
    read_fd, write_fd = os.pipe()
    with os.fdopen(read_fd, 'r') as stdin:
        with TerminalDisplay(stdin=stdin, stdout=io.StringIO()) as display:
            assert display.read_key(0) is None
            os.write(write_fd, b'k')
            assert display.read_key(1.0) == 'k'
            os.close(write_fd)
            assert display.read_key(1.0) == 'q'


def test_multibyte_key_read_as_one_character() -> None:
    read_fd, write_fd = os.pipe()
    with os.fdopen(read_fd, 'r') as stdin:
        with TerminalDisplay(quit_key='é', stdin=stdin, stdout=io.StringIO()) as display:
            os.write(write_fd, 'é€k'.encode('utf-8'))
            assert display.read_key(1.0) == 'é'
            assert display.read_key(1.0) == '€'
            assert display.read_key(1.0) == 'k'
            os.close(write_fd)


class BrokenStream(io.StringIO):
    def write(self, text):
        raise OSError("stdout closed")


def test_failed_open_restores_terminal_settings() -> None:
    master_fd, slave_fd = os.openpty()
    try:
        with os.fdopen(slave_fd, 'r', closefd=False) as stdin:
            before = termios.tcgetattr(slave_fd)
            with pytest.raises(OSError):
                with TerminalDisplay(stdin=stdin, stdout=BrokenStream()):
                    pass
            assert termios.tcgetattr(slave_fd) == before
    finally:
        os.close(slave_fd)
        os.close(master_fd)
