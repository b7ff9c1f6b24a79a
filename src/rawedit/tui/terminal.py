import logging
import os
import re
import select
import sys
import termios
import tty
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import BinaryIO

from .text import CLEAR_SCREEN, CSI, CURSOR_HOME

logger = logging.getLogger(__name__)

READ_TIMEOUT = 0.1
CURSOR_POSITION_REPORT = re.compile(rb"\x1b\[(\d+);(\d+)")


class TerminalError(Exception):
    pass


class Terminal:
    """The controlling terminal, talked to through raw file descriptors."""

    stdin: BinaryIO
    stdout: BinaryIO

    def __init__(self, stdin: BinaryIO | None = None, stdout: BinaryIO | None = None):
        self.stdin = stdin or sys.stdin.buffer
        self.stdout = stdout or sys.stdout.buffer

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        with ExitStack() as stack:
            try:
                attrs = tty.setraw(self.stdin, termios.TCSAFLUSH)
            except termios.error as e:
                raise TerminalError(f"tcsetattr: {e}") from e
            stack.callback(termios.tcsetattr, self.stdin, termios.TCSAFLUSH, attrs)
            logger.debug("entered raw mode")

            yield

        logger.debug("restored terminal mode")

    def read_byte(self, timeout: float = READ_TIMEOUT) -> int | None:
        fd = self.stdin.fileno()
        if not select.select([fd], [], [], timeout)[0]:
            return None
        try:
            data = os.read(fd, 1)
        except BlockingIOError:
            return None
        except OSError as e:
            raise TerminalError(f"read: {e}") from e
        if not data:
            raise TerminalError("read: end of input")
        return data[0]

    def write(self, data: bytes) -> None:
        self.stdout.write(data)
        self.stdout.flush()

    def clear(self) -> None:
        self.write(CLEAR_SCREEN + CURSOR_HOME)

    def get_window_size(self) -> tuple[int, int]:
        """Return the terminal size as (rows, columns)."""
        try:
            columns, rows = os.get_terminal_size(self.stdout.fileno())
        except OSError:
            columns = rows = 0

        if columns:
            return rows, columns

        # Push the cursor into the bottom right corner and ask where it ended up
        self.write(CSI + b"999C" + CSI + b"999B")
        return self.get_cursor_position()

    def get_cursor_position(self) -> tuple[int, int]:
        self.write(CSI + b"6n")

        response = bytearray()
        while len(response) < 31:
            char = self.read_byte()
            if char is None or char == ord("R"):
                break
            response.append(char)

        if not (match := CURSOR_POSITION_REPORT.fullmatch(response)):
            raise TerminalError("getWindowSize: unable to determine terminal size")

        rows, columns = int(match[1]), int(match[2])
        logger.debug("terminal size from cursor position report: %dx%d", columns, rows)
        return rows, columns
