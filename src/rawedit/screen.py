import os
from collections.abc import Iterator
from dataclasses import dataclass
from typing import override

from .__about__ import __version__
from .document import Document
from .tui.drawable import Drawable
from .tui.text import (
    CLEAR_LINE,
    CURSOR_HOME,
    HIDE_CURSOR,
    INVERSE_TEXT_STYLE,
    SHOW_CURSOR,
    cursor_position,
)
from .viewport import Cursor, Viewport

WELCOME = f"rawedit -- version {__version__}".encode()
FILLER = b"~"
NO_NAME = b"[No Name]"
MAX_FILENAME = 20
MAX_MESSAGE = 79


@dataclass
class StatusMessage:
    text: str = ""
    time: float = 0.0

    def set(self, text: str, now: float) -> None:
        self.text = text[:MAX_MESSAGE]
        self.time = now

    def visible(self, now: float, timeout: float) -> str:
        if now - self.time < timeout:
            return self.text
        return ""


class DocumentView(Drawable):
    document: Document
    viewport: Viewport

    def __init__(self, document: Document, viewport: Viewport):
        self.document = document
        self.viewport = viewport

    @override
    def render(self, width: int) -> Iterator[bytes]:
        for y in range(self.viewport.screenrows):
            filerow = y + self.viewport.rowoffset

            if filerow < self.document.numrows:
                render = self.document[filerow].render
                start = self.viewport.coloffset
                line = render[start : start + width]
            elif not self.document.numrows and y == self.viewport.screenrows // 3:
                line = self.render_welcome(width)
            else:
                line = FILLER

            yield line + CLEAR_LINE

    def render_welcome(self, width: int) -> bytes:
        welcome = WELCOME[:width]
        padding = (width - len(welcome)) // 2
        if not padding:
            return welcome
        return FILLER + b" " * (padding - 1) + welcome


class StatusBar(Drawable):
    document: Document
    cursor: Cursor

    def __init__(self, document: Document, cursor: Cursor):
        self.document = document
        self.cursor = cursor

    @override
    def render(self, width: int) -> Iterator[bytes]:
        if self.document.filename is None:
            filename = NO_NAME
        else:
            filename = os.fsencode(self.document.filename)[:MAX_FILENAME]

        status = filename + f" - {self.document.numrows} lines".encode()
        if self.document.dirty:
            status += b" (modified)"
        rstatus = f"{self.cursor.cy + 1}/{self.document.numrows}".encode()

        line = bytearray(status[:width])
        while len(line) < width:
            if width - len(line) == len(rstatus):
                line += rstatus
                break
            line += b" "

        yield INVERSE_TEXT_STYLE.apply(bytes(line))


class MessageBar(Drawable):
    message: str

    def __init__(self, message: str):
        self.message = message

    @override
    def render(self, width: int) -> Iterator[bytes]:
        yield CLEAR_LINE + os.fsencode(self.message)[:width]


def compose_frame(
    document: Document, cursor: Cursor, viewport: Viewport, message: str
) -> bytes:
    """Build everything needed to redraw the screen as a single buffer."""
    width = viewport.screencols
    drawables: list[Drawable] = [
        DocumentView(document, viewport),
        StatusBar(document, cursor),
        MessageBar(message),
    ]

    lines: list[bytes] = []
    for drawable in drawables:
        lines.extend(drawable.render(width))

    frame = bytearray(HIDE_CURSOR + CURSOR_HOME)
    frame += b"\r\n".join(lines)
    frame += cursor_position(
        cursor.cy - viewport.rowoffset + 1,
        viewport.rx - viewport.coloffset + 1,
    )
    frame += SHOW_CURSOR
    return bytes(frame)
