from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import override

from rawedit.config import Config
from rawedit.editor import Editor
from rawedit.tui.keyboard import ByteSource, Key
from rawedit.tui.terminal import Terminal

type ConfigWriter = Callable[[str], Config]


def byte_source(data: bytes) -> ByteSource:
    """A byte source that yields `data` and then reports no input."""
    chars = iter(data)

    def read_byte() -> int | None:
        return next(chars, None)

    return read_byte


def make_editor(
    *rows: bytes, cx: int = 0, cy: int = 0, height: int = 24, width: int = 80
) -> Editor:
    editor = Editor(height, width)
    for row in rows:
        editor.document.insert_row(editor.document.numrows, row)
    editor.document.dirty = 0
    editor.cursor.cx = cx
    editor.cursor.cy = cy
    return editor


def press(editor: Editor, *keys: Key | bytes) -> None:
    for key in keys:
        if isinstance(key, bytes):
            for char in key:
                editor.handle_key(char)
        else:
            editor.handle_key(key)


def row_contents(editor: Editor) -> list[bytes]:
    return [bytes(row.content) for row in editor.document]


class FakeTerminal(Terminal):
    input: bytearray
    output: list[bytes]
    size: tuple[int, int]
    raw: bool

    def __init__(self, input: bytes, size: tuple[int, int] = (24, 80)):
        self.input = bytearray(input)
        self.output = []
        self.size = size
        self.raw = False

    @override
    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.raw = True
        try:
            yield
        finally:
            self.raw = False

    @override
    def read_byte(self, timeout: float = 0) -> int | None:
        if not self.input:
            raise EOFError("fake terminal ran out of input")
        return self.input.pop(0)

    @override
    def write(self, data: bytes) -> None:
        self.output.append(data)

    @override
    def get_window_size(self) -> tuple[int, int]:
        return self.size
