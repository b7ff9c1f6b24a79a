import logging
import os
import signal
import time
from collections.abc import Callable
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from types import FrameType

from .config import get_config
from .document import Document
from .screen import MAX_MESSAGE, StatusMessage, compose_frame
from .tui import keyboard
from .tui.keyboard import Key, Keyboard, SpecialKey
from .tui.terminal import Terminal
from .viewport import Cursor, Viewport, scroll

logger = logging.getLogger(__name__)

# Rows at the bottom of the terminal taken by the status and message bars
RESERVED_ROWS = 2


@dataclass
class Prompt:
    template: str
    callback: Callable[[str | None], None]
    buffer: bytearray = field(default_factory=bytearray)

    @property
    def message(self) -> str:
        return self.template.format(os.fsdecode(bytes(self.buffer)))


class Editor:
    document: Document
    cursor: Cursor
    viewport: Viewport
    status: StatusMessage
    prompt: Prompt | None
    keys: Keyboard | None

    quit_times: int
    should_exit: bool
    should_resize: bool

    def __init__(self, rows: int = 24, columns: int = 80):
        config = get_config()

        self.document = Document(config.format.tab_width)
        self.cursor = Cursor()
        self.viewport = Viewport(rows - RESERVED_ROWS, columns)
        self.status = StatusMessage()
        self.prompt = None
        self.keys = None

        self.quit_times = config.editor.quit_times
        self.should_exit = False
        self.should_resize = False

    def open(self, path: Path) -> None:
        self.document.load(path)

    def resize(self, rows: int, columns: int) -> None:
        self.viewport.screenrows = rows - RESERVED_ROWS
        self.viewport.screencols = columns

    def set_status_message(self, text: str) -> None:
        self.status.set(text, time.time())

    def render(self, now: float | None = None) -> bytes:
        if now is None:
            now = time.time()

        scroll(self.viewport, self.cursor, self.document)

        if self.prompt is not None:
            message = self.prompt.message[:MAX_MESSAGE]
        else:
            message = self.status.visible(now, get_config().editor.message_timeout)

        return compose_frame(self.document, self.cursor, self.viewport, message)

    def handle_key(self, key: Key) -> None:
        if self.prompt is not None:
            self.handle_prompt_key(self.prompt, key)
            command = None
        else:
            command = get_config().keymap.get(key)
            if command is None:
                self.handle_edit_key(key)
            else:
                getattr(self, command)()

        if command != "quit":
            self.quit_times = get_config().editor.quit_times

    def handle_edit_key(self, key: Key) -> None:
        match key:
            case keyboard.ENTER:
                self.insert_newline()
            case "home":
                self.cursor.cx = 0
            case "end":
                if self.cursor.cy < self.document.numrows:
                    self.cursor.cx = self.document[self.cursor.cy].size
            case "pageup" | "pagedown":
                self.page(key)
            case "up" | "down" | "left" | "right":
                self.move_cursor(key)
            case keyboard.BACKSPACE | keyboard.CTRL_H:
                self.delete_char()
            case "delete":
                self.move_cursor("right")
                self.delete_char()
            case "escape":
                pass
            case int():
                self.insert_char(key)

    def handle_prompt_key(self, prompt: Prompt, key: Key) -> None:
        match key:
            case "delete" | keyboard.BACKSPACE | keyboard.CTRL_H:
                del prompt.buffer[-1:]
            case "escape":
                self.prompt = None
                self.set_status_message("")
                prompt.callback(None)
            case keyboard.ENTER:
                if prompt.buffer:
                    self.prompt = None
                    self.set_status_message("")
                    prompt.callback(os.fsdecode(bytes(prompt.buffer)))
            case int() if 32 <= key < 127:
                prompt.buffer.append(key)

    def start_prompt(
        self, template: str, callback: Callable[[str | None], None]
    ) -> None:
        self.prompt = Prompt(template, callback)

    # Cursor movement

    def move_cursor(self, key: SpecialKey) -> None:
        cursor = self.cursor
        numrows = self.document.numrows

        match key:
            case "left":
                if cursor.cx != 0:
                    cursor.cx -= 1
                elif cursor.cy > 0:
                    cursor.cy -= 1
                    cursor.cx = self.document[cursor.cy].size
            case "right":
                if cursor.cy < numrows:
                    if cursor.cx < self.document[cursor.cy].size:
                        cursor.cx += 1
                    else:
                        cursor.cy += 1
                        cursor.cx = 0
            case "up":
                if cursor.cy != 0:
                    cursor.cy -= 1
            case "down":
                if cursor.cy < numrows:
                    cursor.cy += 1

        rowlen = self.document[cursor.cy].size if cursor.cy < numrows else 0
        cursor.cx = min(cursor.cx, rowlen)

    def page(self, key: SpecialKey) -> None:
        if key == "pageup":
            self.cursor.cy = self.viewport.rowoffset
            direction: SpecialKey = "up"
        else:
            self.cursor.cy = min(
                self.viewport.rowoffset + self.viewport.screenrows - 1,
                self.document.numrows,
            )
            direction = "down"

        for _ in range(self.viewport.screenrows):
            self.move_cursor(direction)

    # Editing

    def insert_char(self, char: int) -> None:
        if self.cursor.cy == self.document.numrows:
            self.document.insert_row(self.document.numrows)
        self.document.insert_char(self.cursor.cy, self.cursor.cx, char)
        self.cursor.cx += 1

    def insert_newline(self) -> None:
        if self.cursor.cx == 0:
            self.document.insert_row(self.cursor.cy)
        else:
            self.document.split_row(self.cursor.cy, self.cursor.cx)
        self.cursor.cy += 1
        self.cursor.cx = 0

    def delete_char(self) -> None:
        cursor = self.cursor
        if cursor.cy == self.document.numrows:
            return
        if cursor.cx == 0 and cursor.cy == 0:
            return

        if cursor.cx > 0:
            self.document.delete_char(cursor.cy, cursor.cx - 1)
            cursor.cx -= 1
        else:
            content = bytes(self.document[cursor.cy].content)
            cursor.cx = self.document[cursor.cy - 1].size
            self.document.append_string(cursor.cy - 1, content)
            self.document.delete_row(cursor.cy)
            cursor.cy -= 1

    # Commands, see KeybindingsConfig

    def save(self) -> None:
        if self.document.filename is None:
            self.start_prompt("Save as: {} (ESC to cancel)", self.save_as)
        else:
            self.write_document(None)

    def save_as(self, filename: str | None) -> None:
        if filename is None:
            self.set_status_message("Save aborted")
        else:
            self.write_document(Path(filename))

    def write_document(self, path: Path | None) -> None:
        try:
            written = self.document.save(path)
        except OSError as e:
            logger.warning("saving failed: %s", e)
            self.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
        else:
            self.set_status_message(f"{written} bytes written to disk")

    def quit(self) -> None:
        if self.document.dirty and self.quit_times > 0:
            key_name = keyboard.describe_key(get_config().keybindings.quit[0])
            self.set_status_message(
                "WARNING!!! File has unsaved changes. "
                f"Press {key_name} {self.quit_times} more times to quit."
            )
            self.quit_times -= 1
            return

        self.should_exit = True

    def refresh(self) -> None:
        pass

    # Main loop

    def on_resize(self, _signal: int, _frame: FrameType | None) -> None:
        self.should_resize = True
        if self.keys is not None:
            self.keys.cancel()

    def run(self, terminal: Terminal) -> None:
        keys = self.keys = Keyboard(terminal.read_byte)

        with ExitStack() as stack:
            prev_handler = signal.signal(signal.SIGWINCH, self.on_resize)
            stack.callback(signal.signal, signal.SIGWINCH, prev_handler)

            stack.enter_context(terminal.raw_mode())
            self.resize(*terminal.get_window_size())

            while not self.should_exit:
                if self.should_resize:
                    self.should_resize = False
                    self.resize(*terminal.get_window_size())

                terminal.write(self.render())
                try:
                    key = keys.get()
                except Keyboard.CancelledError:
                    continue
                self.handle_key(key)

            terminal.clear()
