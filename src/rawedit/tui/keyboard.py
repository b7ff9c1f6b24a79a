from collections.abc import Callable
from typing import Literal, cast, get_args

type SpecialKey = Literal[
    "up", "down", "right", "left",
    "home", "end", "pageup", "pagedown",
    "delete", "escape",
]  # fmt: skip

# Anything that is not a special key is the raw byte value as read.
type Key = SpecialKey | int

type ByteSource = Callable[[], int | None]

SPECIAL_KEYS: frozenset[str] = frozenset(get_args(SpecialKey.__value__))

ESC = 0x1B
ENTER = 0x0D
BACKSPACE = 0x7F
CTRL_H = 0x08

# ESC [ <digit> ~
TILDE_KEYS: dict[int, SpecialKey] = {
    ord("1"): "home",
    ord("3"): "delete",
    ord("4"): "end",
    ord("5"): "pageup",
    ord("6"): "pagedown",
    ord("7"): "home",
    ord("8"): "end",
}

# ESC [ <letter>
CSI_KEYS: dict[int, SpecialKey] = {
    ord("A"): "up",
    ord("B"): "down",
    ord("C"): "right",
    ord("D"): "left",
    ord("H"): "home",
    ord("F"): "end",
}

# ESC O <letter>, sent by terminals in application cursor mode
SS3_KEYS: dict[int, SpecialKey] = {
    ord("H"): "home",
    ord("F"): "end",
}


def ctrl_key(char: str) -> int:
    return ord(char) & 0x1F


def parse_key(name: str) -> Key:
    """Turn a key name as written in the config file into a Key."""
    if name in SPECIAL_KEYS:
        return cast(SpecialKey, name)

    match name.split("+"):
        case ["ctrl", char] if len(char) == 1 and char.isalpha():
            return ctrl_key(char.lower())
        case ["enter"]:
            return ENTER
        case ["backspace"]:
            return BACKSPACE
        case ["tab"]:
            return ord("\t")
        case ["space"]:
            return ord(" ")
        case [char] if len(char) == 1:
            return ord(char)

    raise ValueError(f"unknown key: {name!r}")


def describe_key(name: str) -> str:
    """Format a config key name for messages, e.g. "ctrl+q" -> "Ctrl-Q"."""
    return "-".join(part.capitalize() for part in name.split("+"))


def read_key(read_byte: ByteSource, unread: Callable[[int], None]) -> Key | None:
    """Decode exactly one key from the byte source.

    Returns None when no byte was available at all. A sequence that is cut
    short or unknown yields a bare escape. When the byte after ESC cannot
    start a sequence it is handed back through `unread` so it is decoded as
    the next key.
    """
    char = read_byte()
    if char is None:
        return None
    if char != ESC:
        return char

    if (first := read_byte()) is None:
        return "escape"
    if first not in (ord("["), ord("O")):
        unread(first)
        return "escape"

    if (second := read_byte()) is None:
        return "escape"

    if first == ord("O"):
        return SS3_KEYS.get(second, "escape")

    if ord("0") <= second <= ord("9"):
        if read_byte() != ord("~"):
            return "escape"
        return TILDE_KEYS.get(second, "escape")

    return CSI_KEYS.get(second, "escape")


class Keyboard:
    source: ByteSource
    pending: list[int]
    cancelled: bool

    def __init__(self, source: ByteSource):
        self.source = source
        self.pending = []
        self.cancelled = False

    def read_byte(self) -> int | None:
        if self.pending:
            return self.pending.pop()
        return self.source()

    def unread(self, char: int) -> None:
        self.pending.append(char)

    def poll(self) -> Key | None:
        return read_key(self.read_byte, self.unread)

    def get(self) -> Key:
        """Wait for the next key.

        Raises Keyboard.CancelledError when cancel() was called while waiting,
        so the caller can redraw before reading on.
        """
        while True:
            if (key := self.poll()) is not None:
                return key
            if self.cancelled:
                self.cancelled = False
                raise Keyboard.CancelledError()

    def cancel(self) -> None:
        self.cancelled = True

    class CancelledError(Exception):
        pass
