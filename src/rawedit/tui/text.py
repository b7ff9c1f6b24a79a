from dataclasses import dataclass

CSI = b"\x1b["

HIDE_CURSOR = CSI + b"?25l"
SHOW_CURSOR = CSI + b"?25h"
CURSOR_HOME = CSI + b"H"
CLEAR_LINE = CSI + b"K"
CLEAR_SCREEN = CSI + b"2J"


def cursor_position(row: int, col: int) -> bytes:
    """Escape code moving the cursor to a 1-indexed screen position."""
    return CSI + f"{row};{col}H".encode()


@dataclass(frozen=True)
class TextStyle:
    inverse: bool = False

    @property
    def style_code(self) -> bytes:
        if self.inverse:
            return CSI + b"7m"
        return b""

    @property
    def reset_code(self) -> bytes:
        if self.inverse:
            return CSI + b"m"
        return b""

    def apply(self, text: bytes) -> bytes:
        return self.style_code + text + self.reset_code


INVERSE_TEXT_STYLE = TextStyle(inverse=True)
