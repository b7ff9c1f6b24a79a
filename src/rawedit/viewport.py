from dataclasses import dataclass

from .document import Document


@dataclass
class Cursor:
    cx: int = 0
    cy: int = 0


@dataclass
class Viewport:
    screenrows: int
    screencols: int
    rowoffset: int = 0
    coloffset: int = 0
    # Render column of the cursor, recomputed by scroll() on every frame.
    rx: int = 0


def scroll(viewport: Viewport, cursor: Cursor, document: Document) -> None:
    """Move the viewport just far enough that the cursor is inside it."""
    viewport.rx = 0
    if cursor.cy < document.numrows:
        viewport.rx = document[cursor.cy].cx_to_rx(cursor.cx)

    if cursor.cy < viewport.rowoffset:
        viewport.rowoffset = cursor.cy
    if cursor.cy >= viewport.rowoffset + viewport.screenrows:
        viewport.rowoffset = cursor.cy - viewport.screenrows + 1

    if viewport.rx < viewport.coloffset:
        viewport.coloffset = viewport.rx
    if viewport.rx >= viewport.coloffset + viewport.screencols:
        viewport.coloffset = viewport.rx - viewport.screencols + 1
