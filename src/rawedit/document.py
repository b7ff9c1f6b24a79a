import logging
from collections.abc import Iterator
from pathlib import Path

from .row import Row

logger = logging.getLogger(__name__)


class Document:
    """The ordered rows of the file being edited.

    Rows are addressed by index only. Any insertion or deletion shifts the
    indices below it, so callers look rows up again after every edit instead
    of holding on to them.
    """

    rows: list[Row]
    dirty: int
    filename: Path | None
    tab_stop: int

    def __init__(self, tab_stop: int = 4):
        self.rows = []
        self.dirty = 0
        self.filename = None
        self.tab_stop = tab_stop

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def insert_row(self, at: int, content: bytes = b"") -> None:
        at = min(max(at, 0), self.numrows)
        self.rows.insert(at, Row(content, self.tab_stop))
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        if not 0 <= at < self.numrows:
            return
        del self.rows[at]
        self.dirty += 1

    def insert_char(self, row: int, at: int, char: int) -> None:
        self.rows[row].insert(at, char)
        self.dirty += 1

    def delete_char(self, row: int, at: int) -> None:
        if self.rows[row].delete(at):
            self.dirty += 1

    def append_string(self, row: int, content: bytes) -> None:
        self.rows[row].append(content)
        self.dirty += 1

    def split_row(self, row: int, at: int) -> None:
        tail = self.rows[row].truncate(at)
        self.insert_row(row + 1, tail)

    def to_bytes(self) -> bytes:
        buffer = bytearray()
        for row in self.rows:
            buffer += row.content
            buffer += b"\n"
        return bytes(buffer)

    def load(self, path: Path) -> None:
        with path.open("rb") as f:
            rows = [Row(line.rstrip(b"\r\n"), self.tab_stop) for line in f]

        self.rows = rows
        self.filename = path
        self.dirty = 0
        logger.info("loaded %d rows from %s", len(rows), path)

    def save(self, path: Path | None = None) -> int:
        """Write the document and return the number of bytes written.

        Raises OSError when the file cannot be written, in which case nothing
        about the document changes.
        """
        if path is None:
            path = self.filename
        if path is None:
            raise ValueError("document has no filename")

        content = self.to_bytes()
        with path.open("wb") as f:
            written = f.write(content)

        self.filename = path
        self.dirty = 0
        logger.info("wrote %d bytes to %s", written, path)
        return written
