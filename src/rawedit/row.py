TAB = ord("\t")
SPACE = ord(" ")


class Row:
    """One line of a document.

    `content` holds the bytes as the user typed them, `render` the same bytes
    with tabs expanded to the next tab stop. Every method that touches
    `content` rebuilds `render` before returning.
    """

    content: bytearray
    render: bytes
    tab_stop: int

    def __init__(self, content: bytes = b"", tab_stop: int = 4):
        self.content = bytearray(content)
        self.tab_stop = tab_stop
        self.update()

    def __repr__(self) -> str:
        return f"Row({bytes(self.content)!r})"

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def update(self) -> None:
        render = bytearray()

        for char in self.content:
            if char == TAB:
                render.append(SPACE)
                while len(render) % self.tab_stop:
                    render.append(SPACE)
            else:
                render.append(char)

        self.render = bytes(render)

    def cx_to_rx(self, cx: int) -> int:
        rx = 0
        for char in self.content[:cx]:
            if char == TAB:
                rx += (self.tab_stop - 1) - (rx % self.tab_stop)
            rx += 1
        return rx

    def insert(self, at: int, char: int) -> None:
        if not 0 <= at <= self.size:
            at = self.size
        self.content.insert(at, char)
        self.update()

    def delete(self, at: int) -> bool:
        if not 0 <= at < self.size:
            return False
        del self.content[at]
        self.update()
        return True

    def append(self, content: bytes) -> None:
        self.content.extend(content)
        self.update()

    def truncate(self, size: int) -> bytes:
        """Cut the row at `size` and return the bytes that were removed."""
        tail = bytes(self.content[size:])
        del self.content[size:]
        self.update()
        return tail
