from abc import ABC, abstractmethod
from collections.abc import Iterator


class Drawable(ABC):
    """Something that can be drawn as a sequence of terminal lines.

    Lines are raw bytes including any escape codes, without the trailing line
    break; whoever assembles the frame decides how lines are separated.
    """

    @abstractmethod
    def render(self, width: int) -> Iterator[bytes]:
        raise NotImplementedError
