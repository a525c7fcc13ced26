"""Exceptions raised by slidedeck."""

from __future__ import annotations


class DeckError(Exception):
    """Base class for all slidedeck errors."""


class MalformedDeckError(DeckError, ValueError):
    """The source text violates the deck's structural rules.

    Raised while parsing; no partial deck is ever returned.  ``line`` is the
    1-based source line the problem was found on, when known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


class NavigationError(DeckError):
    """A navigator request that runs past the edges of the deck."""


class AtEndError(NavigationError):
    pass


class AtStartError(NavigationError):
    pass


class IndexOutOfRangeError(NavigationError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Slide index {index} out of range (deck has {size} slides)")
