"""Cursor over a parsed deck for presentation surfaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import AtEndError, AtStartError, IndexOutOfRangeError
from .models import Deck, Slide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresenterView:
    """What a presenter console shows: the slide, its notes and what is next."""

    slide: Slide
    notes: str | None
    next_slide: Slide | None
    position: int
    total: int


class Navigator:
    """Sequential and random access over the slides of a :class:`Deck`.

    The cursor is the only mutable state.  A failed move raises one of the
    :class:`~slidedeck.errors.NavigationError` subclasses and leaves the
    cursor where it was.  Every display surface should hold its own
    navigator; the deck itself is immutable and can be shared freely.
    """

    def __init__(self, deck: Deck, start: int = 0) -> None:
        self._deck = deck
        self._check_index(start)
        self._position = start

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_first(self) -> bool:
        return self._position == 0

    @property
    def is_last(self) -> bool:
        return self._position == len(self._deck.slides) - 1

    def __len__(self) -> int:
        return len(self._deck.slides)

    def current(self) -> Slide:
        return self._deck.slides[self._position]

    def advance(self) -> Slide:
        if self.is_last:
            raise AtEndError(f"Already at the last slide ({self._position})")
        self._position += 1
        logger.debug("Advanced to slide %d", self._position)
        return self.current()

    def retreat(self) -> Slide:
        if self.is_first:
            raise AtStartError("Already at the first slide")
        self._position -= 1
        logger.debug("Retreated to slide %d", self._position)
        return self.current()

    def jump_to(self, index: int) -> Slide:
        self._check_index(index)
        self._position = index
        logger.debug("Jumped to slide %d", index)
        return self.current()

    def first(self) -> Slide:
        return self.jump_to(0)

    def last(self) -> Slide:
        return self.jump_to(len(self._deck.slides) - 1)

    def notes_for(self, index: int) -> str | None:
        """Speaker notes of slide *index*, regardless of the cursor.

        Only presenter-facing surfaces should call this.
        """
        self._check_index(index)
        return self._deck.slides[index].notes

    def audience_view(self) -> Slide:
        """The current slide with its speaker notes removed."""
        return self.current().without_notes()

    def presenter_view(self) -> PresenterView:
        slides = self._deck.slides
        next_slide = None if self.is_last else slides[self._position + 1]
        return PresenterView(
            slide=self.current(),
            notes=self.current().notes,
            next_slide=next_slide,
            position=self._position,
            total=len(slides),
        )

    def _check_index(self, index: int) -> None:
        size = len(self._deck.slides)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
            raise IndexOutOfRangeError(index, size)
