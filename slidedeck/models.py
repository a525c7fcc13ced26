"""Deck, Slide and the Block variants, plus the token regexes the parser and renderer share."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import ClassVar, Union


@dataclass(frozen=True)
class Annotation:
    """A caret pointer beneath a code listing, e.g. ``//    ^^^ moved here``."""

    marker: str
    column: int
    length: int
    caption: str


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"

    text: str


@dataclass(frozen=True)
class Quote:
    kind: ClassVar[str] = "quote"

    text: str


@dataclass(frozen=True)
class CodeListing:
    kind: ClassVar[str] = "code"

    language: str | None
    source: str
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class ImageOrDiagram:
    kind: ClassVar[str] = "image"

    reference: str
    alt: str = ""


Block = Union[Paragraph, Quote, CodeListing, ImageOrDiagram]


class FrontMatter(Mapping[str, str]):
    """Read-only key/value metadata from the top of a deck."""

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, str] | None = None) -> None:
        self._items = dict(items or {})

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrontMatter):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._items.items()))

    def __repr__(self) -> str:
        return f"FrontMatter({self._items!r})"


@dataclass(frozen=True)
class Slide:
    heading: str | None = None
    heading_level: int | None = None
    blocks: tuple[Block, ...] = ()
    notes: str | None = None
    # Source line where the segment starts; diagnostic only.
    line: int = field(default=0, compare=False)

    @property
    def is_empty(self) -> bool:
        return self.heading is None and not self.blocks and self.notes is None

    def without_notes(self) -> Slide:
        """Copy of this slide that is safe to hand to an audience display."""
        return dataclasses.replace(self, notes=None)


@dataclass(frozen=True)
class Deck:
    slides: tuple[Slide, ...]
    front_matter: FrontMatter = field(default_factory=FrontMatter)

    def __post_init__(self) -> None:
        if not self.slides:
            raise ValueError("A deck must contain at least one slide")

    @property
    def title(self) -> str | None:
        return self.front_matter.get("title")

    @property
    def author(self) -> str | None:
        return self.front_matter.get("author")

    def __len__(self) -> int:
        return len(self.slides)


# A line that is exactly the slide separator.
SEPARATOR_RE = re.compile(r"^---[ \t]*$")

# Opening code fence: ```lang or ~~~lang (three or more).
FENCE_OPEN_RE = re.compile(r"^[ \t]{0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^`]*?)[ \t]*$")

# Heading: one or more '#' followed by whitespace and text.
HEADING_RE = re.compile(r"^(?P<marks>#+)[ \t]+(?P<text>\S.*?)[ \t]*$")

# Quote marker, with at most one space eaten after '>'.
QUOTE_RE = re.compile(r"^>[ ]?(?P<text>.*)$")

# Image or diagram on a line of its own: ![alt](path "optional title")
IMAGE_RE = re.compile(r'^!\[(?P<alt>[^\]]*)\]\((?P<ref>[^)\s]+)(?:\s+"[^"]*")?\)$')

# Annotation line beneath a listing: // ^^^ caption
ANNOTATION_RE = re.compile(r"^[ \t]*(?P<marker>//|#|--)[ \t]*(?P<carets>\^+)[ \t]*(?P<caption>.*?)[ \t]*$")

# Front-matter entry: key: value
FRONT_MATTER_KEY_RE = re.compile(r"^(?P<key>[A-Za-z_][A-Za-z0-9_-]*)[ \t]*:(?:[ \t]+(?P<value>.*?))?[ \t]*$")


def closes_fence(line: str, fence: str) -> bool:
    """True when *line* closes a listing opened with *fence*."""
    stripped = line.strip()
    return len(stripped) >= len(fence) and set(stripped) == {fence[0]}
