"""slidedeck — compile plain-text slide decks into navigable, structured decks."""

from __future__ import annotations

from .dialects import REMARK, REVEAL, Dialect, detect_dialect, get_dialect
from .errors import (
    AtEndError,
    AtStartError,
    DeckError,
    IndexOutOfRangeError,
    MalformedDeckError,
    NavigationError,
)
from .models import (
    Annotation,
    Block,
    CodeListing,
    Deck,
    FrontMatter,
    ImageOrDiagram,
    Paragraph,
    Quote,
    Slide,
)
from .navigator import Navigator, PresenterView
from .parser import parse, parse_file
from .render import deck_to_dict, render_markdown

__version__ = "0.1.0"

__all__ = [
    "Annotation",
    "AtEndError",
    "AtStartError",
    "Block",
    "CodeListing",
    "Deck",
    "DeckError",
    "Dialect",
    "FrontMatter",
    "ImageOrDiagram",
    "IndexOutOfRangeError",
    "MalformedDeckError",
    "NavigationError",
    "Navigator",
    "Paragraph",
    "PresenterView",
    "Quote",
    "REMARK",
    "REVEAL",
    "Slide",
    "deck_to_dict",
    "detect_dialect",
    "get_dialect",
    "parse",
    "parse_file",
    "render_markdown",
]
