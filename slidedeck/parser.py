"""Deck parser — splits slides, builds content blocks and extracts speaker notes."""

from __future__ import annotations

import dataclasses
import logging

from .dialects import REVEAL, Dialect, detect_dialect
from .errors import MalformedDeckError
from .models import (
    ANNOTATION_RE,
    FENCE_OPEN_RE,
    FRONT_MATTER_KEY_RE,
    HEADING_RE,
    IMAGE_RE,
    QUOTE_RE,
    SEPARATOR_RE,
    Annotation,
    Block,
    CodeListing,
    Deck,
    FrontMatter,
    ImageOrDiagram,
    Paragraph,
    Quote,
    Slide,
    closes_fence,
)

logger = logging.getLogger(__name__)


def parse_file(path: str, dialect: Dialect | None = None) -> Deck:
    """Read a UTF-8 deck from *path* and parse it.

    When *dialect* is ``None`` it is detected from the file contents.
    """
    with open(path, encoding="utf-8") as f:
        raw = f.read()

    if dialect is None:
        dialect = detect_dialect(raw)
    logger.debug("Parsing %s (%s dialect)", path, dialect.name)
    return parse(raw, dialect)


def parse(raw: str, dialect: Dialect = REVEAL) -> Deck:
    """Parse deck markup into an immutable :class:`Deck`.

    An optional front-matter block (``---`` on the very first line up to the
    next ``---``) is read as ``key: value`` pairs.  The rest of the text is
    split into slides on ``---`` lines; separators inside fenced code are
    ignored.  Within each slide the first heading becomes the slide heading,
    the body is grouped into blocks and everything after the dialect's notes
    marker becomes the speaker notes.

    Raises :class:`MalformedDeckError` for an unterminated code fence or
    invalid front matter.
    """
    if raw.startswith("\ufeff"):
        raw = raw[1:]
    lines = raw.replace("\r\n", "\n").replace("\r", "\n").split("\n")

    front_matter, start = _parse_front_matter(lines)
    segments = _split_segments(lines, start)
    logger.debug("Found %d slide segment(s), %d front-matter key(s)", len(segments), len(front_matter))

    slides = tuple(
        _build_slide(first_line, segment, dialect)
        for first_line, segment in segments
    )
    for i, slide in enumerate(slides):
        notes_len = len(slide.notes) if slide.notes is not None else 0
        logger.debug(
            "  Slide %d (line %d): heading=%r, %d block(s), notes=%d chars",
            i, slide.line, slide.heading, len(slide.blocks), notes_len,
        )

    return Deck(slides=slides, front_matter=front_matter)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_front_matter(lines: list[str]) -> tuple[FrontMatter, int]:
    """Return the front matter and the index of the first line after it."""
    if not lines or not SEPARATOR_RE.match(lines[0]):
        return FrontMatter(), 0

    items: dict[str, str] = {}
    for i in range(1, len(lines)):
        line = lines[i]
        if SEPARATOR_RE.match(line):
            return FrontMatter(items), i + 1

        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        m = FRONT_MATTER_KEY_RE.match(line)
        if not m:
            raise MalformedDeckError(
                f"Invalid front-matter entry {stripped!r}; expected 'key: value'",
                line=i + 1,
            )
        key = m.group("key")
        if key in items:
            raise MalformedDeckError(f"Duplicate front-matter key {key!r}", line=i + 1)
        items[key] = _unquote(m.group("value") or "")

    raise MalformedDeckError("Front matter is never closed with '---'", line=1)


def _split_segments(lines: list[str], start: int) -> list[tuple[int, list[str]]]:
    """Split *lines* on separator lines that are not inside fenced code.

    Returns ``(first_line_number, lines)`` pairs; there is always at least one.
    """
    segments: list[tuple[int, list[str]]] = []
    current: list[str] = []
    segment_line = start + 1
    fence: str | None = None
    fence_line = 0

    for i in range(start, len(lines)):
        line = lines[i]
        if fence is not None:
            if closes_fence(line, fence):
                fence = None
        elif SEPARATOR_RE.match(line):
            segments.append((segment_line, current))
            current = []
            segment_line = i + 2
            continue
        else:
            m = FENCE_OPEN_RE.match(line)
            if m:
                fence = m.group("fence")
                fence_line = i + 1
        current.append(line)

    if fence is not None:
        raise MalformedDeckError(f"Code fence {fence!r} is never closed", line=fence_line)

    segments.append((segment_line, current))
    return segments


def _build_slide(first_line: int, lines: list[str], dialect: Dialect) -> Slide:
    heading: str | None = None
    heading_level: int | None = None
    blocks: list[Block] = []
    paragraph: list[str] = []
    quote: list[str] = []
    notes_lines: list[str] | None = None

    fence: str | None = None
    language: str | None = None
    source: list[str] = []
    # True while the lines directly beneath a closed listing may annotate it.
    annotating = False

    def _flush() -> None:
        if paragraph:
            blocks.append(Paragraph("\n".join(paragraph)))
            paragraph.clear()
        if quote:
            blocks.append(Quote("\n".join(quote)))
            quote.clear()

    for line in lines:
        # Once the notes marker is seen the rest of the segment is notes.
        if notes_lines is not None:
            notes_lines.append(line)
            continue

        if fence is not None:
            if closes_fence(line, fence):
                blocks.append(CodeListing(language, "\n".join(source)))
                fence = None
                annotating = True
            else:
                source.append(line)
            continue

        m = dialect.notes_re.match(line)
        if m:
            _flush()
            rest = m.group("rest")
            notes_lines = [rest] if rest else []
            continue

        if annotating:
            m = ANNOTATION_RE.match(line)
            if m:
                listing = blocks[-1]
                annotation = Annotation(
                    marker=m.group("marker"),
                    column=m.start("carets"),
                    length=len(m.group("carets")),
                    caption=m.group("caption"),
                )
                blocks[-1] = dataclasses.replace(
                    listing, annotations=listing.annotations + (annotation,)
                )
                continue
            annotating = False

        if heading is None:
            m = HEADING_RE.match(line)
            if m:
                _flush()
                heading = m.group("text")
                heading_level = len(m.group("marks"))
                continue

        m = FENCE_OPEN_RE.match(line)
        if m:
            _flush()
            fence = m.group("fence")
            info = m.group("info")
            language = info.split()[0] if info else None
            source = []
            continue

        stripped = line.strip()
        if not stripped:
            _flush()
            continue

        m = IMAGE_RE.match(stripped)
        if m:
            _flush()
            blocks.append(ImageOrDiagram(reference=m.group("ref"), alt=m.group("alt")))
            continue

        m = QUOTE_RE.match(stripped)
        if m:
            if paragraph:
                _flush()
            quote.append(m.group("text").rstrip())
            continue

        if quote:
            _flush()
        paragraph.append(stripped)

    _flush()
    notes = "\n".join(notes_lines).strip() if notes_lines is not None else None

    return Slide(
        heading=heading,
        heading_level=heading_level,
        blocks=tuple(blocks),
        notes=notes,
        line=first_line,
    )
