"""Write parsed decks back out: normalized markup, plain dicts, terminal text."""

from __future__ import annotations

import dataclasses
import textwrap
from typing import Any

from .dialects import REVEAL, Dialect
from .models import (
    FENCE_OPEN_RE,
    HEADING_RE,
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
)

SEPARATOR = "\n\n---\n\n"


def render_markdown(deck: Deck, dialect: Dialect = REVEAL) -> str:
    """Render *deck* as normalized markup.

    Parsing the result with the same dialect gives back the same slides and
    front matter.
    """
    body = SEPARATOR.join(_render_slide(slide, dialect) for slide in deck.slides)
    if deck.front_matter:
        return _render_front_matter(deck.front_matter) + body + "\n"
    return body + "\n"


def deck_to_dict(deck: Deck, include_notes: bool = True) -> dict[str, Any]:
    """Plain, JSON-serializable representation of *deck*."""
    slides = []
    for i, slide in enumerate(deck.slides):
        entry: dict[str, Any] = {
            "index": i,
            "line": slide.line,
            "heading": slide.heading,
            "heading_level": slide.heading_level,
            "blocks": [block_to_dict(block) for block in slide.blocks],
        }
        if include_notes:
            entry["notes"] = slide.notes
        slides.append(entry)

    return {
        "title": deck.title,
        "author": deck.author,
        "front_matter": dict(deck.front_matter),
        "slides": slides,
    }


def block_to_dict(block: Block) -> dict[str, Any]:
    data: dict[str, Any] = {"kind": block.kind}
    data.update(dataclasses.asdict(block))
    if isinstance(block, CodeListing):
        data["annotations"] = [dataclasses.asdict(a) for a in block.annotations]
    return data


def render_slide_text(slide: Slide, position: int, total: int, show_notes: bool = False) -> str:
    """Render a slide for a terminal; *position* is 0-based."""
    title = slide.heading if slide.heading is not None else "(untitled)"
    out = [f"[{position + 1}/{total}] {title}"]
    for block in slide.blocks:
        if isinstance(block, ImageOrDiagram):
            text = f"[image: {block.alt or block.reference}] ({block.reference})"
        else:
            text = render_block(block)
        out.append(textwrap.indent(text, "  ", lambda line: True))
    if show_notes and slide.notes is not None:
        out.append("  Notes:")
        out.append(textwrap.indent(slide.notes or "(empty)", "    ", lambda line: True))
    return "\n".join(out)


def render_block(block: Block) -> str:
    if isinstance(block, Paragraph):
        return "\n".join(_escape_paragraph_line(line) for line in block.text.split("\n"))
    if isinstance(block, Quote):
        return "\n".join(f"> {line}" if line else ">" for line in block.text.split("\n"))
    if isinstance(block, CodeListing):
        fence = _fence_for(block.source)
        lines = [fence + (block.language or ""), block.source, fence]
        lines.extend(_render_annotation(a) for a in block.annotations)
        return "\n".join(lines)
    if isinstance(block, ImageOrDiagram):
        return f"![{block.alt}]({block.reference})"
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def _render_slide(slide: Slide, dialect: Dialect) -> str:
    chunks: list[str] = []
    if slide.heading is not None:
        chunks.append("#" * (slide.heading_level or 1) + " " + slide.heading)
    chunks.extend(render_block(block) for block in slide.blocks)
    if slide.notes is not None:
        chunks.append(dialect.notes_marker + ("\n" + slide.notes if slide.notes else ""))
    return "\n\n".join(chunks)


def _render_front_matter(front_matter: FrontMatter) -> str:
    lines = ["---"]
    for key, value in front_matter.items():
        if not value:
            lines.append(f"{key}:")
        elif value != value.strip() or value[0] in "\"'":
            lines.append(f'{key}: "{value}"')
        else:
            lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n"


def _escape_paragraph_line(line: str) -> str:
    # Four spaces keep a separator, heading or fence lookalike as plain text.
    if SEPARATOR_RE.match(line) or HEADING_RE.match(line) or FENCE_OPEN_RE.match(line):
        return "    " + line
    return line


def _fence_for(source: str) -> str:
    # Longer than any backtick-only line inside the listing.
    longest = 0
    for line in source.split("\n"):
        stripped = line.strip()
        if stripped and set(stripped) == {"`"}:
            longest = max(longest, len(stripped))
    return "`" * max(3, longest + 1)


def _render_annotation(annotation: Annotation) -> str:
    line = annotation.marker.ljust(annotation.column) + "^" * annotation.length
    if annotation.caption:
        line += " " + annotation.caption
    return line
