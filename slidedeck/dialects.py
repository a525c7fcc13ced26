"""Token dialects and auto-detection of which one a deck is written in."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .models import FENCE_OPEN_RE, FRONT_MATTER_KEY_RE, SEPARATOR_RE, closes_fence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dialect:
    name: str
    # Notes marker line; group "rest" holds any text the marker line carries.
    notes_re: re.Pattern
    notes_marker: str


# reveal.js markdown: a line that is exactly "Note:" (or "Notes:").
REVEAL = Dialect(
    name="reveal",
    notes_re=re.compile(r"^[ \t]*Notes?:[ \t]*(?P<rest>)$"),
    notes_marker="Note:",
)

# remark: a line of three question marks.
REMARK = Dialect(
    name="remark",
    notes_re=re.compile(r"^\?\?\?[ \t]*(?P<rest>)$"),
    notes_marker="???",
)

DIALECTS = {d.name: d for d in (REVEAL, REMARK)}


def get_dialect(name: str) -> Dialect:
    try:
        return DIALECTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown dialect {name!r}; expected one of: {', '.join(sorted(DIALECTS))}"
        ) from None


def detect_dialect(raw: str) -> Dialect:
    """Detect which dialect *raw* is written in.

    An explicit ``dialect:`` front-matter key wins.  Otherwise a ``???`` line
    outside code fences means remark; everything else falls back to reveal.
    """
    lines = raw.lstrip("\ufeff").splitlines()

    # --- 1. Explicit front-matter key ---
    if lines and SEPARATOR_RE.match(lines[0]):
        for line in lines[1:]:
            if SEPARATOR_RE.match(line):
                break
            m = FRONT_MATTER_KEY_RE.match(line)
            if m and m.group("key") == "dialect" and m.group("value"):
                name = m.group("value").strip("\"'")
                if name in DIALECTS:
                    logger.info("Detected %s dialect (dialect: %s in front matter)", name, name)
                    return DIALECTS[name]
                logger.warning("Ignoring unknown dialect %r in front matter", name)

    # --- 2. remark notes marker in the body ---
    fence: str | None = None
    for line in lines:
        if fence is not None:
            if closes_fence(line, fence):
                fence = None
            continue
        m = FENCE_OPEN_RE.match(line)
        if m:
            fence = m.group("fence")
            continue
        if REMARK.notes_re.match(line):
            logger.info("Detected remark dialect (??? notes marker in body)")
            return REMARK

    # --- 3. Fallback ---
    logger.info("No dialect signals found, defaulting to reveal")
    return REVEAL
