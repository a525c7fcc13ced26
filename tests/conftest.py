"""Shared fixtures for slidedeck tests."""

from __future__ import annotations

import textwrap

import pytest


# ---------------------------------------------------------------------------
# Decks (strings) used across multiple test modules
# ---------------------------------------------------------------------------

MINIMAL_DECK = "# A\n\nhi\n\n---\n\n# B\n\nbye\n"

FULL_DECK = textwrap.dedent("""\
    ---
    title: Ownership in Practice
    author: "Jane Doe"
    ---

    # Ownership in Practice

    A tour of the borrow checker.

    Note:
    Welcome everyone.

    ---

    ## Moves

    ```rust
    let x = String::from("hi");
    let y = x;
    println!("{}", x);
    ```
    //             ^ value borrowed here after move

    > Every value has a single owner.

    ![ownership diagram](img/owner.svg)

    Note:
    Pause here for questions.

    ---

    ---

    ```text
    ---
    Note:
    ```
    """)

REMARK_DECK = textwrap.dedent("""\
    # Title

    Body text.

    ???
    Remark notes.

    ---

    # Second
    """)


@pytest.fixture
def tmp_deck(tmp_path):
    """Write FULL_DECK to a temp file and return its path."""
    p = tmp_path / "deck.md"
    p.write_text(FULL_DECK, encoding="utf-8")
    return p


@pytest.fixture
def twenty_slide_deck():
    from slidedeck.parser import parse

    return parse("\n---\n".join(f"# Slide {i}\n\nBody {i}." for i in range(20)))
