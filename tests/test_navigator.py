"""Tests for slidedeck.navigator — cursor movement and notes access."""

from __future__ import annotations

import pytest

from slidedeck.errors import (
    AtEndError,
    AtStartError,
    IndexOutOfRangeError,
    NavigationError,
)
from slidedeck.navigator import Navigator
from slidedeck.parser import parse

from .conftest import FULL_DECK, MINIMAL_DECK


@pytest.fixture
def nav():
    return Navigator(parse(FULL_DECK))


class TestInitialState:
    def test_starts_at_first_slide(self, nav):
        assert nav.position == 0
        assert nav.current().heading == "Ownership in Practice"
        assert nav.is_first
        assert not nav.is_last

    def test_len(self, nav):
        assert len(nav) == 4

    def test_custom_start(self):
        nav = Navigator(parse(MINIMAL_DECK), start=1)
        assert nav.current().heading == "B"

    def test_invalid_start_raises(self):
        with pytest.raises(IndexOutOfRangeError):
            Navigator(parse(MINIMAL_DECK), start=5)


class TestSequentialMovement:
    def test_advance(self, nav):
        slide = nav.advance()
        assert slide.heading == "Moves"
        assert nav.position == 1

    def test_retreat(self, nav):
        nav.advance()
        slide = nav.retreat()
        assert slide.heading == "Ownership in Practice"
        assert nav.position == 0

    def test_advance_at_end_raises_and_stays(self, nav):
        nav.last()
        with pytest.raises(AtEndError):
            nav.advance()
        assert nav.position == 3
        assert nav.is_last

    def test_retreat_at_start_raises_and_stays(self, nav):
        with pytest.raises(AtStartError):
            nav.retreat()
        assert nav.position == 0

    def test_walk_whole_deck(self, nav):
        seen = [nav.current()]
        while not nav.is_last:
            seen.append(nav.advance())
        assert seen == list(nav.deck.slides)

    def test_single_slide_deck_is_first_and_last(self):
        nav = Navigator(parse("# Only\n"))
        assert nav.is_first and nav.is_last
        with pytest.raises(AtEndError):
            nav.advance()
        with pytest.raises(AtStartError):
            nav.retreat()

    def test_boundary_errors_are_navigation_errors(self, nav):
        with pytest.raises(NavigationError):
            nav.retreat()


class TestJumpTo:
    def test_jump(self, nav):
        slide = nav.jump_to(2)
        assert slide.is_empty
        assert nav.position == 2

    def test_out_of_range_leaves_cursor(self, twenty_slide_deck):
        nav = Navigator(twenty_slide_deck)
        nav.jump_to(7)
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            nav.jump_to(999)
        assert nav.position == 7
        assert exc_info.value.index == 999
        assert exc_info.value.size == 20

    @pytest.mark.parametrize("index", [-1, 4, 999])
    def test_out_of_range_indices(self, nav, index):
        with pytest.raises(IndexOutOfRangeError):
            nav.jump_to(index)
        assert nav.position == 0

    def test_out_of_range_is_index_error(self, nav):
        with pytest.raises(IndexError):
            nav.jump_to(10)

    def test_bool_index_rejected(self, nav):
        with pytest.raises(IndexOutOfRangeError):
            nav.jump_to(True)

    def test_first_and_last(self, nav):
        assert nav.last() is nav.deck.slides[-1]
        assert nav.first() is nav.deck.slides[0]


class TestNotes:
    def test_notes_for_any_slide(self, nav):
        assert nav.notes_for(1) == "Pause here for questions."
        assert nav.position == 0

    def test_notes_for_slide_without_notes(self, nav):
        assert nav.notes_for(2) is None

    def test_notes_exclude_marker(self):
        nav = Navigator(parse("# A\n\ncontent\n\nNote:\nspeaker-only text\n"))
        assert nav.notes_for(0) == "speaker-only text"

    def test_notes_for_out_of_range(self, nav):
        with pytest.raises(IndexOutOfRangeError):
            nav.notes_for(4)


class TestViews:
    def test_audience_view_has_no_notes(self, nav):
        view = nav.audience_view()
        assert view.notes is None
        assert view.heading == nav.current().heading
        assert view.blocks == nav.current().blocks
        # The deck itself is untouched.
        assert nav.current().notes == "Welcome everyone."

    def test_presenter_view(self, nav):
        view = nav.presenter_view()
        assert view.slide is nav.current()
        assert view.notes == "Welcome everyone."
        assert view.next_slide.heading == "Moves"
        assert view.position == 0
        assert view.total == 4

    def test_presenter_view_at_end(self, nav):
        nav.last()
        assert nav.presenter_view().next_slide is None


class TestIndependentNavigators:
    def test_navigators_share_deck_not_cursor(self):
        deck = parse(FULL_DECK)
        primary = Navigator(deck)
        console = Navigator(deck)
        primary.advance()
        primary.advance()
        assert primary.position == 2
        assert console.position == 0
        assert primary.deck is console.deck
