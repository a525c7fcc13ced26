"""slidedeck — Compile a plain-text slide deck and inspect or present it."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .dialects import detect_dialect, get_dialect
from .errors import IndexOutOfRangeError, MalformedDeckError, NavigationError
from .models import Deck
from .navigator import Navigator, PresenterView
from .parser import parse
from .render import deck_to_dict, render_markdown, render_slide_text

logger = logging.getLogger(__name__)


def _configure_logging(log_file: str | None, verbose: bool) -> None:
    """Attach handlers to the package logger; the library itself never does."""
    package_logger = logging.getLogger("slidedeck")
    formatter = logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(logging.DEBUG)
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)
    if log_file or verbose:
        package_logger.setLevel(logging.DEBUG)


def _print_outline(deck: Deck) -> None:
    if deck.title:
        print(f"Title:  {deck.title}")
    if deck.author:
        print(f"Author: {deck.author}")
    print(f"Found {len(deck.slides)} slides")
    for i, slide in enumerate(deck.slides):
        heading = slide.heading if slide.heading is not None else "(untitled)"
        n = len(slide.blocks)
        details = f"{n} block{'s' if n != 1 else ''}"
        if slide.notes is not None:
            details += ", notes"
        print(f"  {i + 1:>3}. {heading}  ({details})")


def _format_presenter(view: PresenterView) -> str:
    text = render_slide_text(view.slide, view.position, view.total, show_notes=True)
    if view.next_slide is None:
        return text + "\n  Next: (end of deck)"
    next_heading = view.next_slide.heading if view.next_slide.heading is not None else "(untitled)"
    return text + f"\n  Next: {next_heading}"


def _present(navigator: Navigator) -> None:
    """Interactive presenter console: shows notes and the upcoming slide."""
    print(_format_presenter(navigator.presenter_view()))
    while True:
        try:
            choice = input("  (n) next  (p) previous  (g N) go to  (q) quit: ").strip().lower()
        except EOFError:
            print()
            break
        try:
            if choice in ("", "n"):
                navigator.advance()
            elif choice == "p":
                navigator.retreat()
            elif choice.startswith("g"):
                try:
                    number = int(choice[1:].strip())
                except ValueError:
                    print("  Usage: g N (slide number)")
                    continue
                navigator.jump_to(number - 1)
            elif choice == "q":
                logger.info("Presenter console closed at slide %d", navigator.position)
                break
            else:
                print(f"  Unknown command: {choice}")
                continue
        except IndexOutOfRangeError as exc:
            print(f"  No slide {exc.index + 1}; the deck has {exc.size} slides.")
            continue
        except NavigationError as exc:
            print(f"  {exc}")
            continue
        print(_format_presenter(navigator.presenter_view()))


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="slidedeck",
        description="Compile a plain-text slide deck and inspect or present it.",
    )
    parser.add_argument("input", help="Path to the deck markup file")
    parser.add_argument("--dialect", choices=["auto", "reveal", "remark"], default="auto",
                        help="Token dialect: auto, reveal (Note:) or remark (???) (default: auto)")
    parser.add_argument("--notes", action="store_true",
                        help="Include speaker notes in printed slides and JSON output")
    parser.add_argument("--log-file", help="Write debug logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Write debug logs to stderr")

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument("--slide", type=int, default=None, metavar="N",
                            help="Print slide N (1-based, as numbered in the outline)")
    mode_group.add_argument("--json", action="store_true",
                            help="Print the compiled deck as JSON")
    mode_group.add_argument("--normalize", action="store_true",
                            help="Print the deck re-rendered as normalized markup")
    mode_group.add_argument("--present", action="store_true",
                            help="Step through the deck in an interactive presenter console")

    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found.", file=sys.stderr)
        sys.exit(1)

    _configure_logging(args.log_file, args.verbose)
    logger.info("CLI arguments: %s", vars(args))

    raw = input_path.read_text(encoding="utf-8")
    dialect = detect_dialect(raw) if args.dialect == "auto" else get_dialect(args.dialect)

    try:
        deck = parse(raw, dialect)
    except MalformedDeckError as exc:
        logger.error("Failed to parse %s: %s", input_path, exc)
        print(f"Error: {input_path}: {exc}", file=sys.stderr)
        sys.exit(1)
    logger.info("Parsed %s: %d slides (%s dialect)", input_path, len(deck.slides), dialect.name)

    try:
        if args.json:
            print(json.dumps(deck_to_dict(deck, include_notes=args.notes), indent=2, ensure_ascii=False))

        elif args.normalize:
            print(render_markdown(deck, dialect), end="")

        elif args.slide is not None:
            navigator = Navigator(deck)
            try:
                slide = navigator.jump_to(args.slide - 1)
            except IndexOutOfRangeError:
                print(f"Error: slide {args.slide} requested but only {len(deck.slides)} slides exist.",
                      file=sys.stderr)
                sys.exit(1)
            print(render_slide_text(slide, navigator.position, len(navigator), show_notes=args.notes))

        elif args.present:
            _present(Navigator(deck))

        else:
            _print_outline(deck)

    except Exception:
        logger.exception("Command failed")
        raise


if __name__ == "__main__":
    main()
