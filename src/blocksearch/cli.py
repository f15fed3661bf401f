"""
CLI interface for blocksearch.

Search or replace across a JSON block document (a list of blocks with
clientId, name, attributes and innerBlocks), the way the editor's dialog
does it for the live document.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from .config import get_config
from .pattern import build_rule
from .session import SearchReplace
from .store import MemoryStore

HIGHLIGHT_OPEN = "[["
HIGHLIGHT_CLOSE = "]]"


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    cfg = get_config()

    parser = argparse.ArgumentParser(
        prog="blocksearch",
        description="Tag-safe search & replace across editor blocks",
    )

    parser.add_argument(
        "search",
        help="Text to find (whole words; regex syntax unless --literal)",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="JSON block document (reads from stdin if not provided or '-')",
    )

    parser.add_argument(
        "--replace",
        "-r",
        type=str,
        default=None,
        help="Replace every match with this text and write the updated document",
    )

    parser.add_argument(
        "--case-sensitive",
        "-c",
        action="store_true",
        help="Match case (always on if enabled in config)",
    )

    parser.add_argument(
        "--literal",
        "-F",
        action="store_true",
        default=None,
        help="Treat the search text as a literal string, not a regex",
    )

    parser.add_argument(
        "--show-matches",
        "-m",
        action="store_true",
        default=cfg.search.show_matches,
        help="List every matched value with the match highlighted",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the updated document here instead of stdout (replace mode)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log pass details to stderr",
    )

    return parser.parse_args(args)


def read_input(path: str | None) -> MemoryStore:
    """Load a block document from a file path, or stdin for None/'-'."""
    if path is None or path == "-":
        return MemoryStore.from_json(json.load(sys.stdin))
    return MemoryStore.load(path)


def render_matches(payload: dict[str, Any], literal: bool | None = None) -> list[str]:
    """Numbered match list with every match wrapped in highlight markers."""
    rule = build_rule(payload["matchString"], payload["caseSensitive"], literal=literal)
    wrap = lambda word: f"{HIGHLIGHT_OPEN}{word}{HIGHLIGHT_CLOSE}"  # noqa: E731
    return [
        f"{i}. {rule.highlight(match, wrap)}"
        for i, match in enumerate(payload["matches"], start=1)
    ]


def write_output(document: list[dict[str, Any]], path: str | None) -> None:
    text = json.dumps(document, indent=2, ensure_ascii=False)
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    try:
        store = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except RecursionError:
        print("Error reading input: document is nested too deeply", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    engine = SearchReplace(store, literal=parsed.literal)
    engine.show_matches = parsed.show_matches

    listing: list[str] = []

    def on_state(payload: dict[str, Any]) -> None:
        listing[:] = render_matches(payload, parsed.literal) if payload["showMatches"] else []

    engine.subscribe(on_state)

    replacing = parsed.replace is not None
    engine.evaluate(
        parsed.search,
        parsed.replace or "",
        case_sensitive=parsed.case_sensitive,
        context=replacing,
    )

    # Replaced document goes to stdout unless --output is set, so the report moves to stderr
    report = sys.stderr if replacing and not parsed.output else sys.stdout
    print(engine.status_message() or "No matches found.", file=report)
    for line in listing:
        print(line, file=report)

    if replacing:
        try:
            write_output(store.to_json(), parsed.output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
