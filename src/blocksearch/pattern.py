"""
Pattern builder.

Turns the user's search text into a MatchRule: whole-word, global and
tag-safe. Tag safety is a boundary heuristic, not an HTML parser:

- a candidate preceded by an unclosed "<" sits inside an opening tag
- a candidate followed by ">" before the next "<" sits inside tag attributes

Both are rejected. The second check is a lookahead in the compiled pattern.
The first would need a variable-width lookbehind, which `re` does not allow,
so the scanner checks it at every candidate start and retries one character
further on rejection.

Search text is raw regex by default (metacharacters are not escaped). The
literal mode escapes it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .config import get_config
from .hooks import CASE_SENSITIVE, apply_filters

logger = logging.getLogger(__name__)

TAG_SAFE_TEMPLATE = r"\b{body}\b(?![^<]*?>)"


def inside_open_tag(text: str, pos: int) -> bool:
    """True if an unclosed "<" precedes pos."""
    return text.rfind("<", 0, pos) > text.rfind(">", 0, pos)


@dataclass(frozen=True)
class MatchRule:
    """Compiled tag-safe rule. A rule without a pattern matches nothing."""
    pattern: re.Pattern[str] | None
    search_text: str = ""
    case_sensitive: bool = False

    @classmethod
    def empty(cls, search_text: str = "", case_sensitive: bool = False) -> MatchRule:
        return cls(pattern=None, search_text=search_text, case_sensitive=case_sensitive)

    @property
    def matches_nothing(self) -> bool:
        return self.pattern is None

    def finditer(self, text: str) -> Iterator[re.Match[str]]:
        """All non-overlapping tag-safe matches, left to right."""
        if self.pattern is None:
            return
        pos = 0
        end = len(text)
        while pos <= end:
            m = self.pattern.search(text, pos)
            if m is None:
                return
            if inside_open_tag(text, m.start()):
                pos = m.start() + 1
                continue
            yield m
            # Empty matches must still make progress
            pos = m.end() if m.end() > m.start() else m.end() + 1

    def count(self, text: str) -> int:
        return sum(1 for _ in self.finditer(text))

    def sub(self, text: str, replacement: str) -> tuple[str, int]:
        """Replace every match with `replacement` taken literally. Returns (new_text, n)."""
        return self._rewrite(text, lambda _m: replacement)

    def highlight(self, text: str, wrap: Callable[[str], str]) -> str:
        """Wrap every matched substring, e.g. for a match list display."""
        return self._rewrite(text, lambda m: wrap(m.group(0)))[0]

    def _rewrite(self, text: str, repl: Callable[[re.Match[str]], str]) -> tuple[str, int]:
        parts: list[str] = []
        last = 0
        n = 0
        for m in self.finditer(text):
            parts.append(text[last:m.start()])
            parts.append(repl(m))
            last = m.end()
            n += 1
        if n == 0:
            return text, 0
        parts.append(text[last:])
        return "".join(parts), n


def default_case_sensitive() -> bool:
    """Configured case sensitivity after the case-sensitive filter."""
    return bool(apply_filters(CASE_SENSITIVE, get_config().search.case_sensitive))


def build_rule(search_text: str, case_sensitive: bool = False, literal: bool | None = None) -> MatchRule:
    """
    Build the tag-safe rule for search_text.

    case_sensitive is ORed with the configured default. literal=None means
    use the configured mode. Empty search text, or a raw pattern that does not
    compile, gives a rule that matches nothing.
    """
    case_sensitive = default_case_sensitive() or case_sensitive

    if not search_text:
        return MatchRule.empty(search_text, case_sensitive)

    if literal is None:
        literal = get_config().search.literal
    body = re.escape(search_text) if literal else search_text

    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        compiled = re.compile(TAG_SAFE_TEMPLATE.format(body=body), flags)
    except re.error as e:
        logger.warning("Search text %r is not a valid pattern: %s", search_text, e)
        return MatchRule.empty(search_text, case_sensitive)

    return MatchRule(pattern=compiled, search_text=search_text, case_sensitive=case_sensitive)
