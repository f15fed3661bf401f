"""
Named filter chains.

A filter takes a value and returns a (possibly changed) value. Callbacks for
one hook run in priority order, then in registration order. This is the
extension point for the searchable block list and the case-sensitivity
default.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

ALLOWED_BLOCKS = "blocksearch.allowedBlocks"
CASE_SENSITIVE = "blocksearch.caseSensitive"

FilterCallback = Callable[[Any], Any]


class FilterRegistry:
    """Registry of filter callbacks keyed by hook name."""

    def __init__(self):
        self._filters: dict[str, list[tuple[int, int, FilterCallback]]] = {}
        self._seq = 0

    def add_filter(self, hook: str, callback: FilterCallback, priority: int = 10) -> None:
        self._seq += 1
        chain = self._filters.setdefault(hook, [])
        chain.append((priority, self._seq, callback))
        chain.sort(key=lambda item: (item[0], item[1]))

    def remove_filter(self, hook: str, callback: FilterCallback) -> bool:
        """Remove a callback. Returns True if it was registered."""
        chain = self._filters.get(hook, [])
        kept = [item for item in chain if item[2] is not callback]
        self._filters[hook] = kept
        return len(kept) != len(chain)

    def has_filters(self, hook: str) -> bool:
        return bool(self._filters.get(hook))

    def apply_filters(self, hook: str, value: Any) -> Any:
        for _, _, callback in self._filters.get(hook, []):
            value = callback(value)
        return value

    def clear(self, hook: str | None = None) -> None:
        if hook is None:
            self._filters.clear()
        else:
            self._filters.pop(hook, None)


# Global registry instance
filters = FilterRegistry()

add_filter = filters.add_filter
remove_filter = filters.remove_filter
apply_filters = filters.apply_filters
