"""
Match ledger.

Pass-scoped record of what a search found: the total match count and the
distinct original field values that contained at least one match, in the
order the walker reached them.
"""

from __future__ import annotations


class MatchLedger:
    """Accumulator for one pass. The walker is the only writer."""

    def __init__(self):
        self._originals: dict[str, None] = {}  # dict keeps insertion order
        self.count = 0

    def record(self, original: str) -> None:
        """Count one match inside `original`."""
        self.count += 1
        self._originals.setdefault(original, None)

    def bump(self, n: int = 1) -> None:
        """Count without recording an original (legacy mirror fields)."""
        self.count += n

    def reset(self) -> None:
        self._originals.clear()
        self.count = 0

    @property
    def matches(self) -> tuple[str, ...]:
        return tuple(self._originals)

    def __len__(self) -> int:
        return len(self._originals)

    def __contains__(self, original: object) -> bool:
        return original in self._originals

    def __repr__(self) -> str:
        return f"MatchLedger(count={self.count}, matches={len(self._originals)})"
