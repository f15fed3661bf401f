"""
Search session and controller.

SearchReplace is what a dialog or CLI talks to. Each evaluate() call is one
pass: it resets the ledger, walks the tree, and then tells every subscriber
what was found with a payload of the shape the match-list display expects:

    {"matchString": str, "caseSensitive": bool,
     "showMatches": bool, "matches": tuple[str, ...]}

Nothing re-runs on its own. Callers invoke evaluate() (or search()/replace())
whenever the search text, case sensitivity or replace intent changes, and
must not run two passes against the same store at once.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Collection
from dataclasses import dataclass
from typing import Any

from .config import get_config
from .core import Outcome, run_pass
from .ledger import MatchLedger
from .store import BlockStore

logger = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class SearchSession:
    """Inputs of one pass. context=False searches, context=True replaces."""
    search_text: str = ""
    replace_text: str = ""
    case_sensitive: bool = False
    context: bool = False


@dataclass(frozen=True)
class EvaluationResult:
    """Ledger contents after a pass."""
    count: int
    matches: tuple[str, ...]
    context: bool = False


class SearchReplace:
    """Runs passes against a store and publishes the results."""

    def __init__(
        self,
        store: BlockStore,
        allowed: Collection[str] | None = None,
        literal: bool | None = None,
    ):
        self.store = store
        self.session = SearchSession()
        self.ledger = MatchLedger()
        self.show_matches = get_config().search.show_matches
        self.outcomes: dict[str, Outcome] = {}
        self._allowed = allowed
        self._literal = literal
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a payload listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def evaluate(
        self,
        search_text: str,
        replace_text: str = "",
        case_sensitive: bool = False,
        context: bool = False,
    ) -> EvaluationResult:
        """Run exactly one pass and publish the result."""
        self.session = SearchSession(search_text, replace_text, case_sensitive, context)
        state = run_pass(
            self.store,
            search_text,
            replace_text,
            case_sensitive,
            context,
            allowed=self._allowed,
            literal=self._literal,
            ledger=self.ledger,
        )
        self.outcomes = dict(state.outcomes)
        self._notify()
        return self.result()

    def search(self, search_text: str | None = None, case_sensitive: bool | None = None) -> EvaluationResult:
        """Dry run with the current inputs, optionally changing text or case first."""
        s = self.session
        return self.evaluate(
            s.search_text if search_text is None else search_text,
            s.replace_text,
            s.case_sensitive if case_sensitive is None else case_sensitive,
            context=False,
        )

    def replace(self, replace_text: str | None = None) -> EvaluationResult:
        """Replace pass for the current search text."""
        s = self.session
        return self.evaluate(
            s.search_text,
            s.replace_text if replace_text is None else replace_text,
            s.case_sensitive,
            context=True,
        )

    def seed(self, selection: str, in_dialog: bool = False) -> bool:
        """
        Pre-fill the search text from the user's current selection.

        Selections made inside the search dialog itself are ignored. Does not
        run a pass. Returns True if the search text was changed.
        """
        if not selection or in_dialog:
            return False
        self.session = dataclasses.replace(self.session, search_text=selection)
        return True

    def set_replace_text(self, replace_text: str) -> None:
        self.session = dataclasses.replace(self.session, replace_text=replace_text)

    def toggle_matches(self) -> bool:
        """Show or hide the match list. Publishes the new state."""
        self.show_matches = not self.show_matches
        self._notify()
        return self.show_matches

    def reset(self) -> None:
        """Clear inputs and results, as when the dialog closes."""
        self.session = SearchSession()
        self.ledger.reset()
        self.outcomes = {}
        self._notify()

    def result(self) -> EvaluationResult:
        return EvaluationResult(self.ledger.count, self.ledger.matches, self.session.context)

    def payload(self) -> dict[str, Any]:
        return {
            "matchString": self.session.search_text,
            "caseSensitive": self.session.case_sensitive,
            "showMatches": self.show_matches,
            "matches": self.ledger.matches,
        }

    def status_message(self) -> str:
        """User-facing summary of the last pass, empty when nothing matched."""
        count = self.ledger.count
        if not count:
            return ""
        if self.session.context:
            return f"{count} item(s) replaced successfully."
        return f"{count} item(s) found."

    def _notify(self) -> None:
        payload = self.payload()
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Match listener %r failed", listener)
