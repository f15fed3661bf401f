"""
Core search & replace pass.

Implements:
- Replacement executor: match, count and substitute one attribute value
- Table executor: caption plus every cell, one update per changed section
- Tree walker: depth-first, document order, per-block fault isolation

A pass never edits blocks directly. Changes go through the store's
update_attributes, and only when the pass is a replace pass (context=True)
and the new text differs from the old.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .blocks import allowed_types
from .dom import Block, effective_text
from .ledger import MatchLedger
from .pattern import MatchRule, build_rule
from .store import BlockStore
from .targets import CitationField, SimpleField, SummaryField, TableFields, resolve_target

logger = logging.getLogger(__name__)


class Outcome(IntEnum):
    """Per-block result of a pass. Higher wins when a block has several fields."""
    SKIPPED = 0  # type not allowed, or no target attribute present
    NO_MATCH = 1
    COUNTED = 2  # matches found, nothing written
    COMMITTED = 3  # at least one update requested


@dataclass
class PassState:
    """Everything one pass reads and the accumulators it writes."""
    rule: MatchRule
    replacement: str
    context: bool
    allowed: Collection[str]
    store: BlockStore
    ledger: MatchLedger = field(default_factory=MatchLedger)
    outcomes: dict[str, Outcome] = field(default_factory=dict)


def substitute(old: str, state: PassState) -> tuple[str, Outcome]:
    """Replace all matches in `old`, recording each one in the ledger."""
    new, n = state.rule.sub(old, state.replacement)
    for _ in range(n):
        state.ledger.record(old)

    if n == 0:
        return new, Outcome.NO_MATCH
    if new != old and state.context:
        return new, Outcome.COMMITTED
    return new, Outcome.COUNTED


def replace_attribute(block: Block, name: str, state: PassState) -> tuple[Outcome, str | None]:
    """
    Run the rule over one attribute.

    Returns the outcome and the new text when it changed. A missing
    attribute, or one with no text, is skipped.
    """
    value = block.attributes.get(name)
    if value is None:
        return Outcome.SKIPPED, None

    old = effective_text(value)
    if old is None:
        logger.debug("Block %s: attribute %r holds no text, skipping", block.client_id, name)
        return Outcome.SKIPPED, None

    new, outcome = substitute(old, state)
    if new == old:
        return outcome, None

    if state.context:
        state.store.update_attributes(block.client_id, {name: new})
    return outcome, new


def replace_citation(block: Block, target: CitationField, state: PassState) -> Outcome:
    # Read before the citation update lands in the store
    has_mirror = bool(block.attributes.get(target.mirror))

    outcome, new = replace_attribute(block, target.field, state)
    if new is not None and has_mirror:
        if state.context:
            state.store.update_attributes(block.client_id, {target.mirror: new})
        state.ledger.bump()
    return outcome


def _replace_cells(rows: list[Any], target: TableFields, state: PassState) -> tuple[list[Any], Outcome]:
    """Rebuild rows with substituted cell content. Input rows are not modified."""
    outcome = Outcome.SKIPPED
    new_rows = []
    for row in rows:
        cells = row.get(target.cells) if isinstance(row, dict) else None
        if not cells:
            new_rows.append(row)
            continue

        new_cells = []
        row_changed = False
        for cell in cells:
            content = cell.get(target.cell_field) if isinstance(cell, dict) else None
            old = effective_text(content)
            if not old:
                # Empty or missing cell content: nothing to search
                new_cells.append(cell)
                continue

            new, cell_outcome = substitute(old, state)
            outcome = max(outcome, cell_outcome)
            if new != old:
                cell = {**cell, target.cell_field: new}
                row_changed = True
            new_cells.append(cell)

        new_rows.append({**row, target.cells: new_cells} if row_changed else row)
    return new_rows, outcome


def replace_table(block: Block, target: TableFields, state: PassState) -> Outcome:
    """Caption and each of body/head/foot are updated independently."""
    attrs = block.attributes
    outcome = Outcome.SKIPPED

    if attrs.get(target.caption):
        caption_outcome, _ = replace_attribute(block, target.caption, state)
        outcome = max(outcome, caption_outcome)

    for section in target.sections:
        rows = attrs.get(section)
        if not rows:
            continue
        new_rows, section_outcome = _replace_cells(list(rows), target, state)
        outcome = max(outcome, section_outcome)
        if section_outcome == Outcome.COMMITTED:
            state.store.update_attributes(block.client_id, {section: new_rows})

    return outcome


def process_block(block: Block, state: PassState) -> Outcome:
    """Resolve the block's target attributes and run the executor on them."""
    target = resolve_target(block.name, state.allowed)

    if isinstance(target, TableFields):
        return replace_table(block, target, state)
    if isinstance(target, CitationField):
        return replace_citation(block, target, state)
    if isinstance(target, (SimpleField, SummaryField)):
        return replace_attribute(block, target.field, state)[0]
    return Outcome.SKIPPED


def walk(blocks: Sequence[Block], state: PassState) -> MatchLedger:
    """
    Visit blocks depth-first in document order.

    Uses an explicit stack, so nesting depth is not bounded by the
    recursion limit. A failure on one block is logged and recorded as
    SKIPPED; its inner blocks and its siblings are still visited.
    """
    stack: list[Block] = list(reversed(blocks))
    while stack:
        block = stack.pop()
        try:
            outcome = process_block(block, state)
        except Exception:
            logger.warning(
                "Skipping block %s (%s): failed to process attributes",
                block.client_id, block.name, exc_info=True,
            )
            outcome = Outcome.SKIPPED
        state.outcomes[block.client_id] = outcome
        stack.extend(reversed(block.inner_blocks))
    return state.ledger


def run_pass(
    store: BlockStore,
    search_text: str,
    replace_text: str = "",
    case_sensitive: bool = False,
    context: bool = False,
    allowed: Collection[str] | None = None,
    literal: bool | None = None,
    ledger: MatchLedger | None = None,
) -> PassState:
    """Run one full pass and return its state (ledger and per-block outcomes)."""
    if ledger is None:
        ledger = MatchLedger()
    ledger.reset()

    rule = build_rule(search_text, case_sensitive, literal=literal)
    state = PassState(
        rule=rule,
        replacement=replace_text,
        context=context,
        allowed=allowed_types() if allowed is None else allowed,
        store=store,
        ledger=ledger,
    )
    if rule.matches_nothing:
        return state

    walk(store.get_blocks(), state)
    logger.debug(
        "%s pass for %r: %d match(es) in %d value(s)",
        "Replace" if context else "Search", search_text, ledger.count, len(ledger),
    )
    return state


def evaluate(
    store: BlockStore,
    search_text: str,
    replace_text: str = "",
    case_sensitive: bool = False,
    context: bool = False,
    allowed: Collection[str] | None = None,
    literal: bool | None = None,
) -> MatchLedger:
    """One pass over the store's tree. Returns the pass ledger."""
    return run_pass(
        store, search_text, replace_text, case_sensitive, context,
        allowed=allowed, literal=literal,
    ).ledger
