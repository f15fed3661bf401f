"""
Attribute resolver.

Each searchable block type keeps its replaceable text in different
attributes. resolve_target() maps a block type name to a tagged variant
carrying exactly the attribute names the executor must touch.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

QUOTE_BLOCKS = frozenset({"core/quote", "core/pullquote"})
DETAILS_BLOCKS = frozenset({"core/details"})
TABLE_BLOCKS = frozenset({"core/table"})

TABLE_SECTIONS = ("body", "head", "foot")


@dataclass(frozen=True)
class SimpleField:
    """Plain text block: one attribute."""
    field: str = "content"


@dataclass(frozen=True)
class CitationField:
    """
    Quote-like block.

    `mirror` is a legacy attribute kept in step with the citation. When it is
    set, it receives the same new string and adds one to the count.
    """
    field: str = "citation"
    mirror: str = "value"


@dataclass(frozen=True)
class SummaryField:
    """Collapsible block: the visible summary line."""
    field: str = "summary"


@dataclass(frozen=True)
class TableFields:
    """Table block: caption plus every cell of body, head and foot rows."""
    caption: str = "caption"
    sections: tuple[str, ...] = TABLE_SECTIONS
    cells: str = "cells"
    cell_field: str = "content"


@dataclass(frozen=True)
class Unsupported:
    """Block type outside the allowed set."""
    name: str = ""


Target = SimpleField | CitationField | SummaryField | TableFields | Unsupported


def resolve_target(name: str, allowed: Collection[str]) -> Target:
    """Pick the target variant for a block type name."""
    if name not in allowed:
        return Unsupported(name)
    if name in QUOTE_BLOCKS:
        return CitationField()
    if name in DETAILS_BLOCKS:
        return SummaryField()
    if name in TABLE_BLOCKS:
        return TableFields()
    return SimpleField()
