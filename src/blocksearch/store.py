"""
Block store port.

The engine only needs to read the live tree and send attribute updates.
MemoryStore is the in-process implementation used by the CLI and tests; an
editor integration supplies its own object with the same two methods.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from .dom import Block, block_from_dict, block_to_dict, find_block, iter_blocks

logger = logging.getLogger(__name__)


class BlockStore(Protocol):
    """Interface the engine requires from the owner of the block tree."""

    def get_blocks(self) -> Sequence[Block]:
        """Top-level blocks in document order."""
        ...

    def update_attributes(self, client_id: str, attributes: dict[str, Any]) -> None:
        """Merge `attributes` into the block's attributes. No return value."""
        ...


class MemoryStore:
    """In-memory block tree. Keeps a log of every update it applied."""

    def __init__(self, blocks: list[Block] | None = None):
        self._blocks: list[Block] = list(blocks or [])
        self.updates: list[tuple[str, dict[str, Any]]] = []
        seen: set[str] = set()
        for block in iter_blocks(self._blocks):
            if block.client_id in seen:
                raise ValueError(f"Duplicate client id in block tree: {block.client_id!r}")
            seen.add(block.client_id)

    def get_blocks(self) -> list[Block]:
        return list(self._blocks)

    def update_attributes(self, client_id: str, attributes: dict[str, Any]) -> None:
        block = find_block(self._blocks, client_id)
        if block is None:
            raise KeyError(f"No block with client id {client_id!r}")
        block.attributes.update(attributes)
        self.updates.append((client_id, dict(attributes)))
        logger.debug("Updated %s %s: %s", block.name, client_id, sorted(attributes))

    def get_block(self, client_id: str) -> Block | None:
        return find_block(self._blocks, client_id)

    @classmethod
    def from_json(cls, data: list[dict[str, Any]]) -> MemoryStore:
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of blocks, got {type(data).__name__}")
        return cls([block_from_dict(item) for item in data])

    @classmethod
    def load(cls, path: str | Path) -> MemoryStore:
        with open(path, encoding="utf-8") as f:
            return cls.from_json(json.load(f))

    def to_json(self) -> list[dict[str, Any]]:
        return [block_to_dict(block) for block in self._blocks]
