"""
Block type registry.

Block types are registered with a category. Searchable types are the ones
in the configured text category, passed through the allowed-blocks filter so
integrations can add or remove types.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import get_config
from ..hooks import ALLOWED_BLOCKS, apply_filters


@dataclass(frozen=True)
class BlockType:
    """A registered block type."""
    name: str  # e.g. "core/paragraph"
    category: str = "text"
    title: str = ""


class BlockTypeRegistry:
    """Registry of block types with category lookup."""

    def __init__(self):
        self._types: dict[str, BlockType] = {}

    def register(self, block_type: BlockType) -> None:
        """Register a block type. First registered wins for name conflicts."""
        if block_type.name not in self._types:
            self._types[block_type.name] = block_type

    def unregister(self, name: str) -> BlockType | None:
        return self._types.pop(name, None)

    def get(self, name: str) -> BlockType | None:
        return self._types.get(name)

    def by_category(self, category: str) -> list[str]:
        """Names of all types in a category, in registration order."""
        return [bt.name for bt in self._types.values() if bt.category == category]

    @property
    def block_types(self) -> list[BlockType]:
        """List all registered types."""
        return list(self._types.values())


# Global registry instance
registry = BlockTypeRegistry()


def text_blocks(types: BlockTypeRegistry | None = None) -> list[str]:
    """Names of the text-capable block types."""
    types = types or registry
    return types.by_category(get_config().blocks.text_category)


def allowed_types(types: BlockTypeRegistry | None = None) -> frozenset[str]:
    """Text block names after the allowed-blocks filter has run."""
    names = apply_filters(ALLOWED_BLOCKS, text_blocks(types))
    return frozenset(names)
