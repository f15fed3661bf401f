"""
DOM - block tree model for blocksearch.

An editor document is an ordered list of top-level Blocks. Each block has a
type name, an attribute map and ordered inner blocks. Attribute values are
plain strings or RichText values that carry the canonical raw markup.

Key invariant: the tree is owned by a store. The engine reads blocks and asks
the store for changes, it never edits a Block itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RichText:
    """
    Rich-text attribute value. `original_html` is the raw markup.

    `source` is the mapping the value was loaded from. It is written back
    as-is so keys the engine does not know about (formats, replacements)
    survive a save.
    """
    original_html: str | None = None
    text: str = ""
    source: dict[str, Any] | None = field(default=None, compare=False, hash=False, repr=False)

    def __str__(self) -> str:
        if self.original_html:
            return self.original_html
        return self.text


@dataclass
class Block:
    """A node in the block tree."""
    client_id: str
    name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    inner_blocks: list[Block] = field(default_factory=list)

    def __post_init__(self):
        if not self.client_id:
            raise ValueError(f"Block must have a client id, got {self.client_id!r} for {self.name!r}")

    def depth_first(self) -> Iterator[Block]:
        """Traverse tree depth-first, yielding self then inner blocks."""
        stack: list[Block] = [self]
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.inner_blocks))

    def add_child(self, child: Block) -> Block:
        """Add an inner block and return it for chaining."""
        self.inner_blocks.append(child)
        return child


def effective_text(value: Any) -> str | None:
    """
    Text the matcher runs against.

    RichText yields its raw markup when present, plain strings pass through.
    Anything else (None, numbers, dicts) has no text and yields None.
    """
    if isinstance(value, RichText):
        return str(value)
    if isinstance(value, str):
        return value
    return None


def iter_blocks(blocks: Iterable[Block]) -> Iterator[Block]:
    """Document order over a list of top-level blocks."""
    for block in blocks:
        yield from block.depth_first()


def find_block(blocks: Iterable[Block], client_id: str) -> Block | None:
    """Find a block anywhere in the tree by client id."""
    for block in iter_blocks(blocks):
        if block.client_id == client_id:
            return block
    return None


def block_from_dict(data: dict[str, Any]) -> Block:
    """
    Build a block (and its inner blocks) from editor-style JSON.

    Raises ValueError when the data does not have the shape of a block.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Block must be an object, got {type(data).__name__}")

    client_id = data.get("clientId", "")
    name = data.get("name", "")
    attributes = data.get("attributes") or {}
    inner_blocks = data.get("innerBlocks") or []

    if not isinstance(client_id, str) or not isinstance(name, str):
        raise ValueError(f"Block clientId and name must be strings, got {client_id!r}, {name!r}")
    if not isinstance(attributes, dict):
        raise ValueError(f"Block {client_id!r}: attributes must be an object, got {type(attributes).__name__}")
    if not isinstance(inner_blocks, list):
        raise ValueError(f"Block {client_id!r}: innerBlocks must be a list, got {type(inner_blocks).__name__}")

    return Block(
        client_id=client_id,
        name=name,
        attributes={key: _value_from_json(value) for key, value in attributes.items()},
        inner_blocks=[block_from_dict(child) for child in inner_blocks],
    )


def block_to_dict(block: Block) -> dict[str, Any]:
    """Inverse of block_from_dict."""
    return {
        "clientId": block.client_id,
        "name": block.name,
        "attributes": {key: _value_to_json(value) for key, value in block.attributes.items()},
        "innerBlocks": [block_to_dict(child) for child in block.inner_blocks],
    }


def _value_from_json(value: Any) -> Any:
    if isinstance(value, dict):
        if "originalHTML" in value:
            return RichText(original_html=value["originalHTML"], text=value.get("text") or "", source=dict(value))
        return {key: _value_from_json(v) for key, v in value.items()}
    if isinstance(value, list):
        return [_value_from_json(v) for v in value]
    return value


def _value_to_json(value: Any) -> Any:
    if isinstance(value, RichText):
        if value.source is not None:
            return {**value.source, "originalHTML": value.original_html}
        data = {"originalHTML": value.original_html}
        if value.text:
            data["text"] = value.text
        return data
    if isinstance(value, dict):
        return {key: _value_to_json(v) for key, v in value.items()}
    if isinstance(value, list):
        return [_value_to_json(v) for v in value]
    return value
