"""
Tier 0: Data Model Contract Tests

These tests pin down the block tree structure the engine walks and the
JSON shape the store loads and saves.
"""

import pytest
from blocksearch.dom import (
    Block,
    RichText,
    block_from_dict,
    block_to_dict,
    effective_text,
    find_block,
    iter_blocks,
)


class TestBlockCreation:
    def test_block_creation(self):
        block = Block(client_id="a", name="core/paragraph", attributes={"content": "hi"})
        assert block.client_id == "a"
        assert block.name == "core/paragraph"
        assert block.attributes["content"] == "hi"
        assert block.inner_blocks == []

    def test_block_requires_client_id(self):
        with pytest.raises(ValueError, match="client id"):
            Block(client_id="", name="core/paragraph")

    def test_add_child(self):
        parent = Block(client_id="g", name="core/group")
        child = Block(client_id="p", name="core/paragraph")
        result = parent.add_child(child)
        assert result is child
        assert parent.inner_blocks == [child]


class TestTraversal:
    def test_depth_first_is_pre_order(self):
        tree = Block("a", "core/group", inner_blocks=[
            Block("b", "core/group", inner_blocks=[Block("c", "core/paragraph")]),
            Block("d", "core/paragraph"),
        ])
        assert [b.client_id for b in tree.depth_first()] == ["a", "b", "c", "d"]

    def test_iter_blocks_spans_top_level(self):
        blocks = [
            Block("a", "core/paragraph"),
            Block("b", "core/group", inner_blocks=[Block("c", "core/paragraph")]),
        ]
        assert [b.client_id for b in iter_blocks(blocks)] == ["a", "b", "c"]

    def test_find_block_nested(self):
        inner = Block("c", "core/paragraph")
        blocks = [Block("a", "core/group", inner_blocks=[inner])]
        assert find_block(blocks, "c") is inner
        assert find_block(blocks, "zzz") is None


class TestEffectiveText:
    def test_plain_string(self):
        assert effective_text("Foo") == "Foo"

    def test_rich_text_prefers_markup(self):
        value = RichText(original_html="<b>Foo</b>", text="Foo")
        assert effective_text(value) == "<b>Foo</b>"

    def test_rich_text_without_markup_falls_back_to_text(self):
        assert effective_text(RichText(text="Foo")) == "Foo"

    def test_non_text_values(self):
        assert effective_text(None) is None
        assert effective_text(3) is None
        assert effective_text({"cells": []}) is None


class TestJson:
    def test_rich_text_round_trip(self):
        data = {
            "clientId": "h",
            "name": "core/heading",
            "attributes": {"content": {"originalHTML": "<em>x</em>", "text": "x"}, "level": 2},
            "innerBlocks": [],
        }
        block = block_from_dict(data)
        assert block.attributes["content"] == RichText(original_html="<em>x</em>", text="x")
        assert block_to_dict(block) == data

    def test_nested_inner_blocks(self):
        block = block_from_dict({
            "clientId": "g",
            "name": "core/group",
            "innerBlocks": [{"clientId": "p", "name": "core/paragraph", "attributes": {"content": "x"}}],
        })
        assert block.attributes == {}
        assert block.inner_blocks[0].client_id == "p"

    def test_table_rows_stay_plain(self):
        block = block_from_dict({
            "clientId": "t",
            "name": "core/table",
            "attributes": {"body": [{"cells": [{"content": "a", "tag": "td"}]}]},
        })
        assert block.attributes["body"] == [{"cells": [{"content": "a", "tag": "td"}]}]

    def test_rich_text_keeps_unknown_keys(self):
        data = {
            "clientId": "p",
            "name": "core/paragraph",
            "attributes": {"content": {"originalHTML": "<b>y</b>", "formats": [["bold"]]}},
            "innerBlocks": [],
        }
        block = block_from_dict(data)
        assert block.attributes["content"] == RichText(original_html="<b>y</b>")
        assert block_to_dict(block) == data

    def test_rich_text_built_in_code_omits_empty_text(self):
        block = Block("p", "core/paragraph", {"content": RichText(original_html="<i>z</i>")})
        assert block_to_dict(block)["attributes"]["content"] == {"originalHTML": "<i>z</i>"}

    def test_null_inner_blocks_and_attributes(self):
        block = block_from_dict({"clientId": "p", "name": "core/paragraph", "attributes": None, "innerBlocks": None})
        assert block.attributes == {}
        assert block.inner_blocks == []


class TestMalformedJson:
    def test_block_not_an_object(self):
        with pytest.raises(ValueError, match="must be an object"):
            block_from_dict(1)

    def test_inner_block_not_an_object(self):
        with pytest.raises(ValueError, match="must be an object"):
            block_from_dict({"clientId": "g", "name": "core/group", "innerBlocks": ["p"]})

    def test_inner_blocks_not_a_list(self):
        with pytest.raises(ValueError, match="innerBlocks must be a list"):
            block_from_dict({"clientId": "g", "name": "core/group", "innerBlocks": "p"})

    def test_attributes_not_an_object(self):
        with pytest.raises(ValueError, match="attributes must be an object"):
            block_from_dict({"clientId": "p", "name": "core/paragraph", "attributes": "hello"})

    def test_name_not_a_string(self):
        with pytest.raises(ValueError, match="must be strings"):
            block_from_dict({"clientId": "p", "name": ["core/paragraph"]})


def test_depth_first_handles_deep_nesting():
    root = Block("b0", "core/group")
    node = root
    for i in range(1, 5000):
        node = node.add_child(Block(f"b{i}", "core/group"))
    ids = [b.client_id for b in root.depth_first()]
    assert len(ids) == 5000
    assert ids[0] == "b0"
    assert ids[-1] == "b4999"
