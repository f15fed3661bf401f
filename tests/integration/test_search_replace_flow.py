"""
Integration Test: full passes over a realistic block document

Validates the end-to-end properties of search and replace:
1. Dry runs count every tag-safe whole-word match and never write
2. Replace runs write each changed attribute exactly once
3. Replacing and searching again finds nothing
"""

import json
from pathlib import Path

import pytest

from blocksearch import SearchReplace, evaluate
from blocksearch.dom import Block
from blocksearch.store import MemoryStore

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def store():
    return MemoryStore.load(FIXTURES / "document.json")


def test_dry_run_counts_all_matches(store):
    ledger = evaluate(store, "foo")
    # p1: 2, h1: 1, q1: citation + mirror, t1: caption + cell
    assert ledger.count == 7
    assert ledger.matches == (
        'Foo is not <a href="https://foo.example">foo</a>.',
        "<em>Foo</em> heading",
        "Foo",
        "Foo table",
    )
    assert store.updates == []


def test_case_sensitive_dry_run(store):
    assert evaluate(store, "Foo", case_sensitive=True).count == 6


def test_replace_writes_each_changed_attribute_once(store):
    ledger = evaluate(store, "foo", "Bar", context=True)
    assert ledger.count == 7
    assert store.updates == [
        ("p1", {"content": 'Bar is not <a href="https://foo.example">Bar</a>.'}),
        ("h1", {"content": "<em>Bar</em> heading"}),
        ("q1", {"citation": "Bar"}),
        ("q1", {"value": "Bar"}),
        ("t1", {"caption": "Bar table"}),
        ("t1", {"body": [{"cells": [{"content": "Bar", "tag": "td"}, {"content": "food", "tag": "td"}]}]}),
    ]
    assert store.get_block("i1").attributes == {"alt": "Foo", "caption": "Foo"}


def test_replace_then_search_finds_nothing(store):
    evaluate(store, "foo", "bar", context=True)
    assert evaluate(store, "foo").count == 0


def test_tag_safe_replacement():
    store = MemoryStore([Block("p1", "core/paragraph", {"content": '<a href="foo">foo</a>'})])
    assert evaluate(store, "foo").count == 1
    evaluate(store, "foo", "bar", context=True)
    assert store.get_block("p1").attributes["content"] == '<a href="foo">bar</a>'


def test_empty_search_ignores_tree(store):
    engine = SearchReplace(store)
    result = engine.evaluate("", "anything", context=True)
    assert result.count == 0
    assert result.matches == ()
    assert store.updates == []


def test_saved_document_keeps_structure(store, tmp_path):
    evaluate(store, "foo", "bar", context=True)
    out = tmp_path / "out.json"
    out.write_text(json.dumps(store.to_json()))
    reloaded = MemoryStore.load(out)
    assert [b.client_id for b in reloaded.get_blocks()] == ["p1", "h1", "g1", "t1", "i1"]
    assert reloaded.get_block("p2").attributes["content"] == "Nothing here"
    assert evaluate(reloaded, "foo").count == 0
