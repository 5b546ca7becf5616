from __future__ import annotations

import pytest

from pathdb.errors import DatabaseError, ErrorCode
from pathdb.tree import MISSING, get_path, lookup, node_type, set_path, split_path, to_node, unset_path


@pytest.mark.parametrize("bad", ["", "a..b", ".a", "a.", None, 3])
def test_split_path_rejects_bad_keys(bad):
    with pytest.raises(DatabaseError) as exc:
        split_path(bad)
    assert exc.value.code is ErrorCode.INVALID_KEY


def test_set_creates_intermediate_objects():
    doc: dict = {}
    set_path(doc, "a.b.c", 1)
    assert doc == {"a": {"b": {"c": 1}}}
    assert get_path(doc, "a.b.c") == 1
    assert get_path(doc, "a.b") == {"c": 1}


def test_set_replaces_scalar_intermediate_with_object():
    doc = {"set": 10}
    set_path(doc, "set.prop", 10)
    assert doc == {"set": {"prop": 10}}


def test_array_segments():
    doc = {"arr": [{"x": 1}, {"x": 2}]}
    assert get_path(doc, "arr.1.x") == 2
    assert lookup(doc, "arr.5") is MISSING

    set_path(doc, "arr.0.x", 9)
    set_path(doc, "arr.2", "tail")
    assert doc == {"arr": [{"x": 9}, {"x": 2}, "tail"]}

    with pytest.raises(DatabaseError) as exc:
        set_path(doc, "arr.7", 1)
    assert exc.value.code is ErrorCode.INVALID_KEY


def test_array_addressed_by_name_is_replaced():
    doc = {"arr": [1, 2]}
    set_path(doc, "arr.name.x", 1)
    assert doc == {"arr": {"name": {"x": 1}}}


def test_get_default_and_stored_null():
    doc = {"n": None}
    assert get_path(doc, "missing", "fallback") == "fallback"
    assert get_path(doc, "n", "fallback") is None
    assert get_path(doc, "n.deeper", "fallback") == "fallback"


def test_unset_prunes_emptied_objects():
    doc = {"a": {"b": 1, "c": {"d": 2}}, "keep": 1}

    assert unset_path(doc, "a.c.d") is True
    assert doc == {"a": {"b": 1}, "keep": 1}

    assert unset_path(doc, "a.b") is True
    assert doc == {"keep": 1}

    assert unset_path(doc, "a.b") is False
    assert unset_path(doc, "keep.x") is False


def test_unset_array_element_keeps_array():
    doc = {"arr": [1]}
    assert unset_path(doc, "arr.0") is True
    assert doc == {"arr": []}


@pytest.mark.parametrize(
    "value,tag",
    [(None, "null"), (True, "boolean"), (1, "number"), (1.5, "number"), ("s", "string"), ([], "array"), ({}, "object")],
)
def test_node_type(value, tag):
    assert node_type(value) == tag


def test_to_node_copies_and_normalizes():
    src = {"t": (1, 2), "nested": {"l": [1]}}
    out = to_node(src)
    assert out == {"t": [1, 2], "nested": {"l": [1]}}
    out["nested"]["l"].append(2)
    assert src["nested"]["l"] == [1]


@pytest.mark.parametrize("bad", [{1: "x"}, {"s": {1, 2}}, float("nan"), [object()]])
def test_to_node_rejects_foreign_values(bad):
    with pytest.raises(DatabaseError) as exc:
        to_node(bad)
    assert exc.value.code is ErrorCode.INVALID_VALUE


def test_unset_keeps_emptied_array_element_in_place():
    doc = {"a": [{"k": 1}, {"k": 2}]}
    assert unset_path(doc, "a.0.k") is True
    assert doc == {"a": [{}, {"k": 2}]}


def test_unset_prunes_objects_above_an_array_but_not_its_elements():
    doc = {"a": {"items": [{"only": {"x": 1}}]}}
    assert unset_path(doc, "a.items.0.only.x") is True
    assert doc == {"a": {"items": [{}]}}
