"""Tests for FrozenSearchTree."""

import pytest

from frozen_search_tree import FrozenSearchTree
from query import AnyChar, AnyString, Literal
from search_tree import SearchTree

WORDS = ["abcd", "abd", "abcdd", "abdd", "abccd", "ab", "ad", "", "apple", "app", "zebra"]

QUERIES = [
    (),
    (Literal(""),),
    (Literal("ab"),),
    (Literal("ab"), AnyChar, Literal("d")),
    (Literal("ab"), AnyString, Literal("d")),
    (AnyString, Literal("b"), AnyString),
    (AnyChar, AnyChar),
    (Literal("ap"), AnyString),
    (Literal("missing"),),
    ("a*",),
    ("?b*d",),
]


@pytest.fixture
def source():
    t = SearchTree(lambda s: s)
    for w in WORDS:
        t.add(w)
    return t


class TestFrozenSearchTree:
    """Tests for snapshot construction and queries."""

    def test_freeze_returns_snapshot(self, source):
        frozen = source.freeze()
        assert isinstance(frozen, FrozenSearchTree)
        assert len(frozen) == len(source)

    @pytest.mark.parametrize("queries", QUERIES)
    def test_agrees_with_source(self, source, queries):
        frozen = source.freeze()
        assert frozen.search(*queries) == source.search(*queries)

    def test_node_count_matches_source(self, source):
        count = 0
        stack = [source._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        assert source.freeze().node_count == count

    def test_independent_of_later_changes(self, source):
        frozen = source.freeze()
        source.add("abz")
        source.remove("abcd")
        assert "abcd" in frozen.search(Literal("abcd"))
        assert frozen.search(Literal("abz")) == []
        assert len(frozen) == len(WORDS)

    def test_contains(self, source):
        frozen = source.freeze()
        assert "apple" in frozen
        assert "" in frozen
        assert "appl" not in frozen
        assert "apples" not in frozen

    def test_iter_sorted(self, source):
        assert list(source.freeze()) == sorted(WORDS)

    def test_empty(self):
        frozen = SearchTree(lambda s: s).freeze()
        assert len(frozen) == 0
        assert frozen.node_count == 1
        assert frozen.search() == []
        assert frozen.search(Literal("a")) == []
        assert str(frozen) == "└── root\n"

    def test_shared_keys(self):
        t = SearchTree(lambda pair: pair[0])
        t.add(("k", 1))
        t.add(("k", 2))
        t.add(("j", 3))
        frozen = t.freeze()
        assert frozen.search(Literal("k")) == t.search(Literal("k"))
        assert len(frozen.search(Literal("k"))) == 2

    def test_debug_string_matches_source(self, source):
        frozen = source.freeze()
        assert str(frozen) == str(source)
        assert frozen.to_debug_string() == source.to_debug_string()

    def test_read_only(self, source):
        frozen = source.freeze()
        assert not hasattr(frozen, "add")
        assert not hasattr(frozen, "remove")

    def test_repr(self, source):
        r = repr(source.freeze())
        assert "FrozenSearchTree" in r
        assert f"{len(WORDS)} entries" in r
