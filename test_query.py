"""Tests for the query AST."""

import pickle

import pytest

from query import AnyChar, AnyString, Combined, Literal, combine, parse, steps


class TestLiteral:
    """Tests for Literal construction and value semantics."""

    def test_text(self):
        assert Literal("abc").text == "abc"
        assert Literal("").text == ""

    def test_rejects_non_str(self):
        """Literal text must be a string."""
        with pytest.raises(TypeError):
            Literal(42)

    def test_immutable(self):
        lit = Literal("abc")
        with pytest.raises(AttributeError):
            lit.text = "xyz"
        assert lit.text == "abc"

    def test_equality_and_hash(self):
        assert Literal("a") == Literal("a")
        assert Literal("a") != Literal("b")
        assert hash(Literal("a")) == hash(Literal("a"))
        assert len({Literal("a"), Literal("a"), Literal("b")}) == 2

    def test_repr(self):
        assert repr(Literal("ab")) == "Literal('ab')"


class TestWildcards:
    """Tests for the AnyChar / AnyString singletons."""

    def test_distinct(self):
        assert AnyChar is not AnyString
        assert AnyChar != AnyString

    def test_repr(self):
        assert repr(AnyChar) == "AnyChar"
        assert repr(AnyString) == "AnyString"

    def test_pickle_keeps_identity(self):
        """Unpickled wildcards are the module singletons."""
        assert pickle.loads(pickle.dumps(AnyChar)) is AnyChar
        assert pickle.loads(pickle.dumps(AnyString)) is AnyString


class TestCombined:
    """Tests for Combined and ``+`` composition."""

    def test_plus_builds_combined(self):
        q = Literal("ab") + AnyChar + Literal("d")
        assert isinstance(q, Combined)
        assert q.queries == (Literal("ab"), AnyChar, Literal("d"))

    def test_nested_combined_flattens(self):
        inner = Combined(AnyChar, Literal("x"))
        q = Combined(Literal("a"), inner, Combined(AnyString))
        assert q == Combined(Literal("a"), AnyChar, Literal("x"), AnyString)
        assert len(q) == 4

    def test_plus_with_non_query(self):
        """Adding a plain string is not a query composition."""
        with pytest.raises(TypeError):
            Literal("a") + "b"

    def test_rejects_non_query_member(self):
        with pytest.raises(TypeError):
            Combined(Literal("a"), "b")

    def test_immutable(self):
        q = Combined(Literal("a"))
        with pytest.raises(AttributeError):
            q.queries = ()

    def test_empty(self):
        assert Combined().queries == ()
        assert steps(Combined()) == []

    def test_repr(self):
        assert repr(Combined(Literal("a"), AnyString)) == "Combined(Literal('a'), AnyString)"

    def test_pickle_roundtrip(self):
        q = Literal("ab") + AnyChar + Literal("d") + AnyString
        assert pickle.loads(pickle.dumps(q)) == q


class TestSteps:
    """Tests for flattening a query into primitive steps."""

    def test_single_primitive(self):
        assert steps(Literal("a")) == [Literal("a")]
        assert steps(AnyString) == [AnyString]

    def test_preserves_declared_order(self):
        """The stack-based worklist must not reverse the pattern."""
        q = Combined(Literal("1"), Combined(Literal("2"), Literal("3")), Literal("4"))
        assert steps(q) == [Literal("1"), Literal("2"), Literal("3"), Literal("4")]

    def test_rejects_non_query(self):
        with pytest.raises(TypeError):
            steps("abc")


class TestCombine:
    """Tests for turning search arguments into one query."""

    def test_no_arguments_matches_everything(self):
        assert combine([]) is AnyString

    def test_single_argument(self):
        assert combine([Literal("a")]) == Literal("a")

    def test_many_arguments(self):
        assert combine([Literal("a"), AnyChar]) == Combined(Literal("a"), AnyChar)

    def test_strings_are_globs(self):
        assert combine(["a?"]) == Combined(Literal("a"), AnyChar)
        assert combine(["a", "*"]) == Combined(Literal("a"), AnyString)

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            combine([42])
        with pytest.raises(TypeError):
            combine([Literal("a"), 42])


class TestParse:
    """Tests for glob pattern parsing."""

    def test_plain_text(self):
        assert parse("abc") == Literal("abc")

    def test_empty(self):
        assert parse("") == Literal("")

    def test_wildcards(self):
        assert parse("ab?d*") == Combined(Literal("ab"), AnyChar, Literal("d"), AnyString)

    def test_lone_star(self):
        assert parse("*") is AnyString

    def test_lone_question_mark(self):
        assert parse("?") is AnyChar

    def test_repeated_stars_collapse(self):
        assert parse("a**b") == Combined(Literal("a"), AnyString, Literal("b"))

    def test_repeated_question_marks(self):
        assert parse("??") == Combined(AnyChar, AnyChar)

    def test_escapes(self):
        assert parse(r"a\*b\?c") == Literal("a*b?c")
        assert parse("a\\\\") == Literal("a\\")

    def test_trailing_escape(self):
        with pytest.raises(ValueError):
            parse("abc\\")
