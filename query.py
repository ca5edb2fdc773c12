"""Query AST for SearchTree pattern matching.

A query is one of four immutable variants:

* ``Literal(text)`` - exact characters.
* ``AnyChar``       - exactly one arbitrary character.
* ``AnyString``     - zero or more arbitrary characters.
* ``Combined(*qs)`` - ordered concatenation of sub-queries.

Queries compose with ``+``::

    Literal("ab") + AnyChar + Literal("d")

and glob strings convert with ``parse("ab?d*")``.
"""

from typing import Iterable, Union


class _Query:
    """Common base; only provides ``+`` composition."""

    __slots__ = ()

    def __add__(self, other: "Query") -> "Combined":
        if not isinstance(other, _Query):
            return NotImplemented
        return Combined(self, other)


class Literal(_Query):
    """Exact character sequence.  The empty literal matches without moving."""

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Literal text must be str, not {type(text).__name__}")
        object.__setattr__(self, "text", text)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash((Literal, self.text))

    def __repr__(self) -> str:
        return f"Literal({self.text!r})"

    def __reduce__(self) -> tuple:
        return (Literal, (self.text,))


class _AnyChar(_Query):
    __slots__ = ()

    def __repr__(self) -> str:
        return "AnyChar"

    def __reduce__(self) -> str:
        return "AnyChar"


class _AnyString(_Query):
    __slots__ = ()

    def __repr__(self) -> str:
        return "AnyString"

    def __reduce__(self) -> str:
        return "AnyString"


AnyChar = _AnyChar()
AnyString = _AnyString()


class Combined(_Query):
    """Ordered concatenation of queries.

    Nested ``Combined`` members are flattened on construction, so
    ``Combined(a, Combined(b, c)) == Combined(a, b, c)``.
    """

    __slots__ = ("queries",)

    def __init__(self, *queries: "Query") -> None:
        flat: list = []
        for q in queries:
            if isinstance(q, Combined):
                flat.extend(q.queries)
            elif isinstance(q, _Query):
                flat.append(q)
            else:
                raise TypeError(f"Combined member must be a query, not {type(q).__name__}")
        object.__setattr__(self, "queries", tuple(flat))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Combined):
            return NotImplemented
        return self.queries == other.queries

    def __hash__(self) -> int:
        return hash((Combined, self.queries))

    def __len__(self) -> int:
        return len(self.queries)

    def __iter__(self):
        return iter(self.queries)

    def __repr__(self) -> str:
        return f"Combined({', '.join(map(repr, self.queries))})"

    def __reduce__(self) -> tuple:
        return (Combined, self.queries)


Query = Union[Literal, _AnyChar, _AnyString, Combined]


# ------------------------------------------------------------------ #
#  Flattening                                                          #
# ------------------------------------------------------------------ #

def steps(query: Query) -> list:
    """Flatten *query* into its primitive steps, left to right.

    Uses an explicit stack; members of a ``Combined`` are pushed in
    reverse so they pop in declared order.
    """
    out: list = []
    stack: list = [query]
    while stack:
        q = stack.pop()
        if isinstance(q, Combined):
            stack.extend(reversed(q.queries))
        elif isinstance(q, _Query):
            out.append(q)
        else:
            raise TypeError(f"Expected a query, not {type(q).__name__}")
    return out


def combine(queries: Iterable[Union[Query, str]]) -> Query:
    """Build one query from search arguments.

    No arguments means "match everything" (``AnyString``); strings are
    parsed as glob patterns.
    """
    parts = [parse(q) if isinstance(q, str) else q for q in queries]
    if not parts:
        return AnyString
    if len(parts) == 1:
        if not isinstance(parts[0], _Query):
            raise TypeError(f"Expected a query or str, not {type(parts[0]).__name__}")
        return parts[0]
    return Combined(*parts)


# ------------------------------------------------------------------ #
#  Glob parsing                                                        #
# ------------------------------------------------------------------ #

def parse(pattern: str) -> Query:
    """Convert a glob string into a query.

    ``?`` matches one character, ``*`` any run of characters, and ``\\``
    makes the next character literal.

    Raises:
        ValueError: If the pattern ends with a lone escape.
    """
    parts: list = []
    buf: list[str] = []

    def _flush() -> None:
        if buf:
            parts.append(Literal("".join(buf)))
            buf.clear()

    it = iter(pattern)
    for ch in it:
        if ch == "\\":
            nxt = next(it, None)
            if nxt is None:
                raise ValueError(f"Trailing escape in pattern {pattern!r}")
            buf.append(nxt)
        elif ch == "?":
            _flush()
            parts.append(AnyChar)
        elif ch == "*":
            _flush()
            # consecutive stars are the same as one
            if not parts or parts[-1] is not AnyString:
                parts.append(AnyString)
        else:
            buf.append(ch)
    _flush()

    if not parts:
        return Literal("")
    if len(parts) == 1:
        return parts[0]
    return Combined(*parts)
