"""Mutable character trie with set-valued leaves and wildcard search."""

import logging
import weakref
from typing import Any, Callable, Hashable, Iterator, Optional, Union

from query import AnyChar, AnyString, Literal, Query, combine, steps

logger = logging.getLogger(__name__)


class SearchTree:
    """In-memory index from derived string keys to values.

    Every value is stored under ``key(value)``.  Several values may share a
    key; each ``(key, value)`` pair is stored once.  Values must be hashable.

    * ``add(value)`` / ``remove(value)`` - maintain the index.
    * ``search(*queries)`` - values whose key matches, sorted by key.
    * ``freeze()`` - read-only LOUDS snapshot answering the same queries.

    Not thread-safe: guard all calls with an external lock when sharing.
    """

    class _Node:
        __slots__ = ("char", "children", "entries", "parent", "__weakref__")

        def __init__(self, parent: "Optional[SearchTree._Node]" = None,
                     char: Optional[str] = None) -> None:
            self.char = char
            self.children: dict[str, SearchTree._Node] = {}
            # dict used as an insertion-ordered set of (key, value) pairs
            self.entries: dict[tuple[str, Any], None] = {}
            self.parent = weakref.ref(parent) if parent is not None else None

        def __repr__(self) -> str:
            return (f"_Node({self.char!r}, children={len(self.children)}, "
                    f"entries={len(self.entries)})")

    def __init__(self, key: Callable[[Any], str]) -> None:
        """Create an empty tree.

        Args:
            key: Pure function deriving the string key of a stored value.
                It must return the same key for a value for as long as the
                value is stored.
        """
        if not callable(key):
            raise TypeError(f"key must be callable, not {type(key).__name__}")
        self._key = key
        self._root = SearchTree._Node()
        self._size = 0

    # ------------------------------------------------------------------ #
    #  Mutation                                                            #
    # ------------------------------------------------------------------ #

    def _key_of(self, value: Any) -> str:
        key = self._key(value)
        if not isinstance(key, str):
            raise TypeError(
                f"key function must return str, got {type(key).__name__} for {value!r}"
            )
        return key

    def add(self, value: Hashable) -> None:
        """Store *value* under its key.  Adding an equal value again is a no-op."""
        key = self._key_of(value)
        pair = (key, value)
        hash(pair)  # unhashable values fail before any node is created
        node = self._root
        for char in key:
            child = node.children.get(char)
            if child is None:
                child = node.children[char] = SearchTree._Node(node, char)
            node = child
        if pair not in node.entries:
            node.entries[pair] = None
            self._size += 1

    def remove(self, value: Hashable) -> bool:
        """Remove *value* and prune nodes left without entries or children.

        Returns:
            ``True`` if the path spelling the value's key existed, whether or
            not this particular value was stored there; ``False`` otherwise
            (and nothing is changed).
        """
        key = self._key_of(value)
        node = self._root
        for char in key:
            node = node.children.get(char)
            if node is None:
                logger.debug("remove: no path for key %r", key)
                return False

        pair = (key, value)
        if pair in node.entries:
            del node.entries[pair]
            self._size -= 1

        while not node.entries and not node.children and node.parent is not None:
            parent = node.parent()
            del parent.children[node.char]
            logger.debug("pruned empty node %r below %r", node.char, parent.char)
            node = parent
        return True

    def clear(self) -> None:
        """Drop every entry."""
        self._root = SearchTree._Node()
        self._size = 0

    # ------------------------------------------------------------------ #
    #  Search                                                              #
    # ------------------------------------------------------------------ #

    def search(self, *queries: Union[Query, str]) -> list:
        """Return values whose key matches the concatenated *queries*.

        With no arguments every value matches.  ``str`` arguments are glob
        patterns (see ``query.parse``).  Results are distinct and sorted by
        key.

        Example::

            tree.search(Literal("ab"), AnyChar, Literal("d"))
            tree.search("ab?d")
        """
        return match(self, combine(queries))

    def __iter__(self) -> Iterator[Any]:
        return iter(self.search())

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: Hashable) -> bool:
        key = self._key_of(value)
        node: Optional[SearchTree._Node] = self._root
        for char in key:
            node = node.children.get(char)
            if node is None:
                return False
        return (key, value) in node.entries

    # Navigation interface used by ``match``.

    def _children(self, node: "_Node") -> list:
        return [node.children[c] for c in sorted(node.children)]

    def _child(self, node: "_Node", char: str) -> "Optional[_Node]":
        return node.children.get(char)

    def _entries(self, node: "_Node"):
        return node.entries

    def _label(self, node: "_Node") -> Optional[str]:
        return node.char

    # ------------------------------------------------------------------ #
    #  Snapshot                                                            #
    # ------------------------------------------------------------------ #

    def freeze(self) -> "FrozenSearchTree":
        """Return a read-only LOUDS snapshot of the current contents."""
        from frozen_search_tree import FrozenSearchTree
        return FrozenSearchTree(self)

    # ------------------------------------------------------------------ #
    #  String representations                                              #
    # ------------------------------------------------------------------ #

    def to_debug_string(self) -> str:
        """Render the node structure as a box-drawing tree."""
        return render(self)

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} with {self._size} entries>"


# ------------------------------------------------------------------ #
#  Matcher                                                             #
# ------------------------------------------------------------------ #

def match(tree: Any, query: Query) -> list:
    """Evaluate *query* against *tree* and return matching values.

    *tree* supplies ``_root`` plus ``_children``, ``_child`` and
    ``_entries``.  The frontier is an insertion-ordered set of nodes,
    starting at the root; each primitive step maps it to the next one.
    """
    frontier: dict = {tree._root: None}
    for step in steps(query):
        if not frontier:
            return []
        nxt: dict = {}
        if isinstance(step, Literal):
            if not step.text:
                continue
            for node in frontier:
                for char in step.text:
                    node = tree._child(node, char)
                    if node is None:
                        break
                else:
                    nxt[node] = None
        elif step is AnyChar:
            for node in frontier:
                for child in tree._children(node):
                    nxt[child] = None
        elif step is AnyString:
            for node in frontier:
                if node in nxt:
                    # subtree already collected from an ancestor
                    continue
                stack = [node]
                while stack:
                    current = stack.pop()
                    nxt[current] = None
                    stack.extend(reversed(tree._children(current)))
        else:
            raise TypeError(f"Unknown query step {step!r}")
        frontier = nxt

    pairs: dict = {}
    for node in frontier:
        for pair in tree._entries(node):
            pairs[pair] = None
    return [value for _, value in sorted(pairs, key=lambda p: p[0])]


def render(tree: Any) -> str:
    """Box-drawing rendering shared by the mutable and frozen trees."""
    lines: list[str] = []
    # (node, prefix, is_tail)
    stack: list = [(tree._root, "", True)]
    while stack:
        node, prefix, is_tail = stack.pop()
        char = tree._label(node)
        line = prefix + ("└── " if is_tail else "├── ") + ("root" if char is None else char)
        entries = tree._entries(node)
        if entries:
            line += " [" + ", ".join(sorted({k for k, _ in entries})) + "]"
        lines.append(line + "\n")
        children = tree._children(node)
        child_prefix = prefix + ("    " if is_tail else "│   ")
        last = len(children) - 1
        for i in range(last, -1, -1):
            stack.append((children[i], child_prefix, i == last))
    return "".join(lines)
