"""Read-only LOUDS snapshot of a SearchTree."""

import bisect
from collections import deque
from typing import Any, Hashable, Iterator, Optional, Union

from bitarray import bitarray

from louds import LOUDS
from query import Query, combine
from search_tree import SearchTree, match, render


class FrozenSearchTree:
    """Immutable snapshot of a ``SearchTree`` backed by LOUDS + edge labels.

    Create with ``tree.freeze()`` (or ``FrozenSearchTree(tree)``).  Answers
    ``search`` exactly like the source tree did at snapshot time; later
    changes to the source are not visible.

    Layout (node 0 is the root, node v ≥ 1 is the v-th LOUDS 1-bit):

    * ``_louds``   - topology, children emitted in ascending char order.
    * ``_labels``  - ``str``; ``_labels[v - 1]`` is the edge label into v.
    * ``_node_entries`` - tuple per node of its ``(key, value)`` pairs.
    """

    def __init__(self, tree: SearchTree) -> None:
        bits = bitarray()
        labels: list[str] = []
        entries: list[tuple] = []

        queue: deque = deque([tree._root])
        while queue:
            node = queue.popleft()
            entries.append(tuple(node.entries))
            for char in sorted(node.children):
                bits.append(True)
                labels.append(char)
                queue.append(node.children[char])
            bits.append(False)

        self._key = tree._key
        self._louds = LOUDS(bits)
        self._labels = "".join(labels)
        self._node_entries = tuple(entries)
        self._size = len(tree)

    # ------------------------------------------------------------------ #
    #  Navigation interface used by ``match``                              #
    # ------------------------------------------------------------------ #

    _root = 0

    def _children(self, v: int) -> "tuple[int, ...]":
        return self._louds.children(v)

    def _child(self, v: int, char: str) -> Optional[int]:
        """Binary search among v's children for edge label == *char*.

        Valid because children were emitted sorted by label.
        """
        kids = self._louds.children(v)
        if not kids:
            return None
        lo = kids[0] - 1  # 0-based label index of first child
        hi = lo + len(kids)
        pos = bisect.bisect_left(self._labels, char, lo, hi)
        if pos < hi and self._labels[pos] == char:
            return pos + 1
        return None

    def _entries(self, v: int) -> tuple:
        return self._node_entries[v]

    def _label(self, v: int) -> Optional[str]:
        return None if v == 0 else self._labels[v - 1]

    # ------------------------------------------------------------------ #
    #  Queries                                                             #
    # ------------------------------------------------------------------ #

    def search(self, *queries: Union[Query, str]) -> list:
        """Same contract as ``SearchTree.search``."""
        return match(self, combine(queries))

    def __iter__(self) -> Iterator[Any]:
        return iter(self.search())

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: Hashable) -> bool:
        key = self._key(value)
        v: Optional[int] = 0
        for char in key:
            v = self._child(v, char)
            if v is None:
                return False
        return (key, value) in self._node_entries[v]

    @property
    def node_count(self) -> int:
        return self._louds.node_count

    def __str__(self) -> str:
        return render(self)

    def to_debug_string(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return (f"<{type(self).__name__} with {self._size} entries, "
                f"{self.node_count} nodes>")

