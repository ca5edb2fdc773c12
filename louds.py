"""LOUDS (Level-Order Unary Degree Sequence) tree topology."""

from functools import lru_cache
from typing import Optional

from bitarray import bitarray
from bitarray.util import count_n


class LOUDS:
    """LOUDS tree topology stored in a ``bitarray``.

    Nodes are visited breadth-first; each node contributes one 1-bit per
    child followed by a 0-bit terminator.  Node 0 is the root.  Every other
    node v (≥ 1) corresponds to the v-th 1-bit (1-based) in the bit string.

    Rank is ``bitarray.count`` over a prefix, select is
    ``bitarray.util.count_n``.
    """

    def __init__(self, bits: bitarray) -> None:
        self._ba = bits
        self._ones = bits.count(1)
        # Child tuples are requested repeatedly during wildcard expansion.
        self.children = lru_cache(maxsize=4096)(self._children_uncached)

    @classmethod
    def from_degrees(cls, degrees: "list[int]") -> "LOUDS":
        """Build from child counts listed in breadth-first node order."""
        bits = bitarray()
        for degree in degrees:
            bits.extend([True] * degree)
            bits.append(False)
        return cls(bits)

    @property
    def node_count(self) -> int:
        return self._ones + 1

    @property
    def bits(self) -> bitarray:
        return self._ba

    def _select_one(self, k: int) -> int:
        """Position of the k-th 1-bit (0-based k)."""
        return count_n(self._ba, k + 1, 1) - 1

    def _select_zero(self, k: int) -> int:
        """Position of the k-th 0-bit (0-based k)."""
        return count_n(self._ba, k + 1, 0) - 1

    def _block_start(self, v: int) -> int:
        if v == 0:
            return 0
        return self._select_zero(v - 1) + 1

    def first_child(self, v: int) -> Optional[int]:
        p = self._block_start(v)
        if p < len(self._ba) and self._ba[p]:
            return self._ba.count(1, 0, p + 1)
        return None

    def next_sibling(self, v: int) -> Optional[int]:
        pos = self._select_one(v - 1)  # position of the 1-bit for node v
        nxt = pos + 1
        if nxt < len(self._ba) and self._ba[nxt]:
            return v + 1
        return None

    def parent(self, v: int) -> Optional[int]:
        """Parent of node *v*; ``None`` for the root.

        The 0-bits before v's 1-bit each close one earlier node's block, so
        their count is the id of the block v sits in.
        """
        if v == 0:
            return None
        pos = self._select_one(v - 1)
        return self._ba.count(0, 0, pos)

    def degree(self, v: int) -> int:
        p = self._block_start(v)
        end = self._ba.index(0, p)
        return end - p

    def _children_uncached(self, v: int) -> "tuple[int, ...]":
        first = self.first_child(v)
        if first is None:
            return ()
        return tuple(range(first, first + self.degree(v)))

    def __len__(self) -> int:
        return self.node_count

    def __repr__(self) -> str:
        return f"LOUDS({self.node_count} nodes)"
