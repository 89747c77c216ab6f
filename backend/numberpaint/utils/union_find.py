"""Disjoint-set forest with path halving and union by rank.

``union_many`` and ``roots`` work on whole arrays at once so a labeling pass
over millions of runs never loops element by element in Python.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


class UnionFind:
    """One instance per labeling pass; discarded afterwards."""

    def __init__(self, n: int) -> None:
        self.parent: NDArray[np.int64] = np.arange(n, dtype=np.int64)
        self.rank: NDArray[np.uint8] = np.zeros(n, dtype=np.uint8)

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, x: int) -> int:
        parent = self.parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]  # path halving
            x = int(parent[x])
        return int(x)

    def union(self, a: int, b: int) -> int:
        """Join the sets of a and b; return the surviving root."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return root_a
        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        return root_a

    def union_many(self, a: ArrayLike, b: ArrayLike) -> None:
        """Join ``a[i]`` with ``b[i]`` for every i.

        Each round hooks the larger root of every unjoined pair under the
        smallest root it is paired with, then flattens the forest. Parents
        always have a lower index than their children, so no cycles form and
        the root count drops every round.
        """
        a = np.asarray(a, dtype=np.int64)
        b = np.asarray(b, dtype=np.int64)
        while len(a):
            roots = self.roots()
            ra, rb = roots[a], roots[b]
            open_pairs = ra != rb
            if not open_pairs.any():
                return
            a, b = a[open_pairs], b[open_pairs]
            ra, rb = ra[open_pairs], rb[open_pairs]
            np.minimum.at(self.parent, np.maximum(ra, rb), np.minimum(ra, rb))

    def roots(self) -> NDArray[np.int64]:
        """Root of every element, flattened so parent[i] is the root."""
        parent = self.parent
        while True:
            grand = parent[parent]
            if np.array_equal(grand, parent):
                break
            parent = grand
        self.parent = parent
        return parent.copy()
