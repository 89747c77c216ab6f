"""Tests for the disjoint-set forest."""

import numpy as np

from numberpaint.utils.union_find import UnionFind


def test_singletons():
    uf = UnionFind(4)
    assert len(uf) == 4
    assert [uf.find(i) for i in range(4)] == [0, 1, 2, 3]


def test_union_joins_sets():
    uf = UnionFind(6)
    uf.union(0, 1)
    uf.union(2, 3)
    uf.union(1, 3)
    assert uf.find(0) == uf.find(3)
    assert uf.find(4) != uf.find(0)


def test_union_returns_root():
    uf = UnionFind(3)
    root = uf.union(0, 1)
    assert root in (0, 1)
    assert uf.find(0) == root
    assert uf.union(1, 0) == root


def test_roots_flattens():
    uf = UnionFind(5)
    for a, b in [(0, 1), (1, 2), (3, 4)]:
        uf.union(a, b)
    roots = uf.roots()
    assert len(set(roots[:3].tolist())) == 1
    assert roots[3] == roots[4]
    assert roots[0] != roots[3]


def test_roots_handles_deep_chain():
    uf = UnionFind(6)
    uf.parent[:] = [0, 0, 1, 2, 3, 4]
    assert uf.roots().tolist() == [0] * 6
    assert uf.parent.tolist() == [0] * 6


def test_union_many_joins_chain():
    uf = UnionFind(8)
    uf.union_many([7, 6, 5, 4], [6, 5, 4, 3])
    roots = uf.roots()
    assert len(set(roots[3:].tolist())) == 1
    assert roots[:3].tolist() == [0, 1, 2]


def test_union_many_matches_pairwise_union():
    gen = np.random.default_rng(3)
    a = gen.integers(0, 200, size=150)
    b = gen.integers(0, 200, size=150)

    bulk = UnionFind(200)
    bulk.union_many(a, b)
    single = UnionFind(200)
    for x, y in zip(a, b):
        single.union(int(x), int(y))

    bulk_roots = bulk.roots()
    single_roots = single.roots()
    # Same partition, whatever element ends up as root
    for i in range(200):
        assert np.array_equal(bulk_roots == bulk_roots[i], single_roots == single_roots[i])


def test_union_many_empty():
    uf = UnionFind(3)
    uf.union_many([], [])
    assert uf.roots().tolist() == [0, 1, 2]
