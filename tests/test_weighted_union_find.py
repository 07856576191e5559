"""
Tests for weighted_union_find.py - disjoint-set forest with union by size
and path halving.
"""

import random

import numpy as np
import pytest

from percolation_errors import InvalidArgument, OutOfBounds
from weighted_union_find import WeightedQuickUnionUF, find_root, union_by_size


def assert_valid_forest(uf):
    """Every index reaches a root, and each root's size counts its members."""
    roots = [uf.find(i) for i in range(len(uf))]
    members = {}
    for r in roots:
        members[r] = members.get(r, 0) + 1
    assert len(members) == uf.get_count()
    for r, count in members.items():
        assert uf.parent[r] == r
        assert uf.size[r] == count


class TestConstruction:
    """Tests for a fresh forest."""

    def test_every_site_is_its_own_root(self):
        uf = WeightedQuickUnionUF(6)
        assert [uf.find(i) for i in range(6)] == list(range(6))
        assert uf.get_count() == 6
        assert len(uf) == 6

    @pytest.mark.parametrize("n", [0, -4])
    def test_non_positive_size_rejected(self, n):
        with pytest.raises(InvalidArgument):
            WeightedQuickUnionUF(n)


class TestUnion:
    """Tests for union(), connected() and size accounting."""

    def test_union_connects_and_counts(self):
        uf = WeightedQuickUnionUF(5)
        assert uf.union(0, 1) is True
        assert uf.connected(0, 1)
        assert not uf.connected(0, 2)
        assert uf.get_count() == 4
        assert uf.component_size(1) == 2

    def test_repeated_union_is_noop(self):
        uf = WeightedQuickUnionUF(4)
        uf.union(0, 1)
        assert uf.union(1, 0) is False
        assert uf.union(0, 1) is False
        assert uf.get_count() == 3
        assert uf.component_size(0) == 2

    def test_smaller_tree_goes_under_larger(self):
        uf = WeightedQuickUnionUF(5)
        uf.union(0, 1)
        uf.union(0, 2)
        big_root = uf.find(0)
        uf.union(3, 0)
        assert uf.find(3) == big_root
        assert uf.component_size(3) == 4

    def test_equal_sizes_keep_first_root(self):
        uf = WeightedQuickUnionUF(2)
        uf.union(0, 1)
        assert uf.find(1) == 0

    def test_random_unions_keep_valid_forest(self):
        rng = random.Random(7)
        uf = WeightedQuickUnionUF(200)
        for _ in range(150):
            uf.union(rng.randrange(200), rng.randrange(200))
            assert_valid_forest(uf)

    def test_chain_collapses_to_one_component(self):
        uf = WeightedQuickUnionUF(50)
        for i in range(49):
            uf.union(i, i + 1)
        assert uf.get_count() == 1
        assert uf.component_size(17) == 50
        assert_valid_forest(uf)


class TestValidation:
    """Out-of-range indices raise OutOfBounds."""

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_find_out_of_range(self, index):
        uf = WeightedQuickUnionUF(3)
        with pytest.raises(OutOfBounds):
            uf.find(index)

    def test_union_out_of_range(self):
        uf = WeightedQuickUnionUF(3)
        with pytest.raises(OutOfBounds):
            uf.union(0, 3)
        with pytest.raises(IndexError):
            uf.connected(-1, 0)


class TestKernels:
    """The compiled kernels work directly on the numpy arrays."""

    def test_find_root_halves_path(self):
        # 4 -> 3 -> 2 -> 1 -> 0
        parent = np.array([0, 0, 1, 2, 3], dtype=np.int64)
        assert find_root(parent, 4) == 0
        # every visited node now skips a level
        assert parent[4] == 2
        assert parent[2] == 0

    def test_union_by_size_updates_root_size(self):
        parent = np.arange(4, dtype=np.int64)
        size = np.ones(4, dtype=np.int64)
        assert union_by_size(parent, size, 0, 1)
        assert union_by_size(parent, size, 2, 0)
        assert not union_by_size(parent, size, 1, 2)
        assert parent[2] == 0
        assert size[0] == 3
