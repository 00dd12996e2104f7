"""
Tests for the element set and fusion table
"""

import pytest
import numpy as np

from fusion_law import ElementSet, FusionTable, InvalidFusionLaw


JORDAN_POSITIONS = [
    [[0], [], [2]],
    [[], [1], [2]],
    [[2], [2], [0, 1]],
]


class TestElementSet:
    def test_positions(self):
        s = ElementSet(["a", "b", "c"])
        assert len(s) == 3
        assert s.index("b") == 1
        assert s.label(2) == "c"
        assert list(s) == ["a", "b", "c"]

    def test_contains(self):
        s = ElementSet([1, 2])
        assert 1 in s
        assert 3 not in s
        assert [1] not in s

    def test_duplicates_rejected(self):
        with pytest.raises(InvalidFusionLaw):
            ElementSet([1, 2, 1])

    def test_empty_rejected(self):
        with pytest.raises(InvalidFusionLaw):
            ElementSet([])

    def test_unhashable_rejected(self):
        with pytest.raises(InvalidFusionLaw):
            ElementSet([{"a": 1}, 2])

    def test_subset_keeps_given_order(self):
        s = ElementSet(["a", "b", "c"])
        assert s.subset([2, 0]).labels == ("c", "a")


class TestFusionTable:
    def test_lookup(self):
        t = FusionTable(JORDAN_POSITIONS)
        assert t.size == 3
        assert t.product(2, 2) == frozenset({0, 1})
        assert t.entry(0, 1) == frozenset()

    def test_product_sets(self):
        t = FusionTable(JORDAN_POSITIONS)
        assert t.product_sets([0, 1], [2]) == frozenset({2})
        assert t.product_sets([0, 2], [0, 2]) == frozenset({0, 1, 2})

    def test_product_sets_empty_operand(self):
        t = FusionTable(JORDAN_POSITIONS)
        assert t.product_sets([], [0, 1, 2]) == frozenset()
        assert t.product_sets([0], []) == frozenset()

    def test_dangling_position_rejected(self):
        with pytest.raises(InvalidFusionLaw):
            FusionTable([[[0], [5]], [[], [1]]])

    def test_ragged_table_rejected(self):
        with pytest.raises(InvalidFusionLaw):
            FusionTable([[[0], []], [[1]]])

    def test_symmetry(self):
        assert FusionTable(JORDAN_POSITIONS).is_symmetric()
        assert not FusionTable([[[0], [1]], [[], [1]]]).is_symmetric()

    def test_restrict_reindexes(self):
        t = FusionTable(JORDAN_POSITIONS)
        sub = t.restrict([1, 2])
        assert sub.size == 2
        assert sub.product(0, 0) == frozenset({0})
        assert sub.product(0, 1) == frozenset({1})
        # 0 is outside the restriction
        assert sub.product(1, 1) == frozenset({0})

    def test_permute(self):
        t = FusionTable(JORDAN_POSITIONS)
        p = t.permute([2, 0, 1])
        assert p.product(0, 0) == frozenset({1, 2})
        assert p.product(1, 0) == frozenset({0})

    def test_union_and_block_sum(self):
        a = FusionTable([[[0], []], [[], [1]]])
        b = FusionTable([[[], [1]], [[1], []]])
        u = a.union(b)
        assert u.product(0, 1) == frozenset({1})
        assert u.product(0, 0) == frozenset({0})

        s = a.block_sum(FusionTable([[[0]]]))
        assert s.size == 3
        assert s.product(2, 2) == frozenset({2})
        assert s.product(0, 2) == frozenset()

    def test_cooccurrence_matrix(self):
        adj = FusionTable(JORDAN_POSITIONS).cooccurrence_matrix()
        expected = np.array([
            [False, True, False],
            [True, False, False],
            [False, False, False],
        ])
        np.testing.assert_array_equal(adj, expected)

    def test_equality(self):
        assert FusionTable(JORDAN_POSITIONS) == FusionTable(JORDAN_POSITIONS)
        assert hash(FusionTable(JORDAN_POSITIONS)) == hash(FusionTable(JORDAN_POSITIONS))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
