"""
Tests for matching.engine module.

Tests cover:
- Weight tier to match type mapping
- Highest-weight-first greedy assignment
- One-to-one constraint and unmatched index lists
- Deterministic tie-breaking in row-major order
"""

import pytest

from extraction_eval.matching.engine import GreedyMatchingEngine, match_type_for_weight


class TestMatchTypeForWeight:
    """Test match_type_for_weight() function."""

    @pytest.mark.parametrize(
        ("weight", "expected"),
        [(1.0, "exact"), (0.75, "semantic"), (0.5, "partial")],
    )
    def test_tiers(self, weight, expected):
        assert match_type_for_weight(weight) == expected


class TestGreedyMatchingEngine:
    """Test GreedyMatchingEngine.match()."""

    def test_empty_matrix(self):
        result = GreedyMatchingEngine().match([], [], [])

        assert result.total_weight == 0.0
        assert result.matches == []
        assert result.unmatched_gold_indices == []
        assert result.unmatched_pred_indices == []

    def test_gold_without_predictions(self):
        result = GreedyMatchingEngine().match([[], []], ["a", "b"], [])

        assert result.matches == []
        assert result.unmatched_gold_indices == [0, 1]

    def test_zero_cells_never_match(self):
        result = GreedyMatchingEngine().match([[0.0, 0.0]], ["a"], ["x", "y"])

        assert result.matches == []
        assert result.unmatched_gold_indices == [0]
        assert result.unmatched_pred_indices == [0, 1]

    def test_highest_weight_first(self):
        """The exact cell is taken before the semantic cell competing for it."""
        weights = [
            [0.75, 1.0],
            [0.0, 0.5],
        ]

        result = GreedyMatchingEngine().match(weights, ["g0", "g1"], ["p0", "p1"])

        pairs = {(m.gold_index, m.pred_index) for m in result.matches}
        assert pairs == {(0, 1)}
        assert result.total_weight == 1.0
        assert result.unmatched_gold_indices == [1]
        assert result.unmatched_pred_indices == [0]

    def test_one_to_one(self):
        weights = [
            [0.75, 0.75],
            [0.75, 0.75],
        ]

        result = GreedyMatchingEngine().match(weights, ["g0", "g1"], ["p0", "p1"])

        gold_indices = [m.gold_index for m in result.matches]
        pred_indices = [m.pred_index for m in result.matches]
        assert len(set(gold_indices)) == len(gold_indices)
        assert len(set(pred_indices)) == len(pred_indices)
        assert result.total_weight == pytest.approx(1.5)

    def test_ties_break_in_row_major_order(self):
        weights = [
            [0.75, 0.75],
            [0.75, 0.0],
        ]

        result = GreedyMatchingEngine().match(weights, ["g0", "g1"], ["p0", "p1"])

        # (0, 0) is taken first, leaving g1 with nothing
        assert [(m.gold_index, m.pred_index) for m in result.matches] == [(0, 0)]
        assert result.unmatched_gold_indices == [1]

    def test_match_pairs_carry_items_and_types(self):
        weights = [[0.0, 0.5], [1.0, 0.0]]

        result = GreedyMatchingEngine().match(weights, ["g0", "g1"], ["p0", "p1"])

        by_gold = {m.gold_index: m for m in result.matches}
        assert by_gold[1].match_type == "exact"
        assert by_gold[1].gold_item == "g1"
        assert by_gold[1].pred_item == "p0"
        assert by_gold[0].match_type == "partial"
        assert by_gold[0].weight == 0.5
        assert result.total_weight == pytest.approx(1.5)

    def test_deterministic(self):
        weights = [[0.5, 0.75, 0.0], [0.75, 0.5, 0.5], [0.0, 0.75, 1.0]]
        engine = GreedyMatchingEngine()

        first = engine.match(weights, ["a", "b", "c"], ["x", "y", "z"])
        second = engine.match(weights, ["a", "b", "c"], ["x", "y", "z"])

        assert first == second
