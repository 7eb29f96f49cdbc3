"""
Tests for matching.weight_matrix module.

Tests cover:
- Matrix shape and exact-match cells
- Semantic and partial weights from classifier pairs
- Partial never overwriting a semantic cell
- Resolution of classifier pairs to original indices (duplicates, prefilter exclusion)
- Dropping pairs that resolve to nothing
"""

import logging

from extraction_eval.matching.models import (
    CausalRelationship,
    ClassificationResult,
    ClassifiedPair,
)
from extraction_eval.matching.prefilter import find_exact_matches
from extraction_eval.matching.weight_matrix import build_weight_matrix


def _build(gold, predicted, semantic=(), partial=()):
    exact = find_exact_matches(gold, predicted)
    classification = ClassificationResult(
        semantic_pairs=[ClassifiedPair(g, p) for g, p in semantic],
        partial_pairs=[ClassifiedPair(g, p) for g, p in partial],
    )
    return build_weight_matrix(gold, predicted, exact, classification)


class TestBuildWeightMatrix:
    """Test build_weight_matrix() function."""

    def test_shape(self):
        weights = _build(["a", "b"], ["x", "y", "z"])

        assert len(weights) == 2
        assert all(len(row) == 3 for row in weights)

    def test_empty_pools(self):
        assert _build([], []) == []
        assert _build([], ["x"]) == []
        assert _build(["a"], []) == [[]]

    def test_no_matches_all_zero(self):
        weights = _build(["a"], ["x"])

        assert weights == [[0.0]]

    def test_exact_cells(self):
        weights = _build(["Rain", "flood"], ["flood", "rain"])

        assert weights == [[0.0, 1.0], [1.0, 0.0]]

    def test_semantic_cell(self):
        weights = _build(["flooding"], ["floods"], semantic=[("flooding", "floods")])

        assert weights == [[0.75]]

    def test_partial_cell(self):
        weights = _build(["lung cancer"], ["cancer"], partial=[("lung cancer", "cancer")])

        assert weights == [[0.5]]

    def test_partial_does_not_overwrite_semantic(self):
        weights = _build(
            ["flooding"],
            ["floods"],
            semantic=[("flooding", "floods")],
            partial=[("flooding", "floods")],
        )

        assert weights == [[0.75]]

    def test_pairs_resolved_case_insensitively(self):
        weights = _build(["Flooding"], ["Floods"], semantic=[("flooding ", "FLOODS")])

        assert weights == [[0.75]]

    def test_pair_skips_indices_used_by_prefilter(self):
        """A classifier pair maps to the first item NOT consumed by an exact match."""
        gold = ["rain", "rain"]
        predicted = ["rain", "downpour"]

        weights = _build(gold, predicted, semantic=[("rain", "downpour")])

        # gold[0] is exactly matched to predicted[0]; the pair lands on gold[1]
        assert weights == [[1.0, 0.0], [0.0, 0.75]]

    def test_duplicate_leftovers_resolve_to_first_index(self):
        gold = ["flooding", "flooding"]
        predicted = ["floods"]

        weights = _build(gold, predicted, semantic=[("flooding", "floods")])

        assert weights == [[0.75], [0.0]]

    def test_unresolvable_pair_dropped(self, caplog):
        caplog.set_level(logging.INFO)

        weights = _build(
            ["flooding"],
            ["floods"],
            semantic=[("inundation", "floods"), ("flooding", "deluge")],
        )

        assert weights == [[0.0]]
        assert "Dropped 2 classifier pair(s)" in caplog.text

    def test_exact_matched_items_cannot_receive_classifier_weight(self):
        """A pair naming an exactly matched item resolves to nothing."""
        weights = _build(["rain"], ["rain"], semantic=[("rain", "rain")])

        assert weights == [[1.0]]

    def test_relationship_pairs(self):
        gold = [CausalRelationship(cause="heavy rain", effect="flooding")]
        predicted = [CausalRelationship(cause="rainfall", effect="floods")]

        weights = _build(gold, predicted, semantic=[(gold[0], predicted[0])])

        assert weights == [[0.75]]
