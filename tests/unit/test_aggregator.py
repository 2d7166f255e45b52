"""Unit tests for the factor score aggregator."""

import pytest

from routerisk.core.exceptions import AggregationInvariantError
from routerisk.risk.aggregator import aggregate
from routerisk.risk.types import FactorId, FactorOrigin, FactorScore
from routerisk.risk.weights import WeightPolicy


@pytest.fixture
def policy() -> WeightPolicy:
    """Default weight policy."""
    return WeightPolicy.default()


class TestAggregate:
    """Tests for aggregate()."""

    def test_reference_route(self, scenario_scores, policy):
        """Test the reference route's weighted total."""
        result = aggregate(scenario_scores, policy)

        assert result.total_score == pytest.approx(4.59)
        assert result.display_score == 4.59
        assert result.substituted == ()

    def test_all_defaults(self, all_default_scores, policy):
        """Test all-default factors aggregate to exactly 5."""
        assert aggregate(all_default_scores, policy).total_score == 5.0

    def test_all_maximum(self, policy):
        """Test all factors at 10 aggregate to exactly 10."""
        scores = {f: FactorScore(factor_id=f, value=10.0) for f in FactorId}
        assert aggregate(scores, policy).total_score == 10.0

    def test_missing_factors_substituted(self, policy):
        """Test factors without a score receive the default."""
        scores = {FactorId.ROAD_CONDITIONS: FactorScore(FactorId.ROAD_CONDITIONS, 9.0)}
        result = aggregate(scores, policy)

        assert len(result.substituted) == 10
        assert FactorId.ROAD_CONDITIONS not in result.substituted
        substituted = result.factor_scores[FactorId.AMENITIES]
        assert substituted.origin == FactorOrigin.DEFAULT
        assert substituted.supporting_detail["reason"] == "not_calculated"
        assert result.total_score == pytest.approx((9.0 * 15 + 5.0 * 85) / 100)

    def test_factor_scores_in_policy_order(self, scenario_scores, policy):
        """Test the filled scores follow policy order."""
        shuffled = dict(reversed(list(scenario_scores.items())))
        result = aggregate(shuffled, policy)

        assert tuple(result.factor_scores) == policy.factor_ids

    @pytest.mark.parametrize("value", [0.5, 10.5, float("nan")])
    def test_out_of_range_factor_is_fatal(self, policy, value):
        """Test unclamped factor values are never coerced."""
        scores = {FactorId.AMENITIES: FactorScore(FactorId.AMENITIES, value)}

        with pytest.raises(AggregationInvariantError):
            aggregate(scores, policy)

    def test_bounded_by_inputs(self, policy):
        """Test totals stay within [1, 10] for valid inputs."""
        for low, high in [(1.0, 1.0), (1.0, 10.0), (3.3, 7.7)]:
            scores = {
                f: FactorScore(f, low if i % 2 else high) for i, f in enumerate(FactorId)
            }
            total = aggregate(scores, policy).total_score
            assert 1.0 <= total <= 10.0

    def test_deterministic(self, scenario_scores, policy):
        """Test identical inputs give identical totals."""
        first = aggregate(scenario_scores, policy)
        second = aggregate(scenario_scores, policy)

        assert first.total_score == second.total_score
        assert first.to_dict() == second.to_dict()

    def test_factor_scores_read_only(self, scenario_scores, policy):
        """Test the aggregated factor scores cannot be replaced."""
        result = aggregate(scenario_scores, policy)

        with pytest.raises(TypeError):
            result.factor_scores[FactorId.AMENITIES] = FactorScore(FactorId.AMENITIES, 10.0)
