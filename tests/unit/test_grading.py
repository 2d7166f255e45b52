"""Unit tests for grade classification."""

import pytest

from routerisk.core.exceptions import AggregationInvariantError
from routerisk.risk.grading import (
    DEFAULT_GRADE_BANDS,
    GradeBand,
    GradeClassifier,
    RiskGrade,
    create_grade_classifier,
)
from routerisk.utils.exceptions import ConfigurationError


@pytest.fixture
def classifier() -> GradeClassifier:
    """Create a classifier with the default bands."""
    return create_grade_classifier()


class TestClassify:
    """Tests for GradeClassifier.classify."""

    @pytest.mark.parametrize(
        "score,grade,level",
        [
            (0.0, RiskGrade.A, "Very Low Risk"),
            (1.5, RiskGrade.A, "Very Low Risk"),
            (3.0, RiskGrade.B, "Low Risk"),
            (4.59, RiskGrade.C, "Medium Risk"),
            (7.2, RiskGrade.D, "High Risk"),
            (10.0, RiskGrade.F, "Critical Risk"),
        ],
    )
    def test_bands(self, classifier, score, grade, level):
        """Test scores map onto the default bands."""
        band = classifier.classify(score)

        assert band.grade == grade
        assert band.level == level

    @pytest.mark.parametrize(
        "boundary,grade",
        [(2.0, RiskGrade.A), (4.0, RiskGrade.B), (6.0, RiskGrade.C), (8.0, RiskGrade.D)],
    )
    def test_boundaries_belong_to_lower_grade(self, classifier, boundary, grade):
        """Test a boundary score takes the lower grade."""
        assert classifier.classify(boundary).grade == grade

    def test_just_above_boundary(self, classifier):
        """Test a score just above a boundary takes the upper grade."""
        assert classifier.classify(4.0001).grade == RiskGrade.C

    @pytest.mark.parametrize("score", [-0.01, 10.01, float("nan")])
    def test_out_of_range_is_fatal(self, classifier, score):
        """Test scores outside [0, 10] raise AggregationInvariantError."""
        with pytest.raises(AggregationInvariantError):
            classifier.classify(score)

    def test_monotonic(self, classifier):
        """Test grades never improve as the score rises."""
        severities = [classifier.classify(step / 100).grade.severity for step in range(0, 1001)]

        assert severities == sorted(severities)


class TestBandValidation:
    """Tests for grade band table validation."""

    def test_default_bands_valid(self):
        """Test the default table validates."""
        assert GradeClassifier(DEFAULT_GRADE_BANDS).bands == DEFAULT_GRADE_BANDS

    def test_gap_rejected(self):
        """Test a gap between bands is rejected."""
        bands = (
            GradeBand(RiskGrade.A, "Very Low Risk", 0.0, 2.0),
            GradeBand(RiskGrade.B, "Low Risk", 2.0, 4.0),
            GradeBand(RiskGrade.C, "Medium Risk", 4.0, 6.0),
            GradeBand(RiskGrade.D, "High Risk", 6.0, 8.0),
            GradeBand(RiskGrade.F, "Critical Risk", 8.5, 10.0),
        )
        with pytest.raises(ConfigurationError, match="gap"):
            GradeClassifier(bands)

    def test_overlap_rejected(self):
        """Test overlapping bands are rejected."""
        bands = (
            GradeBand(RiskGrade.A, "Very Low Risk", 0.0, 5.0),
            GradeBand(RiskGrade.F, "Critical Risk", 4.0, 10.0),
        )
        with pytest.raises(ConfigurationError, match="overlap"):
            GradeClassifier(bands)

    def test_must_cover_full_range(self):
        """Test bands must start at 0 and end at 10."""
        with pytest.raises(ConfigurationError):
            GradeClassifier((GradeBand(RiskGrade.A, "Very Low Risk", 0.0, 9.0),))
        with pytest.raises(ConfigurationError):
            GradeClassifier((GradeBand(RiskGrade.A, "Very Low Risk", 1.0, 10.0),))

    def test_empty_table_rejected(self):
        """Test an empty table is rejected."""
        with pytest.raises(ConfigurationError):
            GradeClassifier(())

    def test_unordered_bands_sorted(self):
        """Test bands given out of order are sorted."""
        classifier = GradeClassifier(tuple(reversed(DEFAULT_GRADE_BANDS)))

        assert classifier.bands[0].grade == RiskGrade.A
        assert classifier.classify(9.0).grade == RiskGrade.F

    def test_custom_two_band_table(self):
        """Test a valid custom table."""
        classifier = GradeClassifier(
            (
                GradeBand(RiskGrade.A, "Acceptable", 0.0, 5.0),
                GradeBand(RiskGrade.F, "Unacceptable", 5.0, 10.0),
            )
        )

        assert classifier.classify(5.0).level == "Acceptable"
        assert classifier.band_for_grade(RiskGrade.F).min_score == 5.0
