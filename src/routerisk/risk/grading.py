"""Grade classification for composite risk scores.

Maps a composite score onto a discrete grade band. The band table must
partition [0, 10] with no gaps and no overlaps; a boundary score belongs to
the lower band (a score of exactly 4.0 is grade B).
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from routerisk.core.exceptions import AggregationInvariantError
from routerisk.risk.aggregator import COMPOSITE_MAX, COMPOSITE_MIN
from routerisk.utils.exceptions import ConfigurationError


class RiskGrade(str, Enum):
    """Letter grade, from least to most risky."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @property
    def severity(self) -> int:
        """Ordinal position; higher is riskier."""
        return list(RiskGrade).index(self)


@dataclass(frozen=True)
class GradeBand:
    """A contiguous range of composite scores mapped to a grade.

    The lower bound is exclusive except for the first band of a table,
    which starts inclusively at 0. The upper bound is inclusive.
    """

    grade: RiskGrade
    level: str
    min_score: float
    max_score: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "grade": self.grade.value,
            "level": self.level,
            "min_score": self.min_score,
            "max_score": self.max_score,
        }


DEFAULT_GRADE_BANDS: tuple[GradeBand, ...] = (
    GradeBand(RiskGrade.A, "Very Low Risk", 0.0, 2.0),
    GradeBand(RiskGrade.B, "Low Risk", 2.0, 4.0),
    GradeBand(RiskGrade.C, "Medium Risk", 4.0, 6.0),
    GradeBand(RiskGrade.D, "High Risk", 6.0, 8.0),
    GradeBand(RiskGrade.F, "Critical Risk", 8.0, 10.0),
)


class GradeClassifier:
    """Classifies composite scores into grade bands.

    Example:
        ```python
        classifier = GradeClassifier()
        band = classifier.classify(4.0)
        print(band.grade, band.level)  # B Low Risk
        ```
    """

    def __init__(self, bands: Sequence[GradeBand] = DEFAULT_GRADE_BANDS):
        """Initialize the classifier.

        Args:
            bands: Grade band table.

        Raises:
            ConfigurationError: If the bands do not partition [0, 10].
        """
        self._bands = self._validate(bands)

    @property
    def bands(self) -> tuple[GradeBand, ...]:
        """The validated band table, ordered by score."""
        return self._bands

    def classify(self, score: float) -> GradeBand:
        """Find the band containing a composite score.

        Args:
            score: Composite score at full precision.

        Returns:
            The GradeBand whose range contains the score.

        Raises:
            AggregationInvariantError: If the score is outside [0, 10].
        """
        if math.isnan(score) or not (COMPOSITE_MIN <= score <= COMPOSITE_MAX):
            raise AggregationInvariantError(score, "Composite score outside [0, 10]")

        for band in self._bands:
            if score <= band.max_score:
                return band

        raise AggregationInvariantError(score, "No grade band covers score")

    def band_for_grade(self, grade: RiskGrade) -> GradeBand:
        """Look up the band for a grade."""
        for band in self._bands:
            if band.grade == grade:
                return band
        raise KeyError(grade)

    @staticmethod
    def _validate(bands: Sequence[GradeBand]) -> tuple[GradeBand, ...]:
        if not bands:
            raise ConfigurationError("Grade band table is empty")

        ordered = tuple(sorted(bands, key=lambda b: b.min_score))

        grades = [b.grade for b in ordered]
        if len(set(grades)) != len(grades):
            raise ConfigurationError("Grade band table repeats a grade")

        for band in ordered:
            if band.min_score >= band.max_score:
                raise ConfigurationError(
                    f"Grade {band.grade.value} band is empty: "
                    f"({band.min_score}, {band.max_score}]"
                )

        if not math.isclose(ordered[0].min_score, COMPOSITE_MIN, abs_tol=1e-9):
            raise ConfigurationError(
                f"Grade bands must start at {COMPOSITE_MIN}, start at {ordered[0].min_score}"
            )
        if not math.isclose(ordered[-1].max_score, COMPOSITE_MAX, abs_tol=1e-9):
            raise ConfigurationError(
                f"Grade bands must end at {COMPOSITE_MAX}, end at {ordered[-1].max_score}"
            )

        for previous, current in zip(ordered, ordered[1:]):
            if not math.isclose(previous.max_score, current.min_score, abs_tol=1e-9):
                kind = "gap" if current.min_score > previous.max_score else "overlap"
                raise ConfigurationError(
                    f"Grade bands have a {kind} between {previous.grade.value} "
                    f"(max {previous.max_score}) and {current.grade.value} "
                    f"(min {current.min_score})"
                )

        return ordered


def create_grade_classifier(bands: Sequence[GradeBand] | None = None) -> GradeClassifier:
    """Create a grade classifier.

    Args:
        bands: Optional band table (default table when None).

    Returns:
        Configured GradeClassifier.
    """
    return GradeClassifier(bands if bands is not None else DEFAULT_GRADE_BANDS)
