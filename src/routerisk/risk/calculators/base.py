"""Base classes for factor calculators.

A calculator turns one category's supporting data into a FactorScore:
1. Absent data (``None``) yields a DEFAULT-origin neutral score
2. Records are validated against the category's record model
3. Each record starts from a base score and receives table-driven adjustments
4. Record scores are clamped to [1, 10] and combined into one factor score
"""

from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from routerisk.core.exceptions import InvalidFactorDataError
from routerisk.risk.types import (
    NEUTRAL_SCORE,
    FactorId,
    FactorOrigin,
    FactorScore,
    RouteProfile,
    clamp_score,
)

R = TypeVar("R", bound=BaseModel)

Adjustment = tuple[str, float]


# =============================================================================
# Rule Table Helpers
# =============================================================================


def band_above(value: float | None, bands: Sequence[tuple[float, float]]) -> float:
    """Look up the adjustment for the first threshold the value exceeds.

    Bands are ordered from the highest threshold down, e.g.
    ``((20, 3.0), (10, 2.0), (5, 1.0))``.
    """
    if value is None:
        return 0.0
    for threshold, adjustment in bands:
        if value > threshold:
            return adjustment
    return 0.0


def band_below(value: float | None, bands: Sequence[tuple[float, float]]) -> float:
    """Look up the adjustment for the first threshold the value falls under.

    Bands are ordered from the lowest threshold up, e.g.
    ``((50, 3.0), (100, 2.0), (200, 1.0))``.
    """
    if value is None:
        return 0.0
    for threshold, adjustment in bands:
        if value < threshold:
            return adjustment
    return 0.0


def lookup(table: dict[str, float], key: str | None) -> float:
    """Look up a categorical adjustment; unknown or missing keys adjust nothing."""
    if key is None:
        return 0.0
    return table.get(key.lower(), 0.0)


def weighted_mean(pairs: Iterable[tuple[float, float]]) -> float:
    """Weighted mean of ``(value, weight)`` pairs."""
    total = 0.0
    weight_total = 0.0
    for value, weight in pairs:
        total += value * weight
        weight_total += weight
    return total / weight_total if weight_total else NEUTRAL_SCORE


# =============================================================================
# Calculators
# =============================================================================


class FactorCalculator(ABC):
    """Converts one factor category's supporting data into a FactorScore.

    Calculators are pure: the same data and profile always produce the same
    score. They never raise for missing data; absence is reported as a
    DEFAULT-origin score.
    """

    factor_id: ClassVar[FactorId]

    @abstractmethod
    def calculate(self, data: Any, profile: RouteProfile | None = None) -> FactorScore:
        """Calculate the factor score.

        Args:
            data: Category-specific supporting data, or None when unavailable.
            profile: Route profile for route-level heuristics.

        Returns:
            FactorScore clamped to [1, 10].

        Raises:
            InvalidFactorDataError: If the data is structurally invalid.
        """

    def default_score(self, reason: str = "no_data") -> FactorScore:
        """Neutral fallback for this factor."""
        return FactorScore.default(self.factor_id, reason=reason)

    def score(
        self,
        value: float,
        origin: FactorOrigin,
        **detail: Any,
    ) -> FactorScore:
        """Build a clamped FactorScore for this factor."""
        return FactorScore(
            factor_id=self.factor_id,
            value=round(clamp_score(value), 2),
            origin=origin,
            supporting_detail=detail,
        )

    def parse_records(self, data: Any, model: type[R]) -> list[R]:
        """Validate raw supporting data into a list of records.

        Args:
            data: A sequence of records or mappings.
            model: Record model to validate against.

        Raises:
            InvalidFactorDataError: If validation fails.
        """
        try:
            return TypeAdapter(list[model]).validate_python(list(data))
        except (ValidationError, TypeError) as e:
            count = e.error_count() if isinstance(e, ValidationError) else 1
            raise InvalidFactorDataError(self.factor_id.value, count, str(e)) from e


class RecordCalculator(FactorCalculator, Generic[R]):
    """Calculator that scores each record and averages the results.

    Subclasses declare the record model, the record base score, and the
    ordered adjustment rules applied to a record.
    """

    record_model: ClassVar[type[BaseModel]]
    record_base: ClassVar[float] = NEUTRAL_SCORE
    empty_score: ClassVar[float] = NEUTRAL_SCORE

    def calculate(self, data: Any, profile: RouteProfile | None = None) -> FactorScore:
        if data is None:
            return self.default_score()

        records = self.parse_records(data, self.record_model)
        if not records:
            return self.score(self.empty_score, FactorOrigin.REAL, records=0)

        rules_applied: Counter[str] = Counter()
        pairs: list[tuple[float, float]] = []
        for record in records:
            provided = getattr(record, "risk_score", None)
            base = provided if provided is not None else self.record_base
            adjustments = [(name, amount) for name, amount in self.adjust(record) if amount]
            rules_applied.update(name for name, _ in adjustments)
            record_score = clamp_score(base + sum(amount for _, amount in adjustments))
            pairs.append((record_score, self.record_weight(record)))

        return self.score(
            weighted_mean(pairs),
            FactorOrigin.REAL,
            records=len(records),
            rules_applied=dict(sorted(rules_applied.items())),
        )

    @abstractmethod
    def adjust(self, record: R) -> list[Adjustment]:
        """Ordered ``(rule_name, amount)`` adjustments for one record."""

    def record_weight(self, record: R) -> float:
        """Weight of a record in the average."""
        return 1.0
