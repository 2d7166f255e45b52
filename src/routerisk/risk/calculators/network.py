"""Network coverage calculator."""

from typing import Any, ClassVar

from routerisk.risk.calculators.base import Adjustment, RecordCalculator, band_above, lookup
from routerisk.risk.records import CoverageSample
from routerisk.risk.types import FactorId, FactorOrigin, FactorScore, RouteProfile

TERRAIN_NETWORK_RISK: dict[str, float] = {
    "urban": 2.0,
    "rural": 6.0,
    "hilly": 8.0,
    "mixed": 5.0,
}


class NetworkCoverageCalculator(RecordCalculator[CoverageSample]):
    """Scores communication risk from measured signal samples.

    Without samples, coverage is estimated from terrain, route length and
    whether the route follows a national highway.
    """

    factor_id: ClassVar[FactorId] = FactorId.NETWORK_COVERAGE
    record_model = CoverageSample

    def calculate(self, data: Any, profile: RouteProfile | None = None) -> FactorScore:
        if data:
            return super().calculate(data, profile)
        if profile is not None:
            return self.estimate(profile)
        return self.default_score()

    def adjust(self, record: CoverageSample) -> list[Adjustment]:
        if record.is_dead_zone:
            signal = ("dead_zone", 4.0)
        elif record.signal_strength < 3:
            signal = ("weak_signal", 2.0)
        elif record.signal_strength < 5:
            signal = ("partial_signal", 1.0)
        else:
            signal = ("strong_signal", -1.0)
        return [signal, ("interference", len(record.interference_factors) * 0.5)]

    def estimate(self, profile: RouteProfile) -> FactorScore:
        """Estimate coverage risk from the route profile."""
        base = lookup(TERRAIN_NETWORK_RISK, profile.terrain.value) or 5.0
        value = base + band_above(profile.total_distance_km, ((300.0, 1.0),))
        if profile.has_national_highway:
            value -= 1.0
        return self.score(value, FactorOrigin.ESTIMATED, terrain=profile.terrain.value)
