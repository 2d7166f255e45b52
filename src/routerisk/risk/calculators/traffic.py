"""Calculators for traffic factors.

Traffic density is scored from observed samples. Two-way traffic exposure
has no direct feed and is estimated from the route profile.
"""

from typing import Any, ClassVar

from routerisk.risk.calculators.base import (
    Adjustment,
    FactorCalculator,
    RecordCalculator,
    band_above,
    band_below,
    lookup,
)
from routerisk.risk.records import TrafficSample
from routerisk.risk.types import FactorId, FactorOrigin, FactorScore, RouteProfile

CONGESTION_ADJUSTMENT: dict[str, float] = {
    "severe": 4.0,
    "heavy": 3.0,
    "moderate": 1.0,
    "light": 0.0,
    "free_flow": -1.0,
}

WEATHER_IMPACT_ADJUSTMENT: dict[str, float] = {"severe": 2.0, "moderate": 1.0}

PEAK_PERIODS = frozenset({"morning_peak", "evening_peak"})

SPEED_BANDS = ((20.0, 3.0), (40.0, 2.0))

TWO_WAY_BASE = 4.0
TWO_WAY_TERRAIN_ADJUSTMENT: dict[str, float] = {"hilly": 2.0, "rural": 1.0}


class TrafficDensityCalculator(RecordCalculator[TrafficSample]):
    """Scores congestion, speed, incidents and roadside interruptions."""

    factor_id: ClassVar[FactorId] = FactorId.TRAFFIC_DENSITY
    record_model = TrafficSample

    def adjust(self, record: TrafficSample) -> list[Adjustment]:
        return [
            ("congestion", lookup(CONGESTION_ADJUSTMENT, record.congestion_level)),
            ("slow_speed", band_below(record.average_speed_kmph, SPEED_BANDS)),
            ("toll_points", record.toll_points * 1.0),
            ("construction_zones", record.construction_zones * 2.0),
            ("traffic_lights", record.traffic_lights * 0.5),
            ("accident_reports", record.accident_reports * 2.0),
            ("weather_impact", lookup(WEATHER_IMPACT_ADJUSTMENT, record.weather_impact)),
            ("peak_period", 1.0 if record.time_of_day in PEAK_PERIODS else 0.0),
        ]


class TwoWayTrafficCalculator(FactorCalculator):
    """Estimates head-on exposure from terrain, length and road class.

    National highways are mostly divided carriageways; routes without a
    major highway rely on undivided roads.
    """

    factor_id: ClassVar[FactorId] = FactorId.TWO_WAY_TRAFFIC

    def calculate(self, data: Any, profile: RouteProfile | None = None) -> FactorScore:
        if profile is None:
            return self.default_score("no_route_profile")

        adjustments = {
            "terrain": lookup(TWO_WAY_TERRAIN_ADJUSTMENT, profile.terrain.value),
            "long_distance": band_above(profile.total_distance_km, ((200.0, 1.0),)),
            "road_class": self._road_class_adjustment(profile),
        }
        return self.score(
            TWO_WAY_BASE + sum(adjustments.values()),
            FactorOrigin.ESTIMATED,
            adjustments={k: v for k, v in adjustments.items() if v},
        )

    @staticmethod
    def _road_class_adjustment(profile: RouteProfile) -> float:
        if not profile.major_highways:
            return 2.0
        return -1.0 if profile.has_national_highway else 1.0
