"""Weather conditions calculator."""

from typing import ClassVar

from routerisk.risk.calculators.base import (
    Adjustment,
    RecordCalculator,
    band_above,
    band_below,
    lookup,
)
from routerisk.risk.records import WeatherSample
from routerisk.risk.types import FactorId

WEATHER_CONDITION_ADJUSTMENT: dict[str, float] = {
    "stormy": 4.0,
    "icy": 4.0,
    "foggy": 3.0,
    "rainy": 2.0,
    "clear": -1.0,
}

ROAD_SURFACE_ADJUSTMENT: dict[str, float] = {"icy": 4.0, "muddy": 2.0, "wet": 1.0}

VISIBILITY_BANDS = ((1.0, 4.0), (5.0, 3.0), (10.0, 1.0))
WIND_SPEED_BANDS = ((70.0, 3.0), (50.0, 2.0), (30.0, 1.0))


def temperature_adjustment(temperature_c: float | None) -> float:
    """Adjustment for extreme or uncomfortable average temperatures."""
    if temperature_c is None:
        return 0.0
    if temperature_c < 5 or temperature_c > 45:
        return 2.0
    if temperature_c < 10 or temperature_c > 40:
        return 1.0
    return 0.0


class WeatherConditionsCalculator(RecordCalculator[WeatherSample]):
    """Scores condition, visibility, wind, surface and seasonal exposure."""

    factor_id: ClassVar[FactorId] = FactorId.WEATHER_CONDITIONS
    record_model = WeatherSample
    record_base = 4.0
    empty_score = 4.0

    def adjust(self, record: WeatherSample) -> list[Adjustment]:
        return [
            ("condition", lookup(WEATHER_CONDITION_ADJUSTMENT, record.condition)),
            ("visibility", band_below(record.visibility_km, VISIBILITY_BANDS)),
            ("wind", band_above(record.wind_speed_kmph, WIND_SPEED_BANDS)),
            ("road_surface", lookup(ROAD_SURFACE_ADJUSTMENT, record.road_surface)),
            ("monsoon", band_above(record.monsoon_risk, ((7.0, 2.0),))),
            ("extreme_history", 1.0 if record.extreme_weather_events > 2 else 0.0),
            ("temperature", temperature_adjustment(record.average_temperature_c)),
        ]
