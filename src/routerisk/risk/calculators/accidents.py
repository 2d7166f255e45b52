"""Accident-prone area calculator."""

from typing import ClassVar

from routerisk.risk.calculators.base import Adjustment, RecordCalculator, band_above, lookup
from routerisk.risk.records import AccidentArea
from routerisk.risk.types import FactorId

ACCIDENT_FREQUENCY_BANDS = ((20.0, 3.0), (10.0, 2.0), (5.0, 1.0))

ACCIDENT_SEVERITY_ADJUSTMENT: dict[str, float] = {
    "fatal": 4.0,
    "major": 2.0,
    "minor": 1.0,
}

ACCIDENT_TREND_ADJUSTMENT: dict[str, float] = {
    "increasing": 2.0,
    "stable": 0.0,
    "decreasing": -1.0,
}


class AccidentProneCalculator(RecordCalculator[AccidentArea]):
    """Scores accident history, time-of-day exposure and trend per area.

    Sub-risk inputs (night, peak, weather, infrastructure, traffic volume)
    are on a 1-10 scale; only elevated values add to the area score.
    """

    factor_id: ClassVar[FactorId] = FactorId.ACCIDENT_PRONE
    record_model = AccidentArea
    empty_score = 3.0

    def adjust(self, record: AccidentArea) -> list[Adjustment]:
        return [
            ("frequency", band_above(record.accident_frequency_yearly, ACCIDENT_FREQUENCY_BANDS)),
            ("severity", lookup(ACCIDENT_SEVERITY_ADJUSTMENT, record.accident_severity)),
            ("night_risk", band_above(record.night_risk, ((7.0, 2.0),))),
            ("peak_risk", band_above(record.peak_risk, ((7.0, 1.0),))),
            ("weather_related", band_above(record.weather_related_risk, ((6.0, 2.0),))),
            ("infrastructure", band_above(record.infrastructure_risk, ((6.0, 1.0),))),
            ("traffic_volume", band_above(record.traffic_volume_risk, ((6.0, 1.0),))),
            ("trend", lookup(ACCIDENT_TREND_ADJUSTMENT, record.accident_trend)),
        ]
