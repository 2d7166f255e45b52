"""Calculators for road geometry and surface factors.

Road conditions, sharp turns and blind spots all score individual
records (segments, turns, spots) and combine them with a weighted mean in
which longer or more severe records count for more.
"""

from typing import ClassVar

from routerisk.risk.calculators.base import (
    Adjustment,
    RecordCalculator,
    band_above,
    band_below,
    lookup,
)
from routerisk.risk.records import BlindSpot, RoadSegment, SharpTurn
from routerisk.risk.types import FactorId

# =============================================================================
# Rule Tables
# =============================================================================

SURFACE_QUALITY_ADJUSTMENT: dict[str, float] = {
    "critical": 4.0,
    "poor": 3.0,
    "fair": 1.0,
    "good": -1.0,
    "excellent": -2.0,
}

TURN_ANGLE_BANDS = ((120.0, 3.0), (90.0, 2.0), (60.0, 1.0))
TURN_RADIUS_BANDS = ((50.0, 3.0), (100.0, 2.0), (200.0, 1.0))
TURN_SEVERITY_WEIGHT: dict[str, float] = {"hairpin": 2.0, "sharp": 1.5}

SIGHT_DISTANCE_BANDS = ((50.0, 4.0), (100.0, 3.0), (200.0, 2.0))
SPOT_TYPE_ADJUSTMENT: dict[str, float] = {"obstruction": 3.0, "crest": 2.0, "curve": 1.0}
SPOT_SEVERITY_WEIGHT: dict[str, float] = {"critical": 2.0, "significant": 1.5}


class RoadConditionsCalculator(RecordCalculator[RoadSegment]):
    """Scores surface quality, maintenance and infrastructure per segment."""

    factor_id: ClassVar[FactorId] = FactorId.ROAD_CONDITIONS
    record_model = RoadSegment

    def adjust(self, record: RoadSegment) -> list[Adjustment]:
        return [
            ("surface_quality", lookup(SURFACE_QUALITY_ADJUSTMENT, record.surface_quality)),
            ("potholes", 2.0 if record.has_potholes else 0.0),
            ("construction", 3.0 if record.under_construction else 0.0),
            (
                "narrow_width",
                2.0 if record.width_meters is not None and record.width_meters < 4 else 0.0,
            ),
            (
                "no_shoulder",
                1.0
                if record.shoulder_width_meters is not None and record.shoulder_width_meters < 1
                else 0.0,
            ),
            ("poor_lighting", 2.0 if record.lighting_quality == "poor" else 0.0),
            ("poor_drainage", 1.0 if record.drainage_quality == "poor" else 0.0),
            ("bridges_culverts", record.bridges_culverts * 0.5),
            ("steep_slope", band_above(record.slope_gradient, ((6.0, 2.0),))),
        ]

    def record_weight(self, record: RoadSegment) -> float:
        # Longer segments weigh more, within [0.5, 2]
        if record.segment_length_km is None:
            return 1.0
        return max(0.5, min(2.0, record.segment_length_km))


class SharpTurnsCalculator(RecordCalculator[SharpTurn]):
    """Scores turn geometry and the safety furniture around each turn."""

    factor_id: ClassVar[FactorId] = FactorId.SHARP_TURNS
    record_model = SharpTurn
    empty_score = 3.0

    def adjust(self, record: SharpTurn) -> list[Adjustment]:
        return [
            ("turn_angle", band_above(record.turn_angle, TURN_ANGLE_BANDS)),
            ("turn_radius", band_below(record.turn_radius_m, TURN_RADIUS_BANDS)),
            ("no_guardrails", 0.0 if record.guardrails else 2.0),
            ("no_warning_signs", 0.0 if record.warning_signs else 1.0),
            ("poor_visibility", 2.0 if record.visibility == "poor" else 0.0),
            ("poor_surface", 1.0 if record.road_surface == "poor" else 0.0),
            ("adverse_banking", band_below(record.banking_angle, ((-5.0, 2.0),))),
            ("no_lighting", 0.0 if record.lighting_available else 1.0),
        ]

    def record_weight(self, record: SharpTurn) -> float:
        return lookup(TURN_SEVERITY_WEIGHT, record.turn_severity) or 1.0


class BlindSpotsCalculator(RecordCalculator[BlindSpot]):
    """Scores sight distance, obstruction type and mitigations per spot."""

    factor_id: ClassVar[FactorId] = FactorId.BLIND_SPOTS
    record_model = BlindSpot
    empty_score = 2.0

    def adjust(self, record: BlindSpot) -> list[Adjustment]:
        return [
            ("sight_distance", band_below(record.visibility_distance_m, SIGHT_DISTANCE_BANDS)),
            ("spot_type", lookup(SPOT_TYPE_ADJUSTMENT, record.spot_type)),
            ("no_warning_signs", 0.0 if record.warning_signs_present else 2.0),
            ("no_mirror", 0.0 if record.mirror_installed else 1.0),
            ("high_speed", band_above(record.speed_limit_kmph, ((60.0, 1.0),))),
            ("heavy_vegetation", 2.0 if record.vegetation_density == "heavy" else 0.0),
            ("structures", 1.0 if record.structure_count > 0 else 0.0),
            ("tall_obstruction", band_above(record.obstruction_height_m, ((10.0, 1.0),))),
        ]

    def record_weight(self, record: BlindSpot) -> float:
        return lookup(SPOT_SEVERITY_WEIGHT, record.severity_level) or 1.0
