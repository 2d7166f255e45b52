"""Factor calculators, one per risk category."""

from routerisk.risk.calculators.accidents import AccidentProneCalculator
from routerisk.risk.calculators.base import (
    FactorCalculator,
    RecordCalculator,
    band_above,
    band_below,
    lookup,
    weighted_mean,
)
from routerisk.risk.calculators.network import NetworkCoverageCalculator
from routerisk.risk.calculators.road import (
    BlindSpotsCalculator,
    RoadConditionsCalculator,
    SharpTurnsCalculator,
)
from routerisk.risk.calculators.services import (
    AmenitiesCalculator,
    EmergencyServicesCalculator,
    SecurityCalculator,
)
from routerisk.risk.calculators.traffic import TrafficDensityCalculator, TwoWayTrafficCalculator
from routerisk.risk.calculators.weather import WeatherConditionsCalculator
from routerisk.risk.types import FactorId


def default_calculators() -> dict[FactorId, FactorCalculator]:
    """Create one calculator per factor category.

    Returns:
        Dict mapping each FactorId to its calculator.
    """
    calculators: list[FactorCalculator] = [
        RoadConditionsCalculator(),
        AccidentProneCalculator(),
        SharpTurnsCalculator(),
        BlindSpotsCalculator(),
        TwoWayTrafficCalculator(),
        TrafficDensityCalculator(),
        WeatherConditionsCalculator(),
        EmergencyServicesCalculator(),
        NetworkCoverageCalculator(),
        AmenitiesCalculator(),
        SecurityCalculator(),
    ]
    return {calculator.factor_id: calculator for calculator in calculators}


__all__ = [
    # Base
    "FactorCalculator",
    "RecordCalculator",
    "band_above",
    "band_below",
    "lookup",
    "weighted_mean",
    # Calculators
    "AccidentProneCalculator",
    "AmenitiesCalculator",
    "BlindSpotsCalculator",
    "EmergencyServicesCalculator",
    "NetworkCoverageCalculator",
    "RoadConditionsCalculator",
    "SecurityCalculator",
    "SharpTurnsCalculator",
    "TrafficDensityCalculator",
    "TwoWayTrafficCalculator",
    "WeatherConditionsCalculator",
    # Factory
    "default_calculators",
]
