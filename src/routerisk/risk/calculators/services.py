"""Calculators for roadside support factors.

This module scores:
1. Emergency services - best available hospital, police, fire and repair
   service, with a bonus for dense or round-the-clock coverage
2. Amenities - presence of fuel, food, rest and repair stops
3. Security issues - terrain, route length and police presence
"""

from statistics import fmean
from typing import Any, ClassVar

from routerisk.risk.calculators.base import FactorCalculator, band_above, band_below, lookup
from routerisk.risk.records import ServiceLocation
from routerisk.risk.types import FactorId, FactorOrigin, FactorScore, RouteProfile

# =============================================================================
# Emergency Services
# =============================================================================

ESSENTIAL_SERVICE_TYPES = ("hospital", "police", "fire_station", "mechanic")
UNAVAILABLE_SERVICE_RISK = 8.0

SERVICE_DISTANCE_BANDS = ((50.0, 4.0), (25.0, 2.0), (10.0, 1.0))
SERVICE_RESPONSE_BANDS = ((60.0, 3.0), (30.0, 2.0), (15.0, 1.0))
SERVICE_AVAILABILITY_BANDS = ((5.0, 2.0), (7.0, 1.0))

COVERAGE_DENSITY_BONUS = ((20.0, 1.0), (10.0, 0.5))
ROUND_THE_CLOCK_BONUS = ((5.0, 1.0), (2.0, 0.5))


def service_quality(service: ServiceLocation) -> float:
    """Rank a service by proximity, availability, response time and rating.

    Higher is better. Used only to pick the best service of each type.
    """
    distance = service.distance_from_route_km if service.distance_from_route_km is not None else 50.0
    response = service.response_time_minutes if service.response_time_minutes is not None else 30.0
    availability = service.availability_score if service.availability_score is not None else 5.0

    quality = max(0.0, 10 - distance / 5)
    quality += availability
    quality += max(0.0, 10 - response / 3)
    if service.is_open_24_hours:
        quality += 2
    if service.rating:
        quality += service.rating
    return quality


def service_risk(service: ServiceLocation) -> float:
    """Risk of relying on a single service (1-10)."""
    distance = service.distance_from_route_km if service.distance_from_route_km is not None else 0.0
    response = service.response_time_minutes if service.response_time_minutes is not None else 15.0
    availability = service.availability_score if service.availability_score is not None else 5.0

    risk = 2.0
    risk += band_above(distance, SERVICE_DISTANCE_BANDS)
    risk += band_above(response, SERVICE_RESPONSE_BANDS)
    risk += band_below(availability, SERVICE_AVAILABILITY_BANDS)
    return max(1.0, min(10.0, risk))


def coverage_bonus(services: list[ServiceLocation]) -> float:
    """Risk reduction for dense or round-the-clock coverage."""
    round_the_clock = sum(1 for s in services if s.is_open_24_hours)
    return band_above(len(services), COVERAGE_DENSITY_BONUS) + band_above(
        round_the_clock, ROUND_THE_CLOCK_BONUS
    )


class EmergencyServicesCalculator(FactorCalculator):
    """Scores emergency coverage from the best service of each essential type."""

    factor_id: ClassVar[FactorId] = FactorId.EMERGENCY_SERVICES

    def calculate(self, data: Any, profile: RouteProfile | None = None) -> FactorScore:
        if data is None:
            return self.default_score()

        services = self.parse_records(data, ServiceLocation)
        if not services:
            return self.score(UNAVAILABLE_SERVICE_RISK, FactorOrigin.REAL, services=0)

        type_risks: dict[str, float] = {}
        for service_type in ESSENTIAL_SERVICE_TYPES:
            candidates = [s for s in services if s.service_type == service_type]
            if not candidates:
                type_risks[service_type] = UNAVAILABLE_SERVICE_RISK
                continue
            best = max(candidates, key=service_quality)
            type_risks[service_type] = service_risk(best)

        bonus = coverage_bonus(services)
        return self.score(
            fmean(type_risks.values()) - bonus,
            FactorOrigin.REAL,
            services=len(services),
            type_risks=type_risks,
            coverage_bonus=bonus,
        )


# =============================================================================
# Amenities
# =============================================================================

AMENITY_BASE = 6.0
MISSING_AMENITY_PENALTY = 1.0
AVAILABLE_AMENITY_BONUS = -0.5

AMENITY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "fuel": ("gas", "petrol", "fuel", "diesel"),
    "food": ("restaurant", "dhaba", "cafe", "food"),
    "rest": ("hotel", "lodge", "motel", "rest area", "rest stop"),
}

ROUTE_AMENITY_TERRAIN_ADJUSTMENT: dict[str, float] = {"rural": 1.0}


def amenity_kinds(service: ServiceLocation) -> set[str]:
    """Classify a roadside service into the amenity kinds it provides."""
    kinds = set()
    name = service.name.lower()
    for kind, keywords in AMENITY_KEYWORDS.items():
        if any(keyword in name for keyword in keywords):
            kinds.add(kind)
    if service.fuel_types:
        kinds.add("fuel")
    if service.service_type == "mechanic":
        kinds.add("repair")
    return kinds


class AmenitiesCalculator(FactorCalculator):
    """Scores the availability of fuel, food, rest and repair stops."""

    factor_id: ClassVar[FactorId] = FactorId.AMENITIES

    def calculate(self, data: Any, profile: RouteProfile | None = None) -> FactorScore:
        if data is None:
            return self.default_score()

        services = [
            s
            for s in self.parse_records(data, ServiceLocation)
            if s.service_type in ("amenity", "mechanic")
        ]
        available: set[str] = set()
        for service in services:
            available |= amenity_kinds(service)

        value = AMENITY_BASE
        missing = []
        for kind in ("fuel", "food", "rest", "repair"):
            if kind in available:
                value += AVAILABLE_AMENITY_BONUS
            else:
                value += MISSING_AMENITY_PENALTY
                missing.append(kind)

        if profile is not None:
            value += lookup(ROUTE_AMENITY_TERRAIN_ADJUSTMENT, profile.terrain.value)
            value += band_above(profile.total_distance_km, ((300.0, 1.0),))

        return self.score(value, FactorOrigin.REAL, amenities=len(services), missing=missing)


# =============================================================================
# Security
# =============================================================================

SECURITY_BASE = 4.0
SECURITY_TERRAIN_ADJUSTMENT: dict[str, float] = {"rural": 2.0, "hilly": 1.0}
NO_POLICE_PENALTY = 2.0
DISTANT_POLICE_KM = 30.0


class SecurityCalculator(FactorCalculator):
    """Estimates security exposure from the route profile and police presence.

    There is no crime feed; the score is a proxy and always carries the
    ESTIMATED origin.
    """

    factor_id: ClassVar[FactorId] = FactorId.SECURITY_ISSUES

    def calculate(self, data: Any, profile: RouteProfile | None = None) -> FactorScore:
        if profile is None and data is None:
            return self.default_score()

        adjustments: dict[str, float] = {}
        if profile is not None:
            adjustments["terrain"] = lookup(SECURITY_TERRAIN_ADJUSTMENT, profile.terrain.value)
            adjustments["long_distance"] = band_above(profile.total_distance_km, ((300.0, 1.0),))

        if data is not None:
            police = [
                s for s in self.parse_records(data, ServiceLocation) if s.service_type == "police"
            ]
            adjustments["police_presence"] = self._police_adjustment(police)

        return self.score(
            SECURITY_BASE + sum(adjustments.values()),
            FactorOrigin.ESTIMATED,
            adjustments={k: v for k, v in adjustments.items() if v},
            police_data=data is not None,
        )

    @staticmethod
    def _police_adjustment(police: list[ServiceLocation]) -> float:
        if not police:
            return NO_POLICE_PENALTY
        distances = [
            p.distance_from_route_km for p in police if p.distance_from_route_km is not None
        ]
        if distances and fmean(distances) > DISTANT_POLICE_KM:
            return 1.0
        return 0.0
