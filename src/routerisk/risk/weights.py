"""Weight policy for combining factor scores.

The policy assigns each factor an integer percentage weight. Weights must
sum to exactly 100; a policy that does not is a configuration error and
the engine refuses to start with it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from routerisk.risk.types import FactorId
from routerisk.utils.exceptions import ConfigurationError

TOTAL_WEIGHT = 100

DEFAULT_FACTOR_WEIGHTS: dict[FactorId, int] = {
    FactorId.ROAD_CONDITIONS: 15,
    FactorId.ACCIDENT_PRONE: 15,
    FactorId.SHARP_TURNS: 10,
    FactorId.BLIND_SPOTS: 10,
    FactorId.TWO_WAY_TRAFFIC: 10,
    FactorId.TRAFFIC_DENSITY: 10,
    FactorId.WEATHER_CONDITIONS: 10,
    FactorId.EMERGENCY_SERVICES: 5,
    FactorId.NETWORK_COVERAGE: 5,
    FactorId.AMENITIES: 5,
    FactorId.SECURITY_ISSUES: 5,
}


@dataclass(frozen=True)
class WeightPolicy:
    """Immutable mapping of factor to percentage weight.

    Attributes:
        weights: Factor weights in percent, in evaluation order.

    Raises:
        ConfigurationError: On construction, if a key is not a known factor,
            a weight is not a non-negative integer, a factor is left out, or
            the total is not 100. A factor is excluded with weight 0.
    """

    weights: Mapping[FactorId, int] = field(default_factory=lambda: dict(DEFAULT_FACTOR_WEIGHTS))

    def __post_init__(self) -> None:
        validated: dict[FactorId, int] = {}
        for key, weight in self.weights.items():
            try:
                factor_id = FactorId(key)
            except ValueError as e:
                raise ConfigurationError(f"Unknown factor in weight policy: {key!r}") from e
            if factor_id in validated:
                raise ConfigurationError(f"Duplicate factor in weight policy: {factor_id.value}")
            if isinstance(weight, bool) or not isinstance(weight, int):
                raise ConfigurationError(
                    f"Weight for {factor_id.value} must be an integer percent, got {weight!r}"
                )
            if weight < 0:
                raise ConfigurationError(f"Weight for {factor_id.value} is negative: {weight}")
            validated[factor_id] = weight

        missing = [f.value for f in FactorId if f not in validated]
        if missing:
            raise ConfigurationError(
                f"Weight policy is missing factors: {', '.join(missing)}"
            )

        total = sum(validated.values())
        if total != TOTAL_WEIGHT:
            raise ConfigurationError(
                f"Weight policy must sum to {TOTAL_WEIGHT}, got {total}"
            )

        object.__setattr__(self, "weights", MappingProxyType(validated))

    @classmethod
    def default(cls) -> "WeightPolicy":
        """The standard route risk weight table."""
        return cls(dict(DEFAULT_FACTOR_WEIGHTS))

    @property
    def factor_ids(self) -> tuple[FactorId, ...]:
        """Factors covered by the policy, in policy order."""
        return tuple(self.weights)

    def weight_for(self, factor_id: FactorId) -> int:
        """Weight of a factor in percent."""
        return self.weights[factor_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {factor_id.value: weight for factor_id, weight in self.weights.items()}
