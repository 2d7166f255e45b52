"""Configuration validation for startup checks.

Validates that settings are coherent before the engine accepts work.

Usage:
    from routerisk.config.validation import validate_or_raise

    # During startup
    validate_or_raise()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from routerisk.config.settings import Settings, get_settings
from routerisk.utils.exceptions import ConfigurationError

logger = logging.getLogger("routerisk.config")


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Must be fixed, engine cannot start
    WARNING = "warning"  # Should be fixed, engine can start


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(settings: Settings | None = None) -> list[ValidationResult]:
    """Validate application configuration.

    Args:
        settings: Settings to validate (default: global settings)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ValidationResult] = []
    results.extend(_validate_batching(settings))
    results.extend(_validate_timeouts(settings))
    results.extend(_validate_confidence(settings))
    results.extend(_validate_environment(settings))
    return results


def validate_or_raise(settings: Settings | None = None) -> None:
    """Validate configuration and raise if errors found.

    Args:
        settings: Settings to validate

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    warnings = [r for r in results if r.severity == ValidationSeverity.WARNING]
    for warning in warnings:
        logger.warning(str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_batching(settings: Settings) -> list[ValidationResult]:
    """Validate batch configuration."""
    results: list[ValidationResult] = []

    if settings.max_concurrent_routes > settings.max_batch_size:
        results.append(
            ValidationResult(
                field="max_concurrent_routes",
                severity=ValidationSeverity.WARNING,
                message=(
                    f"Concurrency {settings.max_concurrent_routes} exceeds batch size "
                    f"{settings.max_batch_size} and will never be reached"
                ),
                suggestion="Set max_concurrent_routes <= max_batch_size",
            )
        )

    if settings.max_batch_size > 100:
        results.append(
            ValidationResult(
                field="max_batch_size",
                severity=ValidationSeverity.WARNING,
                message=f"Batch size {settings.max_batch_size} may overload data providers",
                suggestion="Consider splitting large recalculations into several batches",
            )
        )

    return results


def _validate_timeouts(settings: Settings) -> list[ValidationResult]:
    """Validate factor collection timeouts."""
    results: list[ValidationResult] = []

    if settings.factor_timeout_seconds > 120:
        results.append(
            ValidationResult(
                field="factor_timeout_seconds",
                severity=ValidationSeverity.WARNING,
                message=f"Factor timeout {settings.factor_timeout_seconds}s is very long",
                suggestion="Slow factors hold the whole assessment; 10-30s is typical",
            )
        )

    return results


def _validate_confidence(settings: Settings) -> list[ValidationResult]:
    """Validate confidence signal thresholds."""
    results: list[ValidationResult] = []

    if settings.confidence.staleness_threshold_hours <= 0:
        results.append(
            ValidationResult(
                field="confidence.staleness_threshold_hours",
                severity=ValidationSeverity.ERROR,
                message="Staleness threshold must be positive",
                suggestion="Use 24 to reward data refreshed within the last day",
            )
        )

    if settings.confidence.high_sample_density_threshold < 0:
        results.append(
            ValidationResult(
                field="confidence.high_sample_density_threshold",
                severity=ValidationSeverity.ERROR,
                message="Sample density threshold cannot be negative",
            )
        )

    return results


def _validate_environment(settings: Settings) -> list[ValidationResult]:
    """Validate environment-specific settings."""
    results: list[ValidationResult] = []

    if settings.ENVIRONMENT == "production" and settings.log_level == "DEBUG":
        results.append(
            ValidationResult(
                field="log_level",
                severity=ValidationSeverity.WARNING,
                message="DEBUG log level in production logs every factor adjustment",
                suggestion="Use INFO or WARNING for production",
            )
        )

    return results


def get_configuration_summary(settings: Settings | None = None) -> dict[str, Any]:
    """Get a summary of current configuration (safe for logging).

    Args:
        settings: Settings to summarize

    Returns:
        Dictionary with configuration summary
    """
    if settings is None:
        settings = get_settings()

    return {
        "environment": settings.ENVIRONMENT,
        "log_level": settings.log_level,
        "factor_timeout_seconds": settings.factor_timeout_seconds,
        "max_batch_size": settings.max_batch_size,
        "max_concurrent_routes": settings.max_concurrent_routes,
        "staleness_threshold_hours": settings.confidence.staleness_threshold_hours,
        "high_sample_density_threshold": settings.confidence.high_sample_density_threshold,
    }
