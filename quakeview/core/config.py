"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from quakeview.core.earthquake import Coordinate
from quakeview.core.geo import DEFAULT_CENTER
from quakeview.core.noise import DEFAULT_RISK_RADIUS_DEGREES
from quakeview.core.personalization import (
    DEFAULT_MAGNITUDE_THRESHOLD,
    DEFAULT_USER_LOCATION,
    MonitoredLocation,
)
from quakeview.core.query import SortOrder


DEFAULT_FEED_URL = "http://localhost:5001/earthquakes"


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_url: URL of the JSON earthquake feed
        request_timeout_seconds: HTTP timeout for the feed request
        min_magnitude: Initial minimum magnitude filter
        sort_order: Initial list order
        fallback_center: Map center when no record is mappable
        user_location: Location used for the risk view
        magnitude_threshold: Default threshold for new monitored locations
        risk_radius_degrees: Extent of the risk scatter around a location
        monitored_radius_km: Proximity radius for monitored locations
        monitored_locations: Places to watch
    """
    feed_url: str = DEFAULT_FEED_URL
    request_timeout_seconds: int = 30
    min_magnitude: float = 0.0
    sort_order: SortOrder = SortOrder.TIME
    fallback_center: Coordinate = DEFAULT_CENTER
    user_location: Coordinate = DEFAULT_USER_LOCATION
    magnitude_threshold: float = DEFAULT_MAGNITUDE_THRESHOLD
    risk_radius_degrees: float = DEFAULT_RISK_RADIUS_DEGREES
    monitored_radius_km: float = 100.0
    monitored_locations: list[MonitoredLocation] = field(default_factory=list)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_url or config.feed_url.startswith("${"):
        errors.append(ValidationError(
            field="feed_url",
            message="Feed URL not resolved (still contains placeholder)",
            severity="warning",
        ))
    elif not config.feed_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_url",
            message=f"Feed URL should be http(s), got {config.feed_url!r}",
            severity="warning",
        ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if config.min_magnitude < 0:
        errors.append(ValidationError(
            field="min_magnitude",
            message=f"Minimum magnitude must be non-negative, got {config.min_magnitude}",
        ))

    if config.magnitude_threshold < 0:
        errors.append(ValidationError(
            field="magnitude_threshold",
            message=f"Threshold must be non-negative, got {config.magnitude_threshold}",
        ))

    if config.risk_radius_degrees <= 0:
        errors.append(ValidationError(
            field="risk_radius_degrees",
            message=f"Risk radius must be positive, got {config.risk_radius_degrees}",
        ))

    if config.monitored_radius_km <= 0:
        errors.append(ValidationError(
            field="monitored_radius_km",
            message=f"Radius must be positive, got {config.monitored_radius_km}",
        ))

    errors.extend(validate_coordinates(
        config.fallback_center.latitude,
        config.fallback_center.longitude,
        "fallback_center",
    ))
    errors.extend(validate_coordinates(
        config.user_location.latitude,
        config.user_location.longitude,
        "user_location",
    ))

    for i, location in enumerate(config.monitored_locations):
        errors.extend(validate_coordinates(
            location.latitude, location.longitude,
            f"monitored_locations[{i}]",
        ))
        if location.notification_threshold < 0:
            errors.append(ValidationError(
                field=f"monitored_locations[{i}].notification_threshold",
                message=(
                    "Threshold must be non-negative, "
                    f"got {location.notification_threshold}"
                ),
            ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
