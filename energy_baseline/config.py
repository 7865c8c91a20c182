"""Analysis configuration with documented defaults."""

from dataclasses import dataclass

import pytz

from .errors import ConfigurationError


@dataclass(frozen=True)
class EnergyConfig:
    """Configuration for energy analysis parameters."""
    timezone: str = 'UTC'  # Calendar used to turn timestamps into date keys
    hdd_base: float = 65.0  # Heating degree day base (°F)
    cdd_base: float = 65.0  # Cooling degree day base (°F)

    # Regime gates, stricter than the degree-day balance point
    heating_threshold: float = 60.0  # °F, mean temp strictly below -> heating
    cooling_threshold: float = 70.0  # °F, mean temp strictly above -> cooling

    therms_to_kwh: float = 29.3001
    min_regression_points: int = 3

    # Weather collaborator
    geocoding_url: str = 'http://api.zippopotam.us/us/{zip_code}'
    archive_url: str = 'https://archive-api.open-meteo.com/v1/archive'
    request_timeout: float = 30

    def __post_init__(self):
        try:
            pytz.timezone(self.timezone)
        except pytz.UnknownTimeZoneError as e:
            raise ConfigurationError(f"Unknown timezone: {self.timezone}") from e

        if self.heating_threshold > self.cooling_threshold:
            raise ConfigurationError(
                f"heating_threshold ({self.heating_threshold}) must not exceed "
                f"cooling_threshold ({self.cooling_threshold})"
            )
        if self.therms_to_kwh <= 0:
            raise ConfigurationError("therms_to_kwh must be positive")
        if self.min_regression_points < 2:
            raise ConfigurationError("min_regression_points must be at least 2")

    @property
    def tz(self):
        return pytz.timezone(self.timezone)


DEFAULT_CONFIG = EnergyConfig()
