"""Exception hierarchy for the data collaborators around the analysis engine.

The engine itself (unify, analyze, recommend) never raises for degenerate
data; these errors come from configuration, CSV ingestion and the weather
service.
"""


class EnergyAnalysisError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(EnergyAnalysisError):
    """Invalid analysis configuration."""


class IngestionError(EnergyAnalysisError):
    """A usage file could not be turned into readings."""


class WeatherServiceError(EnergyAnalysisError):
    """Geocoding or weather history lookup failed."""
