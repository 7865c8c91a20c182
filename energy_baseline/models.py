"""Plain data structures passed between the pipeline stages."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class UtilityType(str, Enum):
    ELECTRIC = 'electric'
    GAS = 'gas'


class Regime(str, Enum):
    """Which regression a day contributes to, based on its mean temperature."""
    HEATING = 'heating'
    COOLING = 'cooling'
    SHOULDER = 'shoulder'


class Impact(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class Category(str, Enum):
    HEATING = 'heating'
    COOLING = 'cooling'
    BASELOAD = 'baseload'


@dataclass(frozen=True)
class UsageReading:
    """One meter reading: kWh for electric, Therms for gas."""
    timestamp: datetime
    quantity: float
    is_estimated: bool = False


@dataclass(frozen=True)
class DailyWeather:
    date: date
    mean_temp_f: float
    min_temp_f: float
    max_temp_f: float


@dataclass(frozen=True)
class HourlyWeather:
    time: datetime
    temp_f: float


@dataclass(frozen=True)
class DailyAggregate:
    """
    All usage for one calendar day plus that day's mean outdoor temperature.

    ``mean_temp_f`` is None when no weather matched the day, which keeps
    "no data" distinct from a real reading of zero.
    """
    date: date
    electric_kwh: float = 0.0
    gas_therms: float = 0.0
    mean_temp_f: Optional[float] = None

    @property
    def has_temperature(self) -> bool:
        return self.mean_temp_f is not None


@dataclass(frozen=True)
class RegressionFit:
    slope: float = 0.0
    intercept: float = 0.0
    r_squared: Optional[float] = 0.0
    n_points: int = 0


@dataclass(frozen=True)
class RegimeFits:
    """Both regime regressions in full, for presentation code."""
    heating: RegressionFit
    cooling: RegressionFit
    temperature_correlation: float = 0.0


@dataclass(frozen=True)
class AnalysisResult:
    """
    Output of the regime analyzer.

    ``r_squared`` is the goodness of fit of the heating regression only.
    The day counts are diagnostics: a zero slope backed by a handful of days
    is not evidence of zero sensitivity.
    """
    base_load_kwh: float = 0.0
    heating_slope: float = 0.0  # kWh per HDD
    cooling_slope: float = 0.0  # kWh per CDD
    r_squared: float = 0.0
    heating_days: int = 0
    cooling_days: int = 0
    shoulder_days: int = 0


@dataclass(frozen=True)
class Recommendation:
    id: str
    title: str
    description: str
    impact: Impact
    category: Category
