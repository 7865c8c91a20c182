"""
Home Energy Baseline
====================

Weather-normalized analysis of residential electric and gas usage: daily
alignment of meter readings with outdoor temperature, heating/cooling/shoulder
regime regressions, and rule-based efficiency recommendations.
"""

from .analysis import analyze, cooling_degree_days, fit_regimes, heating_degree_days
from .config import DEFAULT_CONFIG, EnergyConfig
from .errors import (ConfigurationError, EnergyAnalysisError, IngestionError,
                     WeatherServiceError)
from .models import (AnalysisResult, Category, DailyAggregate, DailyWeather,
                     HourlyWeather, Impact, Recommendation, Regime, RegimeFits,
                     RegressionFit, UsageReading, UtilityType)
from .recommendations import recommend
from .unify import unify

__version__ = '1.0.0'
