"""
Pytest configuration and shared fixtures.

Builders for readings, weather and unified days so tests can describe
scenarios in terms of temperatures and daily totals.
"""

from datetime import date, datetime, timedelta
from typing import List, Sequence

import matplotlib
import pytest

from energy_baseline.config import EnergyConfig
from energy_baseline.models import DailyAggregate, DailyWeather, UsageReading

matplotlib.use('Agg')

START = date(2024, 1, 1)


def make_days(temps: Sequence[float], totals: Sequence[float], start: date = START) -> List[DailyAggregate]:
    """Consecutive electric-only days with the given temperatures and kWh."""
    return [
        DailyAggregate(date=start + timedelta(days=i), electric_kwh=total, mean_temp_f=temp)
        for i, (temp, total) in enumerate(zip(temps, totals))
    ]


def make_weather(day: date, mean: float) -> DailyWeather:
    return DailyWeather(date=day, mean_temp_f=mean, min_temp_f=mean - 5, max_temp_f=mean + 5)


def reading(y: int, m: int, d: int, hour: int = 0, quantity: float = 1.0) -> UsageReading:
    return UsageReading(timestamp=datetime(y, m, d, hour), quantity=quantity)


@pytest.fixture
def config() -> EnergyConfig:
    return EnergyConfig()


@pytest.fixture
def heating_days() -> List[DailyAggregate]:
    """Four cold days where total kWh = HDD + 10 exactly."""
    return make_days([55, 45, 35, 25], [20, 30, 40, 50])


@pytest.fixture
def hourly_january_2nd() -> List[UsageReading]:
    """24 hourly electric readings of 0.5 kWh on 2024-01-02."""
    return [reading(2024, 1, 2, hour, 0.5) for hour in range(24)]
