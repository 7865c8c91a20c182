"""
Daily alignment of electric, gas and weather series.

Every timestamp is keyed by its calendar date in the configured timezone.
The weather collaborator must emit dates in that same calendar, otherwise
days silently lose their temperature.
"""

import logging
import math
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from .analysis import classify, cooling_degree_days, heating_degree_days
from .config import DEFAULT_CONFIG, EnergyConfig
from .models import DailyAggregate, DailyWeather, HourlyWeather, UsageReading

logger = logging.getLogger(__name__)


def _local_timestamp(timestamp, config: EnergyConfig) -> pd.Timestamp:
    """Naive timestamps are taken to be local already; aware ones are converted."""
    ts = pd.Timestamp(timestamp)
    if ts.tzinfo is None:
        return ts
    return ts.tz_convert(config.timezone)


def date_key(timestamp, config: EnergyConfig = DEFAULT_CONFIG) -> date:
    """Calendar date of a timestamp in the configured timezone."""
    return _local_timestamp(timestamp, config).date()


def _weather_day(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _present(temp: Optional[float]) -> Optional[float]:
    if temp is None or math.isnan(temp):
        return None
    return float(temp)


def _daily_totals(readings: Sequence[UsageReading], config: EnergyConfig) -> pd.Series:
    """Sum reading quantities per date key."""
    if not readings:
        return pd.Series(dtype=float)

    frame = pd.DataFrame({
        'day': [date_key(r.timestamp, config) for r in readings],
        'quantity': [float(r.quantity) for r in readings],
    })
    # Fixed summation order so the totals do not depend on input order
    frame = frame.sort_values(['day', 'quantity'], kind='mergesort')
    return frame.groupby('day', sort=True)['quantity'].sum()


def unify(
    electric_readings: Sequence[UsageReading],
    gas_readings: Sequence[UsageReading],
    daily_weather: Iterable[DailyWeather],
    config: EnergyConfig = DEFAULT_CONFIG,
) -> List[DailyAggregate]:
    """
    Merge usage and weather into one aggregate per day with usage.

    Multiple readings on the same day (hourly data, for instance) are summed.
    Days that only appear in the weather series are dropped, and days
    without weather keep ``mean_temp_f=None``. The result is sorted by date.
    """
    electric = _daily_totals(electric_readings, config)
    gas = _daily_totals(gas_readings, config)

    weather_by_day = {}
    for entry in daily_weather:
        weather_by_day[_weather_day(entry.date)] = _present(entry.mean_temp_f)

    days = sorted(set(electric.index) | set(gas.index))
    aggregates = [
        DailyAggregate(
            date=day,
            electric_kwh=float(electric.get(day, 0.0)),
            gas_therms=float(gas.get(day, 0.0)),
            mean_temp_f=weather_by_day.get(day),
        )
        for day in days
    ]

    missing = sum(1 for a in aggregates if a.mean_temp_f is None)
    logger.debug(f"Unified {len(aggregates)} days, {missing} without weather")
    return aggregates


def to_frame(aggregates: Sequence[DailyAggregate], config: EnergyConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """Tabular view of the unified days for charts and reports."""
    columns = ['electric_kwh', 'gas_therms', 'gas_kwh', 'total_kwh',
               'mean_temp_f', 'hdd', 'cdd', 'regime']
    if not aggregates:
        return pd.DataFrame(columns=columns, index=pd.DatetimeIndex([], name='date'))

    df = pd.DataFrame({
        'electric_kwh': [a.electric_kwh for a in aggregates],
        'gas_therms': [a.gas_therms for a in aggregates],
        'mean_temp_f': [np.nan if a.mean_temp_f is None else a.mean_temp_f for a in aggregates],
    }, index=pd.DatetimeIndex([pd.Timestamp(a.date) for a in aggregates], name='date'))

    df['gas_kwh'] = df['gas_therms'] * config.therms_to_kwh
    df['total_kwh'] = df['electric_kwh'] + df['gas_kwh']
    df['hdd'] = [np.nan if a.mean_temp_f is None else heating_degree_days(a.mean_temp_f, config)
                 for a in aggregates]
    df['cdd'] = [np.nan if a.mean_temp_f is None else cooling_degree_days(a.mean_temp_f, config)
                 for a in aggregates]
    # Object dtype keeps None for days without temperature on every pandas version
    df['regime'] = pd.Series(
        [regime.value if regime is not None else None
         for regime in (classify(a.mean_temp_f, config) for a in aggregates)],
        index=df.index, dtype=object,
    )
    return df[columns]


def hourly_profile(
    day: date,
    electric_readings: Sequence[UsageReading],
    gas_readings: Sequence[UsageReading],
    hourly_weather: Sequence[HourlyWeather],
    config: EnergyConfig = DEFAULT_CONFIG,
) -> pd.DataFrame:
    """24 hourly buckets of usage and temperature for a single day."""
    hours = pd.RangeIndex(24, name='hour')

    def bucket(points, how):
        local = [(_local_timestamp(ts, config), value) for ts, value in points]
        rows = [(ts.hour, value) for ts, value in local if ts.date() == day]
        if not rows:
            return None
        series = pd.DataFrame(rows, columns=['hour', 'value']).groupby('hour')['value']
        return series.sum() if how == 'sum' else series.mean()

    electric = bucket(((r.timestamp, r.quantity) for r in electric_readings), 'sum')
    gas = bucket(((r.timestamp, r.quantity) for r in gas_readings), 'sum')
    temps = bucket(((w.time, w.temp_f) for w in hourly_weather), 'mean')

    return pd.DataFrame({
        'electric_kwh': electric.reindex(hours, fill_value=0.0) if electric is not None else 0.0,
        'gas_therms': gas.reindex(hours, fill_value=0.0) if gas is not None else 0.0,
        'temp_f': temps.reindex(hours) if temps is not None else np.nan,
    }, index=hours)
