"""
Weather collaborator: zip code geocoding and historical temperatures.

Zip codes are resolved with Zippopotam.us and history comes from the
Open-Meteo archive API (both free, no key required). Temperatures are
requested in Fahrenheit, with daily values computed in the configured
timezone so their dates line up with the usage date keys.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

import pandas as pd
import requests

from .config import DEFAULT_CONFIG, EnergyConfig
from .errors import WeatherServiceError
from .models import DailyWeather, HourlyWeather, UsageReading
from .unify import date_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoLocation:
    name: str
    latitude: float
    longitude: float
    country: str
    admin1: Optional[str] = None  # State/Region


def _get_json(url: str, params: Optional[dict], config: EnergyConfig) -> dict:
    try:
        response = requests.get(url, params=params, timeout=config.request_timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        logger.error(f"Request to {url} failed: {e}")
        raise WeatherServiceError(f"Request to {url} failed: {e}") from e
    except ValueError as e:
        raise WeatherServiceError(f"Invalid JSON from {url}") from e


def get_coordinates(zip_code: str, config: EnergyConfig = DEFAULT_CONFIG) -> GeoLocation:
    """Resolve a US zip code to a location."""
    zip_code = (zip_code or '').strip()
    if len(zip_code) < 5:
        raise WeatherServiceError(f"Invalid zip code: {zip_code!r}")

    data = _get_json(config.geocoding_url.format(zip_code=zip_code), None, config)
    places = data.get('places') or []
    if not places:
        raise WeatherServiceError(f"No location found for zip code {zip_code}")

    place = places[0]
    location = GeoLocation(
        name=place['place name'],
        latitude=float(place['latitude']),
        longitude=float(place['longitude']),
        country=data.get('country', ''),
        admin1=place.get('state'),
    )
    logger.info(f"Zip {zip_code} -> {location.name}, {location.admin1} "
                f"({location.latitude:.4f}, {location.longitude:.4f})")
    return location


def _archive_params(latitude: float, longitude: float, start: date, end: date,
                    config: EnergyConfig) -> dict:
    return {
        'latitude': latitude,
        'longitude': longitude,
        'start_date': start.isoformat(),
        'end_date': end.isoformat(),
        'temperature_unit': 'fahrenheit',
        'timezone': config.timezone,
    }


def get_historical_weather(latitude: float, longitude: float, start: date, end: date,
                           config: EnergyConfig = DEFAULT_CONFIG) -> List[DailyWeather]:
    """Daily mean/min/max temperature from the Open-Meteo archive."""
    params = _archive_params(latitude, longitude, start, end, config)
    params['daily'] = 'temperature_2m_max,temperature_2m_min,temperature_2m_mean'

    data = _get_json(config.archive_url, params, config)
    daily = data.get('daily')
    if not daily:
        logger.error("Weather response has no daily block")
        raise WeatherServiceError("No daily data received")

    weather = []
    try:
        for day, mean, high, low in zip(daily['time'], daily['temperature_2m_mean'],
                                        daily['temperature_2m_max'], daily['temperature_2m_min']):
            if mean is None:
                continue
            weather.append(DailyWeather(
                date=date.fromisoformat(day),
                mean_temp_f=float(mean),
                min_temp_f=float(low) if low is not None else float(mean),
                max_temp_f=float(high) if high is not None else float(mean),
            ))
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Malformed daily weather response: {e!r}")
        raise WeatherServiceError("Malformed weather response") from e

    logger.info(f"Retrieved {len(weather)} days of weather for {start} to {end}")
    return weather


def get_hourly_weather(latitude: float, longitude: float, start: date, end: date,
                       config: EnergyConfig = DEFAULT_CONFIG) -> List[HourlyWeather]:
    """Hourly temperature, with local naive timestamps in the configured timezone."""
    params = _archive_params(latitude, longitude, start, end, config)
    params['hourly'] = 'temperature_2m'

    data = _get_json(config.archive_url, params, config)
    hourly = data.get('hourly')
    if not hourly:
        logger.error("Weather response has no hourly block")
        raise WeatherServiceError("No hourly data received")

    try:
        weather = [
            HourlyWeather(time=datetime.fromisoformat(t), temp_f=float(temp))
            for t, temp in zip(hourly['time'], hourly['temperature_2m'])
            if temp is not None
        ]
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Malformed hourly weather response: {e!r}")
        raise WeatherServiceError("Malformed weather response") from e
    logger.info(f"Retrieved {len(weather)} hourly observations")
    return weather


def weather_for_readings(zip_code: str, readings: Sequence[UsageReading],
                         config: EnergyConfig = DEFAULT_CONFIG) -> List[DailyWeather]:
    """Daily weather covering the date span of the given readings."""
    if not readings:
        return []
    days = [date_key(r.timestamp, config) for r in readings]
    location = get_coordinates(zip_code, config)
    return get_historical_weather(location.latitude, location.longitude, min(days), max(days), config)


def load_weather_csv(source) -> List[DailyWeather]:
    """Read daily weather saved as date,mean_temp_f,min_temp_f,max_temp_f."""
    try:
        df = pd.read_csv(source)
    except pd.errors.EmptyDataError as e:
        raise WeatherServiceError("Weather file is empty") from e
    except (OSError, pd.errors.ParserError) as e:
        logger.error(f"Could not read weather file {source}: {e}")
        raise WeatherServiceError(f"Could not read weather file: {e}") from e

    missing = {'date', 'mean_temp_f'} - set(df.columns)
    if missing:
        raise WeatherServiceError(f"Weather file is missing columns: {', '.join(sorted(missing))}")

    df = df.dropna(subset=['date', 'mean_temp_f']).copy()
    for column in ('min_temp_f', 'max_temp_f'):
        df[column] = df[column].fillna(df['mean_temp_f']) if column in df.columns else df['mean_temp_f']

    try:
        weather = [
            DailyWeather(
                date=date.fromisoformat(str(day)[:10]),
                mean_temp_f=float(mean),
                min_temp_f=float(low),
                max_temp_f=float(high),
            )
            for day, mean, low, high in zip(df['date'], df['mean_temp_f'], df['min_temp_f'], df['max_temp_f'])
        ]
    except ValueError as e:
        logger.error(f"Invalid row in weather file {source}: {e}")
        raise WeatherServiceError(f"Weather file dates must be YYYY-MM-DD: {e}") from e

    logger.info(f"Loaded {len(weather)} days of weather from file")
    return weather
