# models and a tiny date helper to keep data shapes explicit and reusable across the app
# every record is frozen, sequences are tuples, values are passed through exactly as the provider sends them

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Tuple

@dataclass(frozen=True)
class GeoName:
    # first geocoding match for the searched location
    county: str
    city: str
    latitude: Any
    longitude: Any
    country: str

@dataclass(frozen=True)
class Currency:
    code: str
    name: str

@dataclass(frozen=True)
class PositionInfo:
    # country and region facts for a coordinate pair
    capital: str
    continent: str
    currencies: Tuple[Currency, ...]
    languages: Tuple[str, ...]
    timezone: str
    offset: str
    flag: str
    subregion: str

@dataclass(frozen=True)
class CurrentWeather:
    apparent_temperature: Any
    date_string: str
    description: str
    humidity: Any
    icon: str
    temperature: Any
    timezone: str
    wind_speed: Any

@dataclass(frozen=True)
class ForecastDay:
    # one day picked out of the daily forecast list
    apparent_max_temperature: Any
    apparent_min_temperature: Any
    description: str
    humidity: Any
    icon: str
    max_temperature: Any
    min_temperature: Any
    wind_speed: Any

@dataclass(frozen=True)
class WeatherForecastPair:
    departure: ForecastDay
    # None when the provider has no entry for the return date yet
    return_: Optional[ForecastDay] = None

@dataclass(frozen=True)
class TripResults:
    # output value object used by the cli view
    geoname: GeoName
    position_info: PositionInfo
    thumbnail: Optional[str]
    current_weather: CurrentWeather
    weather_forecast: Optional[WeatherForecastPair]
    departure_date: str
    return_date: Optional[str]
    days_until_departure: int

def days_from_today(date_string: str, today: Optional[date] = None) -> int:
    # whole days between today and an ISO date, negative for past dates
    target = date.fromisoformat(date_string)
    return (target - (today or date.today())).days
