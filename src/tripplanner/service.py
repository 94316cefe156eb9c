# orchestration and business rules.
# pure parsers turn each provider payload into our small, typed value objects and check shape
# fetch_* accessors glue client -> parser -> error helper, one per data domain
# plan_trip runs the dependent lookups of one search, using ThreadPoolExecutor for the independent ones

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import Any, Dict, NoReturn, Optional
from .client import ProviderError, ResponseShapeError, TravelAPIClient, TravelAPIError
from .models import (
    Currency,
    CurrentWeather,
    ForecastDay,
    GeoName,
    PositionInfo,
    TripResults,
    WeatherForecastPair,
    days_from_today,
)

logger = logging.getLogger(__name__)

# the daily forecast provider only covers this many days ahead
FORECAST_HORIZON_DAYS = 16

GEONAME_PATH = "/api/geoname"
POSITION_INFO_PATH = "/api/position-info"
THUMBNAIL_PATH = "/api/thumbnail"
WEATHER_CURRENT_PATH = "/api/weather-current"
WEATHER_FORECAST_PATH = "/api/weather-forecast"


def _check_success(payload: Dict[str, Any]) -> None:
    # must run before anything reads payload["results"]; only a literal true counts as success
    if not isinstance(payload, dict):
        raise ResponseShapeError(f"Unexpected API shape: expected a json object, got {type(payload).__name__}")
    if payload.get("success") is not True:
        raise ProviderError(payload.get("message"))


def _first(items, what: str):
    # selection rule is index 0, no re-ranking
    if not items:
        raise ResponseShapeError(f"Unexpected API shape: no {what} in results")
    return items[0]


# ---- geoname ----
def parse_geoname_response(payload: Dict[str, Any]) -> GeoName:
    _check_success(payload)
    try:
        match = _first(payload["results"]["geonames"], "geonames")
        return GeoName(
            county=match["adminName1"],
            city=match["name"],
            latitude=match["lat"],
            longitude=match["lng"],
            country=match["countryName"],
        )
    except (KeyError, TypeError) as exc:
        raise ResponseShapeError(f"Unexpected geoname shape: missing {exc}") from exc


# ---- position info ----
def parse_position_info_response(payload: Dict[str, Any]) -> PositionInfo:
    # currencies keep only code and name; languages keep the map's values in document order
    _check_success(payload)
    try:
        info = _first(payload["results"]["data"], "position data")
        country = info["country_module"]
        tz = info["timezone_module"]
        return PositionInfo(
            capital=country["capital"],
            continent=info["continent"],
            currencies=tuple(Currency(code=c["code"], name=c["name"]) for c in country["currencies"]),
            languages=tuple(country["languages"].values()),
            timezone=tz["name"],
            offset=tz["offset_string"],
            flag=country["flag"],
            subregion=country["global"]["subregion"],
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ResponseShapeError(f"Unexpected position info shape: missing {exc}") from exc


# ---- destination photo ----
def parse_thumbnail_response(payload: Dict[str, Any]) -> Optional[str]:
    # zero hits is a valid answer, not an error
    _check_success(payload)
    try:
        hits = payload["results"].get("hits") or []
        if not hits:
            return None
        return hits[0].get("webformatURL")
    except (AttributeError, TypeError, KeyError) as exc:
        raise ResponseShapeError(f"Unexpected thumbnail shape: {exc}") from exc


# ---- current weather ----
def parse_current_weather_response(payload: Dict[str, Any]) -> CurrentWeather:
    _check_success(payload)
    try:
        obs = _first(payload["results"]["data"], "weather observations")
        return CurrentWeather(
            apparent_temperature=obs["app_temp"],
            date_string=obs["ob_time"],
            description=obs["weather"]["description"],
            humidity=obs["rh"],
            icon=obs["weather"]["icon"],
            temperature=obs["temp"],
            timezone=obs["timezone"],
            wind_speed=obs["wind_spd"],
        )
    except (KeyError, TypeError) as exc:
        raise ResponseShapeError(f"Unexpected current weather shape: missing {exc}") from exc


# ---- weather forecast ----
def _forecast_day(day: Dict[str, Any]) -> ForecastDay:
    return ForecastDay(
        apparent_max_temperature=day["app_max_temp"],
        apparent_min_temperature=day["app_min_temp"],
        description=day["weather"]["description"],
        humidity=day["rh"],
        icon=day["weather"]["icon"],
        max_temperature=day["max_temp"],
        min_temperature=day["min_temp"],
        wind_speed=day["wind_spd"],
    )


def _find_day(days, date_string: Optional[str]) -> Optional[Dict[str, Any]]:
    # exact string match on valid_date, first match wins
    if date_string is None:
        return None
    return next((d for d in days if d.get("valid_date") == date_string), None)


def parse_weather_forecast_response(
    payload: Dict[str, Any], departure_date: str, return_date: Optional[str] = None
) -> WeatherForecastPair:
    _check_success(payload)
    try:
        days = payload["results"]["data"]
        departure = _find_day(days, departure_date)
        if departure is None:
            raise ResponseShapeError(f"no forecast for date {departure_date}")
        back = _find_day(days, return_date)
        return WeatherForecastPair(
            departure=_forecast_day(departure),
            return_=_forecast_day(back) if back is not None else None,
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ResponseShapeError(f"Unexpected forecast shape: missing {exc}") from exc


# ---- error helper ----
def handle_error_and_raise(error: TravelAPIError) -> NoReturn:
    # single place where a failed lookup is logged; the caller still sees the same error
    logger.error("Travel data lookup failed: %s", error)
    raise error


# ---- accessors ----
def fetch_geoname(client: TravelAPIClient, location: str) -> GeoName:
    try:
        return parse_geoname_response(client.get_data(GEONAME_PATH, {"location": location}))
    except TravelAPIError as exc:
        handle_error_and_raise(exc)


def fetch_position_info(client: TravelAPIClient, latitude, longitude) -> PositionInfo:
    try:
        payload = client.get_data(POSITION_INFO_PATH, {"latitude": latitude, "longitude": longitude})
        return parse_position_info_response(payload)
    except TravelAPIError as exc:
        handle_error_and_raise(exc)


def fetch_thumbnail(client: TravelAPIClient, city: str, country: str) -> Optional[str]:
    try:
        return parse_thumbnail_response(client.get_data(THUMBNAIL_PATH, {"city": city, "country": country}))
    except TravelAPIError as exc:
        handle_error_and_raise(exc)


def fetch_current_weather(client: TravelAPIClient, latitude, longitude) -> CurrentWeather:
    try:
        payload = client.get_data(WEATHER_CURRENT_PATH, {"latitude": latitude, "longitude": longitude})
        return parse_current_weather_response(payload)
    except TravelAPIError as exc:
        handle_error_and_raise(exc)


def fetch_weather_forecast(
    client: TravelAPIClient,
    latitude,
    longitude,
    departure_date: str,
    return_date: Optional[str] = None,
) -> WeatherForecastPair:
    # only the coordinates go upstream, the dates select days locally
    try:
        payload = client.get_data(WEATHER_FORECAST_PATH, {"latitude": latitude, "longitude": longitude})
        return parse_weather_forecast_response(payload, departure_date, return_date)
    except TravelAPIError as exc:
        handle_error_and_raise(exc)


# single search path: geoname first, then everything that depends on it
def plan_trip(
    client: TravelAPIClient,
    destination: str,
    departure_date: str,
    return_date: Optional[str] = None,
    today: Optional[date] = None,
    max_workers: int = 4,
) -> TripResults:
    days_until = days_from_today(departure_date, today)
    geo = fetch_geoname(client, destination)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            pool.submit(fetch_position_info, client, geo.latitude, geo.longitude): "position_info",
            pool.submit(fetch_thumbnail, client, geo.city, geo.country): "thumbnail",
            pool.submit(fetch_current_weather, client, geo.latitude, geo.longitude): "current_weather",
        }
        if days_until < FORECAST_HORIZON_DAYS:
            futures[pool.submit(
                fetch_weather_forecast, client, geo.latitude, geo.longitude, departure_date, return_date
            )] = "weather_forecast"
        else:
            logger.info("Departure is %d days away, skipping forecast", days_until)

        found: Dict[str, Any] = {"weather_forecast": None}
        for fut in as_completed(futures):
            # allow exceptions to propagate, the first failure aborts the whole search
            found[futures[fut]] = fut.result()

    return TripResults(
        geoname=geo,
        departure_date=departure_date,
        return_date=return_date,
        days_until_departure=days_until,
        **found,
    )
