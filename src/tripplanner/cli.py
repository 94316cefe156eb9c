# connects the search form (destination + dates) to the service and prints the results view.
# on any lookup failure the error is logged and nothing is rendered for that search.

from __future__ import annotations
import argparse
import logging
import sys
from datetime import date
from typing import List, Optional
from .client import TravelAPIClient, TravelAPIError
from .models import ForecastDay, TripResults
from .service import FORECAST_HORIZON_DAYS, plan_trip

logger = logging.getLogger(__name__)

NO_IMAGE = "(no destination photo found)"


def _iso_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}") from None
    return value


def _forecast_lines(label: str, day: Optional[ForecastDay]) -> List[str]:
    if day is None:
        return [f"  {label}: forecast not yet available"]
    return [
        f"  {label}: {day.description}",
        f"    high {day.max_temperature} (feels {day.apparent_max_temperature})"
        f" / low {day.min_temperature} (feels {day.apparent_min_temperature})",
        f"    humidity {day.humidity}%  wind {day.wind_speed} m/s",
    ]


def render_results(results: TripResults) -> str:
    geo = results.geoname
    info = results.position_info
    now = results.current_weather
    currencies = ", ".join(f"{c.name} ({c.code})" for c in info.currencies)

    lines = [
        f"{geo.city}, {geo.county}, {geo.country}",
        results.thumbnail or NO_IMAGE,
        "",
        f"Departure {results.departure_date} ({results.days_until_departure} days from today)",
    ]
    if results.return_date:
        lines.append(f"Return    {results.return_date}")

    lines += [
        "",
        f"Capital:    {info.capital}",
        f"Continent:  {info.continent} / {info.subregion}",
        f"Currencies: {currencies}",
        f"Languages:  {', '.join(info.languages)}",
        f"Timezone:   {info.timezone} ({info.offset})",
        "",
        f"Weather now ({now.date_string}, {now.timezone}): {now.description}",
        f"  {now.temperature} (feels {now.apparent_temperature})"
        f"  humidity {now.humidity}%  wind {now.wind_speed} m/s",
    ]

    forecast = results.weather_forecast
    if forecast is None:
        lines.append(f"Forecast available {FORECAST_HORIZON_DAYS} days before departure")
    else:
        lines.append("Forecast")
        lines += _forecast_lines("departure", forecast.departure)
        if results.return_date:
            lines += _forecast_lines("return", forecast.return_)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tripplanner", description="Look up a travel destination")
    parser.add_argument("destination", help="place to travel to, e.g. 'Paris'")
    parser.add_argument("--departure-date", required=True, type=_iso_date)
    parser.add_argument("--return-date", type=_iso_date)
    parser.add_argument("--base-url", help="proxy base url (default: $TRAVEL_API_BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = TravelAPIClient(base_url=args.base_url)
    try:
        results = plan_trip(client, args.destination, args.departure_date, args.return_date)
    except TravelAPIError as exc:
        # already logged by the service; leave the results view unrendered
        logger.info("Search for %r aborted", args.destination)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(render_results(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
