# shared fakes so service tests never touch http

import json
import threading
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"


class FakeClient:
    # stands in for TravelAPIClient: answers get_data from a path -> payload (or exception) table
    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self._lock = threading.Lock()

    def get_data(self, path, params):
        with self._lock:
            self.calls.append((path, dict(params)))
        answer = self.responses[path]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def paths(self):
        return [path for path, _ in self.calls]


def load_json(name):
    return json.loads((DATA_DIR / name).read_text())


GEONAME = {
    "lat": "48.85341",
    "lng": "2.3488",
    "name": "Paris",
    "adminName1": "Île-de-France",
    "countryName": "France",
    "population": 2138551,
}

POSITION_INFO = {
    "continent": "Europe",
    "country_module": {
        "capital": "Paris",
        "currencies": [
            {"code": "EUR", "name": "Euro", "symbol": "€"},
            {"code": "XPF", "name": "CFP franc", "symbol": "₣"},
        ],
        "languages": {"fra": "French", "bre": "Breton"},
        "flag": "https://example.test/flags/fr.svg",
        "global": {"subregion": "Western Europe", "alpha2": "FR"},
    },
    "timezone_module": {"name": "Europe/Paris", "offset_string": "+01:00", "offset_sec": 3600},
}

CURRENT_WEATHER = {
    "app_temp": 7.4,
    "ob_time": "2021-11-08 14:00",
    "rh": 76,
    "temp": 9.1,
    "timezone": "Europe/Paris",
    "weather": {"icon": "c02d", "code": 801, "description": "Few clouds"},
    "wind_spd": 4.2,
    "pres": 1012,
}


def success(**results):
    return {"success": True, "results": results}


@pytest.fixture
def forecast_payload():
    return load_json("paris_forecast.json")


@pytest.fixture
def paris_client(forecast_payload):
    return FakeClient({
        "/api/geoname": success(geonames=[GEONAME]),
        "/api/position-info": success(data=[POSITION_INFO]),
        "/api/thumbnail": success(hits=[{"webformatURL": "https://img.test/paris.jpg"}]),
        "/api/weather-current": success(data=[CURRENT_WEATHER]),
        "/api/weather-forecast": forecast_payload,
    })
