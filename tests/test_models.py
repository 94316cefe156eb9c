# date math and immutability of the value objects

import dataclasses
from datetime import date

import pytest

from tripplanner.models import Currency, GeoName, days_from_today


def test_days_from_today():
    assert days_from_today("2021-11-10", today=date(2021, 11, 8)) == 2
    # across a month boundary
    assert days_from_today("2021-12-01", today=date(2021, 11, 28)) == 3
    # past dates are negative
    assert days_from_today("2021-11-01", today=date(2021, 11, 8)) == -7


def test_days_from_today_rejects_garbage():
    with pytest.raises(ValueError):
        days_from_today("next tuesday", today=date(2021, 11, 8))


def test_records_are_immutable():
    geo = GeoName(county="c", city="x", latitude=1, longitude=2, country="y")
    with pytest.raises(dataclasses.FrozenInstanceError):
        geo.city = "z"
    assert Currency(code="EUR", name="Euro") == Currency(code="EUR", name="Euro")
