from __future__ import annotations

from datetime import date

import pytest

from trippe.errors import InvalidInputError
from trippe.queries import validation


def test_parse_date_is_strict():
    assert validation.parse_date("2024-02-29", "startDate") == date(2024, 2, 29)
    assert validation.parse_date(date(2024, 1, 1), "startDate") == date(2024, 1, 1)
    for value in ("2023-02-29", "2024-1-5", "20240105", "22-11-19", None, 20240105):
        with pytest.raises(InvalidInputError, match="startDate"):
            validation.parse_date(value, "startDate")


def test_date_range_is_inclusive_and_ordered():
    dates = validation.date_range("2024-01-30", "2024-02-02", default_days=62, max_days=62)
    assert dates == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 2)]


def test_date_range_defaults_from_today():
    today = date(2024, 6, 1)
    dates = validation.date_range(None, None, default_days=60, max_days=60, today=today)
    assert len(dates) == 60
    assert dates[0] == today
    assert dates[-1] == date(2024, 7, 30)


def test_date_range_ceiling():
    assert len(validation.date_range("2024-01-01", "2024-03-02", default_days=62, max_days=62)) == 62
    with pytest.raises(InvalidInputError, match="62 or less"):
        validation.date_range("2024-01-01", "2024-03-03", default_days=62, max_days=62)


def test_stay_dates_default_to_one_night():
    assert validation.stay_dates("2024-12-31", None) == (date(2024, 12, 31), date(2025, 1, 1))
    with pytest.raises(InvalidInputError, match="after checkinDate"):
        validation.stay_dates("2024-12-31", "2024-12-31")


def test_coordinates_require_two_numbers():
    assert validation.coordinates([4.39, 51.22]) == (4.39, 51.22)
    assert validation.coordinates((4, 51)) == (4.0, 51.0)
    for value in ([], [50.5], [50.5, "50"], [True, 1.0], "4.39,51.22", None, [1, 2, 3]):
        with pytest.raises(InvalidInputError, match=r"\[lng, lat\]"):
            validation.coordinates(value)


def test_distance_unit_and_radius():
    assert validation.distance_unit("mi") == "MI"
    assert validation.distance_unit("Km") == "KM"
    with pytest.raises(InvalidInputError):
        validation.distance_unit("miles")
    assert validation.radius(100) == 100
    for value in (0, -5, 100.5, "10", True):
        with pytest.raises(InvalidInputError, match="radius"):
            validation.radius(value)


def test_guest_counts():
    assert validation.guest_counts(2, 0) == (2, 0)
    with pytest.raises(InvalidInputError, match="adults"):
        validation.guest_counts(0, 0)
    with pytest.raises(InvalidInputError, match="children"):
        validation.guest_counts(1, -1)


def test_destination_query_minimum_length():
    assert validation.destination_query("Ant") == "Ant"
    for value in ("An", "  An  ", "", None):
        with pytest.raises(InvalidInputError, match="3 characters"):
            validation.destination_query(value)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_are_rejected(value):
    with pytest.raises(InvalidInputError, match=r"\[lng, lat\]"):
        validation.coordinates([value, 51.22])
    with pytest.raises(InvalidInputError, match=r"\[lng, lat\]"):
        validation.coordinates([4.39, value])
    with pytest.raises(InvalidInputError, match="radius"):
        validation.radius(value)
