"""Argument checks applied before any request is sent."""
from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from numbers import Real
from typing import Any, List, Optional, Sequence, Tuple

from trippe.errors import InvalidInputError

MAX_RADIUS = 100
DISTANCE_UNITS = ("MI", "KM")
MIN_QUERY_LENGTH = 3

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_hotel_code(hotel_code: Any) -> str:
    if not isinstance(hotel_code, str) or not hotel_code.strip():
        raise InvalidInputError("hotelCode is required")
    return hotel_code.strip()


def parse_date(value: Any, name: str) -> date:
    """Accept a ``date`` or a strict ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _ISO_DATE.match(value):
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            pass
    raise InvalidInputError(f"Invalid value for {name} (should be formatted as YYYY-MM-DD)")


def date_range(
    start_date: Any,
    end_date: Any,
    *,
    default_days: int,
    max_days: int,
    today: Optional[date] = None,
) -> List[date]:
    """Resolve an inclusive check-in date range of at most ``max_days`` days."""
    start = parse_date(start_date, "startDate") if start_date is not None else today or date.today()
    if end_date is None:
        end = start + timedelta(days=default_days - 1)
    else:
        end = parse_date(end_date, "endDate")
    if end < start:
        raise InvalidInputError("endDate should not be before startDate")
    days = (end - start).days + 1
    if days > max_days:
        raise InvalidInputError(f"Please limit the number of days to {max_days} or less")
    return [start + timedelta(days=offset) for offset in range(days)]


def stay_dates(
    check_in_date: Any,
    check_out_date: Any,
    *,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    check_in = parse_date(check_in_date, "checkinDate") if check_in_date is not None else today or date.today()
    if check_out_date is None:
        return check_in, check_in + timedelta(days=1)
    check_out = parse_date(check_out_date, "checkoutDate")
    if check_out <= check_in:
        raise InvalidInputError("checkoutDate should be after checkinDate")
    return check_in, check_out


def guest_counts(adults: Any, children: Any) -> Tuple[int, int]:
    if isinstance(adults, bool) or not isinstance(adults, int) or adults < 1:
        raise InvalidInputError("adults should be a whole number of at least 1")
    if isinstance(children, bool) or not isinstance(children, int) or children < 0:
        raise InvalidInputError("children should be a whole number of 0 or more")
    return adults, children


def coordinates(value: Any) -> Tuple[float, float]:
    """Validate a ``[longitude, latitude]`` pair."""
    valid = (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(item, Real) and not isinstance(item, bool) and math.isfinite(item) for item in value)
    )
    if not valid:
        raise InvalidInputError("Invalid format used for coordinates, please use [lng, lat]")
    longitude, latitude = value
    return float(longitude), float(latitude)


def distance_unit(unit: Any) -> str:
    if not isinstance(unit, str) or unit.upper() not in DISTANCE_UNITS:
        raise InvalidInputError("Wrong distance unit provided")
    return unit.upper()


def radius(value: Any) -> Real:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value) or value <= 0:
        raise InvalidInputError("The value of radius should be a positive number")
    if value > MAX_RADIUS:
        raise InvalidInputError(f"The value of radius should not be greater than {MAX_RADIUS}")
    return value


def destination_query(query: Any) -> str:
    if not isinstance(query, str) or len(query.strip()) < MIN_QUERY_LENGTH:
        raise InvalidInputError(f"Query string should be {MIN_QUERY_LENGTH} characters or more")
    return query.strip()


def rate_codes(codes: Sequence[str]) -> List[str]:
    cleaned = [code.strip().upper() for code in codes if code and code.strip()]
    if not cleaned:
        raise InvalidInputError("At least one rate code is required")
    return cleaned
