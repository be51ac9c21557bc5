"""Links to the public IHG booking site."""
from __future__ import annotations

from datetime import date
from urllib.parse import urlencode

BOOKING_PAGE_URL = "https://www.ihg.com/hotels/us/en/find-hotels/select-roomrate"


def _month_year(value: date) -> str:
    # The booking site counts months from zero: January 2024 is "002024".
    return f"{value.month - 1:02d}{value.year}"


def build_booking_page_url(
    hotel_code: str,
    *,
    check_in: date,
    check_out: date,
    adults: int = 1,
    children: int = 0,
    base_url: str = BOOKING_PAGE_URL,
) -> str:
    """Return the room and rate selection page for a stay."""
    query = {
        "fromRedirect": "true",
        "qSrt": "sBR",
        "qSlH": hotel_code,
        "qRms": 1,
        "qAdlt": adults,
        "qChld": children,
        "qCiD": f"{check_in.day:02d}",
        "qCiMy": _month_year(check_in),
        "qCoD": f"{check_out.day:02d}",
        "qCoMy": _month_year(check_out),
    }
    return f"{base_url}?{urlencode(query)}"
