"""Utilities to transform raw IHG API payloads into normalised records.

Everything here is a pure function of its inputs: no I/O and no logging of
request state. Upstream quirks handled here:

* optional fields are tested for presence (``"totalAmount" in window``), never
  for truthiness, so a zero-cost rate is not mistaken for a missing one;
* rate windows are grouped by check-in day and reduced to per-night minimums;
* sentinels such as an empty ``currencyCode`` mean the hotel code is unknown.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from trippe.errors import (
    NoAvailabilityError,
    UnknownOrInvalidHotelCodeError,
    UpstreamError,
)

from .brands import brand_name
from .models import (
    AreaPrice,
    DestinationSuggestion,
    HotelDescription,
    HotelNightPrice,
    HotelPriceCalendar,
    HotelProfile,
    Number,
    PointsOption,
    PriceCalendarDay,
    StateInfo,
    StayOffer,
    StayPrice,
    StayProduct,
    StayRatePlan,
)

UNKNOWN_HOTEL_ERROR_CODES = frozenset({"INVALID_HOTEL_MNEMONICS", "CRS_50010"})
NO_AVAILABILITY_ERROR_CODES = frozenset({"CRS_50025"})
OPEN_AVAILABILITY_STATUS = "OPEN"


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_number(value: Any) -> Optional[Number]:
    # Keep ints as ints so point totals and zero amounts survive unchanged.
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return _to_float(value)


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def _first(entries: Any) -> Dict[str, Any]:
    if isinstance(entries, list) and entries and isinstance(entries[0], dict):
        return entries[0]
    return {}


# Hotel profile


def build_hotel_profile(payload: dict[str, Any], hotel_code: str) -> HotelProfile:
    hotel_info = payload.get("hotelInfo") if isinstance(payload, dict) else None
    if not hotel_info:
        raise UnknownOrInvalidHotelCodeError()

    brand_info: Dict[str, Any] = hotel_info.get("brandInfo") or {}
    location: Dict[str, Any] = hotel_info.get("location") or {}
    profile: Dict[str, Any] = hotel_info.get("profile") or {}
    address: Dict[str, Any] = hotel_info.get("address") or {}
    lat_long: Dict[str, Any] = profile.get("latLong") or {}
    country: Dict[str, Any] = address.get("country") or {}

    brand_code = brand_info.get("brandCode")

    state: Optional[StateInfo] = None
    state_info = address.get("state")
    if isinstance(state_info, dict) and "code" in state_info:
        state = StateInfo(code=state_info["code"], name=state_info.get("name"))

    consumer_url = _clean_text(address.get("consumerFriendlyURL"))

    return HotelProfile(
        hotel_code=hotel_code,
        hotel_name=profile.get("name"),
        brand_code=brand_code,
        brand_name=brand_name(brand_code),
        description=HotelDescription(
            long=profile.get("longDescription"),
            short=profile.get("shortDescription"),
        ),
        number_of_rooms=profile.get("roomsIncludingSuitesCount"),
        closest_city=location.get("closestCity"),
        street=[line for line in (_clean_text(address.get("street1")), _clean_text(address.get("street4"))) if line],
        postal_code=address.get("zip"),
        city=address.get("city"),
        state=state,
        country=country.get("code"),
        coordinates=[_to_float(lat_long.get("longitude")), _to_float(lat_long.get("latitude"))],
        url=f"https://{consumer_url}" if consumer_url else None,
    )


# Price calendar


def _calendar_windows(payload: dict[str, Any]) -> Tuple[str, List[dict[str, Any]]]:
    hotel = _first(payload.get("hotels") if isinstance(payload, dict) else None)
    currency_code = hotel.get("currencyCode")
    rates = hotel.get("rates") or []
    if not hotel or not currency_code or not rates:
        raise UnknownOrInvalidHotelCodeError()
    windows = [window for rate in rates for window in (rate.get("windows") or [])]
    return currency_code, windows


def _windows_by_day(windows: Iterable[dict[str, Any]]) -> Dict[str, List[dict[str, Any]]]:
    grouped: Dict[str, List[dict[str, Any]]] = {}
    for window in windows:
        start = window.get("startDate")
        if not isinstance(start, str):
            continue
        grouped.setdefault(start[:10], []).append(window)
    return grouped


def _lowest(windows: Iterable[dict[str, Any]], key: str) -> Optional[Number]:
    values = [
        value
        for value in (_to_number(window[key]) for window in windows if key in window)
        if value is not None
    ]
    if not values:
        return None
    return min(values)


def _lowest_per_day(
    payload: dict[str, Any], dates: Sequence[date]
) -> Tuple[str, List[Tuple[date, Optional[Number], Optional[Number]]]]:
    currency_code, windows = _calendar_windows(payload)
    grouped = _windows_by_day(windows)
    rows = []
    for day in dates:
        day_windows = grouped.get(day.isoformat(), [])
        points = _lowest(day_windows, "totalPoints")
        rows.append(
            (
                day,
                _lowest(day_windows, "totalAmount"),
                int(points) if points is not None else None,
            )
        )
    return currency_code, rows


def build_price_calendar(
    payload: dict[str, Any],
    hotel_code: str,
    dates: Sequence[date],
) -> HotelPriceCalendar:
    """Reduce availability windows to one lowest cash/points price per requested day."""
    currency_code, rows = _lowest_per_day(payload, dates)
    return HotelPriceCalendar(
        hotel_code=hotel_code,
        currency_code=currency_code,
        prices=[
            PriceCalendarDay(check_in_date=day, cash_price=cash_price, points=points)
            for day, cash_price, points in rows
        ],
    )


def build_night_prices(
    payload: dict[str, Any],
    hotel_code: str,
    dates: Sequence[date],
) -> List[HotelNightPrice]:
    """Same reduction as :func:`build_price_calendar`, as flat per-night rows."""
    currency_code, rows = _lowest_per_day(payload, dates)
    return [
        HotelNightPrice(
            hotel_code=hotel_code,
            check_in_date=day,
            cash_price=cash_price,
            currency_code=currency_code,
            points=points,
        )
        for day, cash_price, points in rows
    ]


# Offers (stay and area searches)


def raise_for_offer_errors(status_code: int, payload: Any) -> None:
    """Translate a non-2xx offers response into a domain error.

    The offers endpoint reports failures as ``{"errors": [{"code", "message"}]}``.
    """
    if 200 <= status_code < 300:
        return
    errors = payload.get("errors") if isinstance(payload, dict) else None
    errors = [error for error in errors or [] if isinstance(error, dict)]
    codes = {error.get("code") for error in errors}
    if codes & UNKNOWN_HOTEL_ERROR_CODES:
        raise UnknownOrInvalidHotelCodeError()
    if codes & NO_AVAILABILITY_ERROR_CODES:
        raise NoAvailabilityError()
    if errors and errors[0].get("message"):
        message = errors[0]["message"]
    else:
        message = f"Offers request failed ({status_code})"
    raise UpstreamError(message, status_code=status_code, payload=payload)


def _build_products(definitions: Iterable[dict[str, Any]]) -> List[StayProduct]:
    return [
        StayProduct(
            product_code=definition.get("inventoryTypeCode"),
            product_name=definition["inventoryTypeName"],
            product_description=_clean_text(definition.get("description")),
            product_is_premium=definition.get("isPremium"),
        )
        for definition in definitions
        if "inventoryTypeName" in definition and definition.get("isAvailable")
    ]


def _build_rate_plans(definitions: Iterable[dict[str, Any]]) -> List[StayRatePlan]:
    rate_plans: List[StayRatePlan] = []
    for definition in definitions:
        if "additionalDescriptions" not in definition:
            continue
        descriptions: Dict[str, Any] = definition.get("additionalDescriptions") or {}
        rate_plans.append(
            StayRatePlan(
                rate_code=definition.get("code"),
                rate_name=descriptions.get("longRateName"),
                rate_description=descriptions.get("longRateDesc"),
            )
        )
    return rate_plans


def _reward_options(reward_nights: dict[str, Any]) -> List[PointsOption]:
    points_only: Dict[str, Any] = reward_nights.get("pointsOnly") or {}
    points_cash: Dict[str, Any] = reward_nights.get("pointsCash") or {}
    options: List[PointsOption] = []
    if points_only.get("averageDailyPoints") is not None:
        options.append(PointsOption(points=points_only["averageDailyPoints"], cash_price=0))
    for option in points_cash.get("options") or []:
        options.append(
            PointsOption(
                points=option.get("averageDailyPoints"),
                cash_price=_to_number(option.get("averageDailyCash")),
            )
        )
    return options


def _build_stay_price(offer: dict[str, Any]) -> Optional[StayPrice]:
    product_use = _first(offer.get("productUses"))
    if "rewardNights" in offer:
        return StayPrice(
            product_code=product_use.get("inventoryTypeCode"),
            rate_code=offer.get("ratePlanCode"),
            cash_price=None,
            points=_reward_options(offer.get("rewardNights") or {}),
        )
    rates: Dict[str, Any] = product_use.get("rates") or {}
    total_rate: Dict[str, Any] = rates.get("totalRate") or {}
    average: Dict[str, Any] = total_rate.get("average") or {}
    cash_price = _to_float(average.get("amountAfterTax"))
    if cash_price is None:
        return None
    return StayPrice(
        product_code=product_use.get("inventoryTypeCode"),
        rate_code=offer.get("ratePlanCode"),
        cash_price=cash_price,
        points=None,
    )


def _stay_price_sort_key(price: StayPrice) -> Tuple[bool, float, float]:
    # Cash offers first, cheapest first; reward offers after them, fewest points first.
    if price.cash_price is not None:
        return (False, price.cash_price, 0.0)
    points = [option.points for option in price.points or [] if option.points is not None]
    return (True, 0.0, float(min(points)) if points else float("inf"))


def build_stay_offer(payload: dict[str, Any]) -> StayOffer:
    hotel = _first(payload.get("hotels") if isinstance(payload, dict) else None)
    if not hotel:
        raise UnknownOrInvalidHotelCodeError()

    rate_details: Dict[str, Any] = hotel.get("rateDetails") or {}
    # Cash offers without a usable amount are skipped.
    prices = [
        price
        for price in (_build_stay_price(offer) for offer in rate_details.get("offers") or [] if isinstance(offer, dict))
        if price is not None
    ]

    return StayOffer(
        products=_build_products(hotel.get("productDefinitions") or []),
        rate_plans=_build_rate_plans(hotel.get("ratePlanDefinitions") or []),
        currency=hotel.get("propertyCurrency"),
        prices=sorted(prices, key=_stay_price_sort_key),
    )


def build_area_prices(payload: dict[str, Any]) -> List[AreaPrice]:
    """Lowest one-night prices for every hotel in the area that still has rooms."""
    hotels = payload.get("hotels") if isinstance(payload, dict) else None
    records: List[AreaPrice] = []
    for hotel in hotels or []:
        if not isinstance(hotel, dict) or hotel.get("availabilityStatus") != OPEN_AVAILABILITY_STATUS:
            continue
        lowest_cash: Dict[str, Any] = hotel.get("lowestCashOnlyCost") or {}
        lowest_points: Dict[str, Any] = hotel.get("lowestPointsOnlyCost") or {}
        records.append(
            AreaPrice(
                hotel_code=hotel.get("hotelMnemonic"),
                cash_price=_to_float(lowest_cash.get("amountAfterTax")),
                currency_code=hotel.get("propertyCurrency"),
                points=lowest_points.get("points"),
            )
        )
    return records


# Destinations


def build_destinations(payload: Any) -> List[DestinationSuggestion]:
    if not isinstance(payload, list):
        raise UpstreamError("Unexpected destinations payload", payload=payload)
    return [
        DestinationSuggestion(
            coordinates=[_to_float(location.get("longitude")), _to_float(location.get("latitude"))],
            display=location.get("clarifiedLocation"),
        )
        for location in payload
        if isinstance(location, dict)
    ]
