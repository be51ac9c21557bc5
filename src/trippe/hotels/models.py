"""Dataclasses for normalised hotel profiles, prices and destinations.

Attribute names are snake_case; ``to_dict`` produces the camelCase shape the
client documents as its public JSON output.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Union

Number = Union[int, float]


@dataclass(slots=True)
class HotelDescription:
    long: Optional[str] = None
    short: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {"long": self.long, "short": self.short}


@dataclass(slots=True)
class StateInfo:
    """State or province part of an address, for countries that use one."""

    code: str
    name: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "name": self.name}


@dataclass(slots=True)
class HotelProfile:
    """Basic descriptive information on a single property."""

    hotel_code: str
    hotel_name: Optional[str]
    brand_code: Optional[str]
    brand_name: Optional[str]
    description: HotelDescription
    number_of_rooms: Optional[int]
    closest_city: Optional[str]
    street: List[str]
    postal_code: Optional[str]
    city: Optional[str]
    state: Optional[StateInfo]
    country: Optional[str]
    coordinates: List[Optional[float]]
    url: Optional[str]

    def to_dict(self) -> dict[str, object]:
        return {
            "hotelCode": self.hotel_code,
            "hotelName": self.hotel_name,
            "brandCode": self.brand_code,
            "brandName": self.brand_name,
            "description": self.description.to_dict(),
            "numberOfRooms": self.number_of_rooms,
            "closestCity": self.closest_city,
            "street": list(self.street),
            "postalCode": self.postal_code,
            "city": self.city,
            "state": self.state.to_dict() if self.state else None,
            "country": self.country,
            "coordinates": list(self.coordinates),
            "url": self.url,
        }


@dataclass(slots=True)
class PriceCalendarDay:
    """Lowest one-night prices for a single check-in date.

    ``None`` means no matching rate was offered; ``0`` is a real zero-cost rate.
    """

    check_in_date: date
    cash_price: Optional[Number]
    points: Optional[int]

    def to_dict(self) -> dict[str, object]:
        return {
            "checkinDate": self.check_in_date.isoformat(),
            "cashPrice": self.cash_price,
            "points": self.points,
        }


@dataclass(slots=True)
class HotelPriceCalendar:
    """Per-night lowest prices for one hotel over a date range."""

    hotel_code: str
    currency_code: str
    prices: List[PriceCalendarDay] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "hotelCode": self.hotel_code,
            "currencyCode": self.currency_code,
            "prices": [day.to_dict() for day in self.prices],
        }


@dataclass(slots=True)
class HotelNightPrice:
    """Flat per-night price row returned by the legacy calendar call."""

    hotel_code: str
    check_in_date: date
    cash_price: Optional[Number]
    currency_code: str
    points: Optional[int]

    def to_dict(self) -> dict[str, object]:
        return {
            "hotelId": self.hotel_code,
            "checkinDate": self.check_in_date.isoformat(),
            "cashPrice": self.cash_price,
            "currencyCode": self.currency_code,
            "points": self.points,
        }


@dataclass(slots=True)
class StayProduct:
    product_code: str
    product_name: str
    product_description: Optional[str]
    product_is_premium: Optional[bool]

    def to_dict(self) -> dict[str, object]:
        return {
            "productCode": self.product_code,
            "productName": self.product_name,
            "productDescription": self.product_description,
            "productIsPremium": self.product_is_premium,
        }


@dataclass(slots=True)
class StayRatePlan:
    rate_code: str
    rate_name: Optional[str]
    rate_description: Optional[str]

    def to_dict(self) -> dict[str, object]:
        return {
            "rateCode": self.rate_code,
            "rateName": self.rate_name,
            "rateDescription": self.rate_description,
        }


@dataclass(slots=True)
class PointsOption:
    """One way of paying for a reward night: points, optionally topped up with cash."""

    points: Optional[int]
    cash_price: Optional[Number]

    def to_dict(self) -> dict[str, object]:
        return {"points": self.points, "cashPrice": self.cash_price}


@dataclass(slots=True)
class StayPrice:
    """Price of a product booked under a rate plan.

    Cash offers carry ``cash_price`` and no ``points``; reward-night offers carry
    ``points`` (points-only option first, when offered) and no ``cash_price``.
    """

    product_code: Optional[str]
    rate_code: Optional[str]
    cash_price: Optional[float]
    points: Optional[List[PointsOption]] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "productCode": self.product_code,
            "rateCode": self.rate_code,
            "cashPrice": self.cash_price,
            "points": [option.to_dict() for option in self.points] if self.points is not None else None,
        }


@dataclass(slots=True)
class StayOffer:
    """Products, rate plans and prices available for one stay at one hotel."""

    products: List[StayProduct] = field(default_factory=list)
    rate_plans: List[StayRatePlan] = field(default_factory=list)
    currency: Optional[str] = None
    prices: List[StayPrice] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "products": [product.to_dict() for product in self.products],
            "ratePlans": [rate_plan.to_dict() for rate_plan in self.rate_plans],
            "currency": self.currency,
            "prices": [price.to_dict() for price in self.prices],
        }


@dataclass(slots=True)
class AreaPrice:
    """Lowest one-night prices for a hotel found in an area search."""

    hotel_code: str
    cash_price: Optional[float]
    currency_code: Optional[str]
    points: Optional[int]

    def to_dict(self) -> dict[str, object]:
        return {
            "hotelCode": self.hotel_code,
            "cashPrice": self.cash_price,
            "currencyCode": self.currency_code,
            "points": self.points,
        }


@dataclass(slots=True)
class DestinationSuggestion:
    coordinates: List[Optional[float]]
    display: Optional[str]

    def to_dict(self) -> dict[str, object]:
        return {"coordinates": list(self.coordinates), "display": self.display}
