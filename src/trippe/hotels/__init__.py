"""Hotel domain models and normalization helpers."""

from .booking import build_booking_page_url
from .brands import BRAND_NAMES, brand_name
from .models import (
    AreaPrice,
    DestinationSuggestion,
    HotelDescription,
    HotelNightPrice,
    HotelPriceCalendar,
    HotelProfile,
    PointsOption,
    PriceCalendarDay,
    StateInfo,
    StayOffer,
    StayPrice,
    StayProduct,
    StayRatePlan,
)
from .normalizer import (
    build_area_prices,
    build_destinations,
    build_hotel_profile,
    build_night_prices,
    build_price_calendar,
    build_stay_offer,
    raise_for_offer_errors,
)

__all__ = [
    "AreaPrice",
    "BRAND_NAMES",
    "DestinationSuggestion",
    "HotelDescription",
    "HotelNightPrice",
    "HotelPriceCalendar",
    "HotelProfile",
    "PointsOption",
    "PriceCalendarDay",
    "StateInfo",
    "StayOffer",
    "StayPrice",
    "StayProduct",
    "StayRatePlan",
    "brand_name",
    "build_area_prices",
    "build_booking_page_url",
    "build_destinations",
    "build_hotel_profile",
    "build_night_prices",
    "build_price_calendar",
    "build_stay_offer",
    "raise_for_offer_errors",
]
