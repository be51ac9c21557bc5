"""Utilities for building IHG availability query strings and request bodies."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List

# Upstream expects date-times; every query is for a local calendar day.
MIDNIGHT_UTC_SUFFIX = "T00:00:00Z"

ADULT_OTA_CODE = "AQC10"
CHILD_OTA_CODE = "AQC8"
STANDARD_ROOM_PRODUCT = "SR"


def _guest_counts(adults: int, children: int) -> List[dict]:
    return [
        {"otaCode": ADULT_OTA_CODE, "count": adults},
        {"otaCode": CHILD_OTA_CODE, "count": children},
    ]


def _rate_plan_codes(codes: List[str]) -> dict:
    return {"ratePlanCodes": [{"internal": code} for code in codes]}


@dataclass
class WindowsQuery:
    """One-night availability windows for a single hotel over a date range."""

    hotel_code: str
    start_date: date
    end_date: date
    rate_codes: List[str]

    def to_params(self) -> dict[str, str]:
        return {
            "hotelCodes": self.hotel_code.upper(),
            "rateCodes": ",".join(self.rate_codes),
            "startDate": f"{self.start_date.isoformat()}{MIDNIGHT_UTC_SUFFIX}",
            "endDate": f"{self.end_date.isoformat()}{MIDNIGHT_UTC_SUFFIX}",
            "lengthOfStay": "1",
            "numberOfRooms": "1",
            "includeSellStrategy": "never",
        }


@dataclass
class StayOffersQuery:
    hotel_code: str
    check_in: date
    check_out: date
    adults: int = 1
    children: int = 0
    rate_plan_codes: List[str] = field(default_factory=lambda: ["IVANI"])

    def to_payload(self) -> dict:
        check_in = self.check_in.isoformat()
        check_out = self.check_out.isoformat()
        return {
            "products": [
                {
                    "productCode": STANDARD_ROOM_PRODUCT,
                    "guestCounts": _guest_counts(self.adults, self.children),
                    "startDate": check_in,
                    "endDate": check_out,
                    "quantity": 1,
                }
            ],
            "startDate": check_in,
            "endDate": check_out,
            "hotelMnemonics": [self.hotel_code],
            "rates": _rate_plan_codes(self.rate_plan_codes),
            "options": {
                "disabilityMode": "ACCESSIBLE_AND_NON_ACCESSIBLE",
                "returnAdditionalRatePlanDescriptions": True,
            },
        }


@dataclass
class AreaOffersQuery:
    """Straight-line radius search around a ``[longitude, latitude]`` point for one night."""

    longitude: float
    latitude: float
    check_in: date
    check_out: date
    radius: float = 100
    distance_unit: str = "MI"
    adults: int = 1
    children: int = 0
    rate_plan_codes: List[str] = field(default_factory=lambda: ["IVANI"])

    def to_payload(self) -> dict:
        return {
            "products": [
                {
                    "productCode": STANDARD_ROOM_PRODUCT,
                    "guestCounts": _guest_counts(self.adults, self.children),
                    "quantity": 1,
                }
            ],
            "radius": self.radius,
            "distanceUnit": self.distance_unit,
            "distanceType": "STRAIGHT_LINE",
            "startDate": self.check_in.isoformat(),
            "endDate": self.check_out.isoformat(),
            "geoLocation": [{"longitude": self.longitude, "latitude": self.latitude}],
            "rates": _rate_plan_codes(self.rate_plan_codes),
        }
