"""Exceptions raised by the IHG client."""
from __future__ import annotations

from typing import Any, Optional

UNKNOWN_HOTEL_CODE_MESSAGE = "Unknown or invalid hotelCode"
NO_AVAILABILITY_MESSAGE = "No availability for your search"


class TrippeError(Exception):
    """Base class for every error the client raises."""


class InvalidInputError(TrippeError, ValueError):
    """Raised before any request is sent when an argument is missing or malformed."""


class UnknownOrInvalidHotelCodeError(TrippeError):
    """Raised when the upstream API does not recognise the hotel code."""

    def __init__(self, message: str = UNKNOWN_HOTEL_CODE_MESSAGE) -> None:
        super().__init__(message)


class NoAvailabilityError(TrippeError):
    """Raised when a search executed upstream but nothing matched."""

    def __init__(self, message: str = NO_AVAILABILITY_MESSAGE) -> None:
        super().__init__(message)


class UpstreamError(TrippeError):
    """Raised for any other upstream failure; the upstream message is kept verbatim."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
