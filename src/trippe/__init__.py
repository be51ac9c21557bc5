"""Client for IHG hotel profiles, price calendars, stay offers and destinations."""

__version__ = "0.1.0"

from .errors import (  # noqa: E402
    InvalidInputError,
    NoAvailabilityError,
    TrippeError,
    UnknownOrInvalidHotelCodeError,
    UpstreamError,
)
from .services import TrippeClient  # noqa: E402

__all__ = [
    "InvalidInputError",
    "NoAvailabilityError",
    "TrippeClient",
    "TrippeError",
    "UnknownOrInvalidHotelCodeError",
    "UpstreamError",
    "__version__",
]
