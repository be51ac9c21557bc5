"""Service clients for the IHG APIs."""

from .ihg_client import TrippeClient

__all__ = [
    "TrippeClient",
]
