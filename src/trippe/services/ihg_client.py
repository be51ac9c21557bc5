"""Client for the IHG hotel profile, availability and location APIs.

Every network method validates its arguments *synchronously* and only then
returns a coroutine, so invalid input raises :class:`InvalidInputError` at call
time and no request is ever sent for it::

    async with TrippeClient(api_key) as client:
        calendar = await client.get_lowest_hotel_prices("ANRAW")

The client performs no retries, caching or throttling; each call issues at most
one request.
"""
from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from datetime import date
from typing import Any, Awaitable, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

from trippe.config.settings import Settings
from trippe.errors import InvalidInputError, UnknownOrInvalidHotelCodeError, UpstreamError
from trippe.hotels.booking import build_booking_page_url
from trippe.hotels.models import (
    AreaPrice,
    DestinationSuggestion,
    HotelNightPrice,
    HotelPriceCalendar,
    HotelProfile,
    StayOffer,
)
from trippe.hotels.normalizer import (
    build_area_prices,
    build_destinations,
    build_hotel_profile,
    build_night_prices,
    build_price_calendar,
    build_stay_offer,
    raise_for_offer_errors,
)
from trippe.queries import validation
from trippe.queries.search_payloads import AreaOffersQuery, StayOffersQuery, WindowsQuery

logger = logging.getLogger(__name__)

HOTEL_DETAILS_PATH = "/hotels/v1/profiles/{hotel_code}/details"
HOTEL_DETAILS_FIELDSET = "brandInfo,location,profile,address"
WINDOWS_PATH = "/availability/v1/windows"
OFFERS_PATH = "/availability/v3/hotels/offers"
STAY_OFFERS_FIELDSET = "rateDetails,rateDetails.policies,rateDetails.bonusRates,rateDetails.upsells"
AREA_OFFERS_FIELDSET = "summary,summary.rateRanges"
DESTINATIONS_PATH = "/locations/v1/destinations"

LOWEST_PRICES_MAX_DAYS = 62
LEGACY_PRICES_MAX_DAYS = 60


class TrippeClient(AbstractAsyncContextManager["TrippeClient"]):
    """Thin wrapper around the IHG REST endpoints returning normalised records."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.settings = settings or Settings()
        api_key = api_key or self.settings.api_key
        if not api_key:
            raise InvalidInputError("apiKey is required")

        default_headers = self.settings.default_headers()
        default_headers["x-ihg-api-key"] = api_key
        if headers:
            default_headers.update(headers)
        self._client = httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.timeout_s,
            headers=default_headers,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    # Hotel profile

    def get_hotel_details(self, hotel_code: str) -> Awaitable[HotelProfile]:
        """Basic information on a hotel: name, brand, address, coordinates and homepage."""
        hotel_code = validation.require_hotel_code(hotel_code)
        return self._fetch_hotel_details(hotel_code)

    async def _fetch_hotel_details(self, hotel_code: str) -> HotelProfile:
        logger.debug("Fetching hotel details for %s", hotel_code)
        path = HOTEL_DETAILS_PATH.format(hotel_code=quote(hotel_code, safe=""))
        try:
            response = await self._client.get(path, params={"fieldset": HOTEL_DETAILS_FIELDSET})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("Hotel details for %s returned %s", hotel_code, exc.response.status_code)
            raise UnknownOrInvalidHotelCodeError() from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Hotel details request failed: {exc}") from exc
        return build_hotel_profile(self._decode(response), hotel_code)

    # Price calendars

    def get_lowest_hotel_prices(
        self,
        hotel_code: str,
        *,
        start_date: Any = None,
        end_date: Any = None,
    ) -> Awaitable[HotelPriceCalendar]:
        """Lowest one-night cash and points prices per check-in day, for up to 62 days.

        ``end_date`` defaults to ``start_date`` + 61 days. Cash prices may exclude
        some taxes.
        """
        hotel_code = validation.require_hotel_code(hotel_code)
        dates = validation.date_range(
            start_date,
            end_date,
            default_days=LOWEST_PRICES_MAX_DAYS,
            max_days=LOWEST_PRICES_MAX_DAYS,
        )
        query = WindowsQuery(
            hotel_code=hotel_code,
            start_date=dates[0],
            end_date=dates[-1],
            rate_codes=validation.rate_codes(self.settings.calendar_rate_codes),
        )
        return self._fetch_price_calendar(query, dates)

    async def _fetch_price_calendar(self, query: WindowsQuery, dates: List[date]) -> HotelPriceCalendar:
        payload = await self._get_json(WINDOWS_PATH, params=query.to_params())
        return build_price_calendar(payload, query.hotel_code, dates)

    def get_hotel_prices(
        self,
        hotel_code: str,
        *,
        start_date: Any = None,
        end_date: Any = None,
    ) -> Awaitable[List[HotelNightPrice]]:
        """Legacy flat variant of :meth:`get_lowest_hotel_prices`, limited to 60 days."""
        hotel_code = validation.require_hotel_code(hotel_code)
        dates = validation.date_range(
            start_date,
            end_date,
            default_days=LEGACY_PRICES_MAX_DAYS,
            max_days=LEGACY_PRICES_MAX_DAYS,
        )
        query = WindowsQuery(
            hotel_code=hotel_code,
            start_date=dates[0],
            end_date=dates[-1],
            rate_codes=validation.rate_codes(self.settings.legacy_calendar_rate_codes),
        )
        return self._fetch_night_prices(query, dates)

    async def _fetch_night_prices(self, query: WindowsQuery, dates: List[date]) -> List[HotelNightPrice]:
        payload = await self._get_json(WINDOWS_PATH, params=query.to_params())
        return build_night_prices(payload, query.hotel_code, dates)

    # Offers

    def get_stay_prices(
        self,
        hotel_code: str,
        *,
        check_in_date: Any = None,
        check_out_date: Any = None,
        adults: int = 1,
        children: int = 0,
    ) -> Awaitable[StayOffer]:
        """Available products, rate plans and cash/points prices for one stay."""
        hotel_code = validation.require_hotel_code(hotel_code)
        check_in, check_out = validation.stay_dates(check_in_date, check_out_date)
        adults, children = validation.guest_counts(adults, children)
        query = StayOffersQuery(
            hotel_code=hotel_code,
            check_in=check_in,
            check_out=check_out,
            adults=adults,
            children=children,
            rate_plan_codes=validation.rate_codes(self.settings.stay_rate_plan_codes),
        )
        return self._fetch_stay_offer(query)

    async def _fetch_stay_offer(self, query: StayOffersQuery) -> StayOffer:
        logger.debug("Fetching stay offers for %s (%s to %s)", query.hotel_code, query.check_in, query.check_out)
        payload = await self._post_offers(STAY_OFFERS_FIELDSET, query.to_payload())
        return build_stay_offer(payload)

    def get_lowest_area_prices(
        self,
        coordinates: Sequence[float],
        *,
        radius: float = 100,
        unit: str = "mi",
        check_in_date: Any = None,
        adults: int = 1,
        children: int = 0,
    ) -> Awaitable[List[AreaPrice]]:
        """Lowest one-night prices for every open hotel within ``radius`` of ``[lng, lat]``."""
        longitude, latitude = validation.coordinates(coordinates)
        check_in, check_out = validation.stay_dates(check_in_date, None)
        distance_unit = validation.distance_unit(unit)
        radius = validation.radius(radius)
        adults, children = validation.guest_counts(adults, children)
        query = AreaOffersQuery(
            longitude=longitude,
            latitude=latitude,
            check_in=check_in,
            check_out=check_out,
            radius=radius,
            distance_unit=distance_unit,
            adults=adults,
            children=children,
            rate_plan_codes=validation.rate_codes(self.settings.stay_rate_plan_codes),
        )
        return self._fetch_area_prices(query)

    get_area_prices = get_lowest_area_prices

    async def _fetch_area_prices(self, query: AreaOffersQuery) -> List[AreaPrice]:
        logger.debug(
            "Fetching area prices around [%s, %s] within %s %s",
            query.longitude,
            query.latitude,
            query.radius,
            query.distance_unit,
        )
        payload = await self._post_offers(AREA_OFFERS_FIELDSET, query.to_payload())
        return build_area_prices(payload)

    # Locations

    def get_destinations(self, query: str) -> Awaitable[List[DestinationSuggestion]]:
        """Autocomplete ``query`` (at least 3 characters) into destinations with coordinates."""
        query = validation.destination_query(query)
        return self._fetch_destinations(query)

    async def _fetch_destinations(self, query: str) -> List[DestinationSuggestion]:
        payload = await self._get_json(DESTINATIONS_PATH, params={"destination": query})
        return build_destinations(payload)

    def get_booking_page_url(
        self,
        hotel_code: str,
        *,
        check_in_date: Any = None,
        check_out_date: Any = None,
        adults: int = 1,
        children: int = 0,
    ) -> str:
        """Link to the booking site's room and rate page for a stay. No request is made."""
        hotel_code = validation.require_hotel_code(hotel_code)
        check_in, check_out = validation.stay_dates(check_in_date, check_out_date)
        adults, children = validation.guest_counts(adults, children)
        return build_booking_page_url(
            hotel_code,
            check_in=check_in,
            check_out=check_out,
            adults=adults,
            children=children,
            base_url=self.settings.booking_base_url,
        )

    # Transport helpers

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Response from {response.request.url.path} is not JSON",
                status_code=response.status_code,
                payload=response.text[:512],
            ) from exc

    async def _get_json(self, path: str, *, params: Dict[str, str]) -> Any:
        logger.debug("GET %s params=%s", path, params)
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Request to {path} failed: {exc}") from exc
        if response.is_error:
            logger.warning("GET %s returned %s", path, response.status_code)
            raise UpstreamError(
                f"Request to {path} failed ({response.status_code}): {response.text[:512]}",
                status_code=response.status_code,
                payload=response.text[:512],
            )
        return self._decode(response)

    async def _post_offers(self, fieldset: str, body: dict[str, Any]) -> Any:
        logger.debug("POST %s fieldset=%s", OFFERS_PATH, fieldset)
        try:
            response = await self._client.post(OFFERS_PATH, params={"fieldset": fieldset}, json=body)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Offers request failed: {exc}") from exc
        if response.is_success:
            return self._decode(response)
        try:
            error_payload = response.json()
        except ValueError:
            error_payload = None
        logger.warning("Offers request returned %s", response.status_code)
        raise_for_offer_errors(response.status_code, error_payload)
