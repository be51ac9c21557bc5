from __future__ import annotations

import json
from datetime import date, timedelta
from typing import Any, Callable

import httpx
import pytest

from trippe import (
    InvalidInputError,
    NoAvailabilityError,
    TrippeClient,
    UnknownOrInvalidHotelCodeError,
    UpstreamError,
)
from trippe.config.settings import Settings


class _RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def _json_response(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return _handler


def _client(transport: httpx.MockTransport) -> TrippeClient:
    return TrippeClient("test-key", settings=Settings(api_key=None, _env_file=None), transport=transport)


def _unreachable(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must never run
    raise AssertionError(f"unexpected request to {request.url}")


def test_client_requires_api_key():
    with pytest.raises(InvalidInputError, match="apiKey is required"):
        TrippeClient(settings=Settings(api_key=None, _env_file=None))


def test_client_reads_api_key_from_settings():
    client = TrippeClient(settings=Settings(api_key="from-settings", _env_file=None))
    assert client._client.headers["x-ihg-api-key"] == "from-settings"


@pytest.mark.asyncio
async def test_get_hotel_details_sends_api_key_and_normalises():
    payload = {
        "hotelInfo": {
            "brandInfo": {"brandCode": "INDG"},
            "location": {"closestCity": "Antwerp"},
            "profile": {
                "name": "Antwerp - City Centre",
                "roomsIncludingSuitesCount": 100,
                "latLong": {"latitude": 51.218943, "longitude": 4.42057},
            },
            "address": {
                "street1": "Lange Gasthuisstraat 22",
                "zip": "2000",
                "city": "Antwerp",
                "state": {},
                "country": {"code": "BE"},
                "consumerFriendlyURL": "www.hotelindigo.com/antwerp",
            },
        }
    }
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        first = await client.get_hotel_details("ANRAW")
        second = await client.get_hotel_details("ANRAW")

    assert first.brand_name == "Hotel Indigo"
    assert first.to_dict() == second.to_dict()
    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/hotels/v1/profiles/ANRAW/details"
    assert request.url.params["fieldset"] == "brandInfo,location,profile,address"
    assert request.headers["x-ihg-api-key"] == "test-key"


@pytest.mark.asyncio
async def test_get_hotel_details_maps_http_errors_to_unknown_code():
    transport = _RecordingTransport(_json_response({"message": "not found"}, status_code=404))

    async with _client(transport) as client:
        with pytest.raises(UnknownOrInvalidHotelCodeError, match="Unknown or invalid hotelCode"):
            await client.get_hotel_details("X")


@pytest.mark.asyncio
async def test_transport_failures_become_upstream_errors():
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(httpx.MockTransport(_handler)) as client:
        with pytest.raises(UpstreamError) as excinfo:
            await client.get_destinations("Antwerp")
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_missing_required_arguments_fail_synchronously():
    transport = _RecordingTransport(_unreachable)
    client = _client(transport)

    with pytest.raises(InvalidInputError, match="hotelCode is required"):
        client.get_hotel_details("")
    with pytest.raises(InvalidInputError, match="hotelCode is required"):
        client.get_lowest_hotel_prices(None)
    with pytest.raises(InvalidInputError, match="hotelCode is required"):
        client.get_stay_prices("")
    with pytest.raises(InvalidInputError, match="coordinates"):
        client.get_lowest_area_prices(None)
    assert transport.requests == []


@pytest.mark.asyncio
async def test_get_lowest_hotel_prices_builds_windows_query():
    payload = {
        "hotels": [
            {
                "currencyCode": "EUR",
                "rates": [
                    {
                        "windows": [
                            {"startDate": "2024-01-01T00:00:00Z", "totalAmount": 0},
                            {"startDate": "2024-01-03T00:00:00Z", "totalAmount": 110, "totalPoints": 25000},
                        ]
                    }
                ],
            }
        ]
    }
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        calendar = await client.get_lowest_hotel_prices("anraw", start_date="2024-01-01", end_date="2024-01-03")

    params = transport.requests[0].url.params
    assert transport.requests[0].url.path == "/availability/v1/windows"
    assert params["hotelCodes"] == "ANRAW"
    assert params["rateCodes"] == "IVANI,IDMAP,IDME0,IDME2,IGCOR,IDVPD"
    assert params["startDate"] == "2024-01-01T00:00:00Z"
    assert params["endDate"] == "2024-01-03T00:00:00Z"
    assert params["lengthOfStay"] == "1"

    assert calendar.hotel_code == "anraw"
    assert calendar.currency_code == "EUR"
    assert [day.cash_price for day in calendar.prices] == [0, None, 110]
    assert [day.points for day in calendar.prices] == [None, None, 25000]


@pytest.mark.asyncio
async def test_get_lowest_hotel_prices_defaults_to_62_days():
    payload = {"hotels": [{"currencyCode": "USD", "rates": [{"windows": []}]}]}
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        calendar = await client.get_lowest_hotel_prices("ANRAW", start_date="2024-03-01")

    assert len(calendar.prices) == 62
    assert calendar.prices[-1].check_in_date == date(2024, 3, 1) + timedelta(days=61)


@pytest.mark.asyncio
async def test_get_lowest_hotel_prices_unknown_hotel_sentinel():
    payload = {"hotels": [{"currencyCode": "", "rates": []}]}
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        with pytest.raises(UnknownOrInvalidHotelCodeError):
            await client.get_lowest_hotel_prices("X", start_date="2024-01-01", end_date="2024-01-02")


def test_price_calendars_reject_ranges_over_the_ceiling_without_a_request():
    transport = _RecordingTransport(_unreachable)
    client = _client(transport)

    with pytest.raises(InvalidInputError, match="62 or less"):
        client.get_lowest_hotel_prices("ANRAW", start_date="2024-01-01", end_date="2024-03-03")
    with pytest.raises(InvalidInputError, match="60 or less"):
        client.get_hotel_prices("ANRAW", start_date="2023-01-01", end_date="2023-12-31")
    with pytest.raises(InvalidInputError, match="before startDate"):
        client.get_hotel_prices("ANRAW", start_date="2024-01-10", end_date="2024-01-01")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_get_hotel_prices_returns_flat_rows_for_60_days():
    payload = {"hotels": [{"currencyCode": "EUR", "rates": [{"windows": []}]}]}
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        rows = await client.get_hotel_prices("ANRAW", start_date="2024-01-01")

    assert len(rows) == 60
    assert rows[0].to_dict()["hotelId"] == "ANRAW"
    assert transport.requests[0].url.params["rateCodes"] == "IVANI,IDMAP,IDME0"


@pytest.mark.asyncio
async def test_get_stay_prices_posts_offer_request():
    payload = {
        "hotels": [
            {
                "propertyCurrency": "EUR",
                "productDefinitions": [
                    {"inventoryTypeCode": "KNGN", "inventoryTypeName": "King", "isAvailable": True}
                ],
                "ratePlanDefinitions": [],
                "rateDetails": {
                    "offers": [
                        {
                            "ratePlanCode": "IVANI",
                            "productUses": [
                                {
                                    "inventoryTypeCode": "KNGN",
                                    "rates": {"totalRate": {"average": {"amountAfterTax": "150.00"}}},
                                }
                            ],
                        }
                    ]
                },
            }
        ]
    }
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        offer = await client.get_stay_prices("ANRAW", check_in_date="2024-05-01", adults=2, children=1)

    request = transport.requests[0]
    body = json.loads(request.content)
    assert request.method == "POST"
    assert request.url.path == "/availability/v3/hotels/offers"
    assert request.url.params["fieldset"].startswith("rateDetails")
    assert body["hotelMnemonics"] == ["ANRAW"]
    assert body["startDate"] == "2024-05-01"
    assert body["endDate"] == "2024-05-02"
    assert body["products"][0]["guestCounts"] == [
        {"otaCode": "AQC10", "count": 2},
        {"otaCode": "AQC8", "count": 1},
    ]
    assert body["rates"] == {"ratePlanCodes": [{"internal": "IVANI"}]}
    assert offer.prices[0].cash_price == 150.0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("errors", "expected"),
    [
        ([{"code": "INVALID_HOTEL_MNEMONICS", "message": "bad"}], UnknownOrInvalidHotelCodeError),
        ([{"code": "CRS_50025", "message": "none"}], NoAvailabilityError),
        ([{"code": "CRS_12345", "message": "Something upstream"}], UpstreamError),
    ],
)
async def test_get_stay_prices_maps_structured_errors(errors, expected):
    transport = _RecordingTransport(_json_response({"errors": errors}, status_code=400))

    async with _client(transport) as client:
        with pytest.raises(expected):
            await client.get_stay_prices("X", check_in_date="2024-05-01")


def test_get_stay_prices_rejects_malformed_check_in():
    client = _client(_RecordingTransport(_unreachable))

    with pytest.raises(InvalidInputError, match="checkinDate"):
        client.get_stay_prices("ANRAW", check_in_date="22-11-19")


@pytest.mark.asyncio
async def test_get_lowest_area_prices_keeps_open_hotels():
    payload = {
        "hotels": [
            {
                "hotelMnemonic": "ANRAW",
                "availabilityStatus": "OPEN",
                "propertyCurrency": "EUR",
                "lowestCashOnlyCost": {"amountAfterTax": "120.00"},
                "lowestPointsOnlyCost": {"points": 30000},
            },
            {"hotelMnemonic": "ANRHI", "availabilityStatus": "CLOSED", "propertyCurrency": "EUR"},
        ]
    }
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        prices = await client.get_lowest_area_prices([4.39, 51.22], radius=10, unit="km", check_in_date="2024-05-01")

    body = json.loads(transport.requests[0].content)
    assert body["geoLocation"] == [{"longitude": 4.39, "latitude": 51.22}]
    assert body["distanceUnit"] == "KM"
    assert body["radius"] == 10
    assert body["startDate"] == "2024-05-01"
    assert body["endDate"] == "2024-05-02"
    assert [price.hotel_code for price in prices] == ["ANRAW"]


def test_get_area_prices_is_an_alias():
    assert TrippeClient.get_area_prices is TrippeClient.get_lowest_area_prices


@pytest.mark.parametrize(
    ("coordinates", "options", "message"),
    [
        ([], {}, "coordinates"),
        ([50.5], {}, "coordinates"),
        ([50.5, "50"], {}, "coordinates"),
        ([4.39, 51.22], {"check_in_date": "22-11-19"}, "checkinDate"),
        ([4.39, 51.22], {"unit": "furlongs"}, "distance unit"),
        ([4.39, 51.22], {"radius": 150}, "not be greater than 100"),
        ([4.39, 51.22], {"radius": float("nan")}, "radius"),
        ([float("nan"), 51.22], {}, "coordinates"),
        ([4.39, float("inf")], {}, "coordinates"),
    ],
)
def test_get_lowest_area_prices_validates_before_sending(coordinates, options, message):
    transport = _RecordingTransport(_unreachable)
    client = _client(transport)

    with pytest.raises(InvalidInputError, match=message):
        client.get_lowest_area_prices(coordinates, **options)
    assert transport.requests == []


@pytest.mark.asyncio
async def test_get_destinations_requires_three_characters():
    payload = [{"longitude": 4.40026, "latitude": 51.22213, "clarifiedLocation": "Antwerp, Belgium"}]
    transport = _RecordingTransport(_json_response(payload))

    async with _client(transport) as client:
        with pytest.raises(InvalidInputError, match="3 characters"):
            client.get_destinations("An")
        assert transport.requests == []

        destinations = await client.get_destinations("Ant")

    assert transport.requests[0].url.params["destination"] == "Ant"
    assert [destination.display for destination in destinations] == ["Antwerp, Belgium"]


def test_get_booking_page_url_uses_zero_based_months():
    client = _client(_RecordingTransport(_unreachable))

    url = client.get_booking_page_url(
        "ANRAW",
        check_in_date="2024-01-31",
        check_out_date="2024-02-02",
        adults=2,
    )

    assert url == (
        "https://www.ihg.com/hotels/us/en/find-hotels/select-roomrate"
        "?fromRedirect=true&qSrt=sBR&qSlH=ANRAW&qRms=1&qAdlt=2&qChld=0"
        "&qCiD=31&qCiMy=002024&qCoD=02&qCoMy=012024"
    )
