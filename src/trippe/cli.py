"""Command line access to the IHG client; prints normalised records as JSON."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Optional, Sequence

from trippe.config.settings import Settings
from trippe.core.logging import configure_logging
from trippe.errors import TrippeError
from trippe.services import TrippeClient

logger = logging.getLogger(__name__)


def _serialise(result: Any) -> Any:
    if isinstance(result, list):
        return [_serialise(item) for item in result]
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return result


def _add_stay_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--checkin", help="Check-in date (YYYY-MM-DD), defaults to today")
    parser.add_argument("--checkout", help="Check-out date (YYYY-MM-DD), defaults to the next day")
    parser.add_argument("--adults", type=int, default=1)
    parser.add_argument("--children", type=int, default=0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trippe", description="Query IHG hotel availability and prices")
    parser.add_argument("--api-key", help="IHG API key (defaults to TRIPPE_API_KEY)")
    parser.add_argument("--log-level", help="Logging level (defaults to TRIPPE_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    details = subparsers.add_parser("details", help="Hotel profile")
    details.add_argument("hotel_code")

    for name, help_text in (
        ("calendar", "Lowest cash/points price per night, up to 62 days"),
        ("legacy-calendar", "Flat per-night prices, up to 60 days"),
    ):
        calendar = subparsers.add_parser(name, help=help_text)
        calendar.add_argument("hotel_code")
        calendar.add_argument("--start", help="First check-in date (YYYY-MM-DD)")
        calendar.add_argument("--end", help="Last check-in date (YYYY-MM-DD)")

    stay = subparsers.add_parser("stay", help="Products, rate plans and prices for one stay")
    stay.add_argument("hotel_code")
    _add_stay_arguments(stay)

    area = subparsers.add_parser("area", help="Lowest prices for hotels around a point")
    area.add_argument("longitude", type=float)
    area.add_argument("latitude", type=float)
    area.add_argument("--radius", type=float, default=100)
    area.add_argument("--unit", default="mi", help="mi or km")
    area.add_argument("--checkin", help="Check-in date (YYYY-MM-DD), defaults to today")
    area.add_argument("--adults", type=int, default=1)
    area.add_argument("--children", type=int, default=0)

    destinations = subparsers.add_parser("destinations", help="Autocomplete a destination")
    destinations.add_argument("query")

    booking = subparsers.add_parser("booking-url", help="Booking page link for a stay")
    booking.add_argument("hotel_code")
    _add_stay_arguments(booking)

    return parser


async def _run(client: TrippeClient, args: argparse.Namespace) -> Any:
    async with client:
        if args.command == "details":
            return await client.get_hotel_details(args.hotel_code)
        if args.command == "calendar":
            return await client.get_lowest_hotel_prices(args.hotel_code, start_date=args.start, end_date=args.end)
        if args.command == "legacy-calendar":
            return await client.get_hotel_prices(args.hotel_code, start_date=args.start, end_date=args.end)
        if args.command == "stay":
            return await client.get_stay_prices(
                args.hotel_code,
                check_in_date=args.checkin,
                check_out_date=args.checkout,
                adults=args.adults,
                children=args.children,
            )
        if args.command == "area":
            return await client.get_lowest_area_prices(
                [args.longitude, args.latitude],
                radius=args.radius,
                unit=args.unit,
                check_in_date=args.checkin,
                adults=args.adults,
                children=args.children,
            )
        if args.command == "destinations":
            return await client.get_destinations(args.query)
        if args.command == "booking-url":
            return client.get_booking_page_url(
                args.hotel_code,
                check_in_date=args.checkin,
                check_out_date=args.checkout,
                adults=args.adults,
                children=args.children,
            )
    raise ValueError(f"Unknown command {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(args.log_level or settings.log_level, settings.log_dir)

    try:
        client = TrippeClient(args.api_key, settings=settings)
        result = asyncio.run(_run(client, args))
    except TrippeError as exc:
        logger.error("%s", exc)
        return 1

    print(json.dumps(_serialise(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
