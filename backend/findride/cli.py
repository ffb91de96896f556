"""Command-line front end for the distance form.

Usage:
  findride distance "Cape Town" "Stellenbosch"
  findride distance - "Stellenbosch" --lat -33.92 --lng 18.42
  findride serve --port 8000

``distance`` talks to the proxy at FINDRIDE_API_BASE (default
http://localhost:8000) exactly as the browser form does.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

import httpx

from .client.form_controller import FormController, UiPhase, UiState
from .client.geolocation import StaticLocator
from .core.config import api_base
from .schemas.distance import Coordinates


SHARED_LOCATION = "-"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="findride",
        description="Driving distance and time between two places",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    dist = subparsers.add_parser("distance", help="Calculate a driving distance")
    dist.add_argument("origin", help=f"Start address, or '{SHARED_LOCATION}' to use --lat/--lng")
    dist.add_argument("destination", help="Destination address")
    dist.add_argument("--lat", type=float, default=None, help="Shared latitude")
    dist.add_argument("--lng", type=float, default=None, help="Shared longitude")
    dist.add_argument(
        "--api-base",
        default=None,
        help="Proxy base URL (default: FINDRIDE_API_BASE or http://localhost:8000)",
    )

    serve = subparsers.add_parser("serve", help="Run the distance proxy")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def _locator(args: argparse.Namespace) -> Optional[StaticLocator]:
    if args.lat is None and args.lng is None:
        return None
    if args.lat is None or args.lng is None:
        return StaticLocator(None)
    return StaticLocator(Coordinates(lat=args.lat, lng=args.lng))


async def resolve(args: argparse.Namespace) -> UiState:
    async with httpx.AsyncClient() as client:
        controller = FormController(
            client,
            locator=_locator(args),
            api_base_url=args.api_base or api_base(),
        )
        origin = args.origin
        if origin == SHARED_LOCATION:
            state = await controller.share_location()
            if state.phase is UiPhase.FAILED:
                return state
            lat, lng = controller.map_center.display()
            print(f"Latitude: {lat}")
            print(f"Longitude: {lng}")
            origin = None
        return await controller.submit(origin, args.destination)


def cmd_distance(args: argparse.Namespace) -> int:
    state = asyncio.run(resolve(args))
    if state.phase is UiPhase.SUCCESS and state.result is not None:
        print(f"Distance: {state.result.distance}")
        if state.result.duration:
            print(f"Duration: {state.result.duration}")
        return 0
    print(state.error or "Unable to calculate distance. Please try again.", file=sys.stderr)
    return 1


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("findride.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    if args.command == "distance":
        return cmd_distance(args)
    if args.command == "serve":
        return cmd_serve(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
