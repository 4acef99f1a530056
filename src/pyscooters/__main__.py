"""Command line entry point.

``python -m pyscooters serve`` runs the HTTP endpoint;
``python -m pyscooters query`` runs one aggregation and prints JSON.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from pydantic import ValidationError

from pyscooters.client import ScooterClient
from pyscooters.config import ScooterConfig
from pyscooters.exceptions import ScooterError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pyscooters", description="Find nearby shared scooters and bikes.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP query endpoint")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    query = sub.add_parser("query", help="Run one query and print the result as JSON")
    query.add_argument("--lat", type=float, default=None)
    query.add_argument("--lng", type=float, default=None)
    query.add_argument("--radius", type=float, default=None)
    query.add_argument("--min-battery", type=int, default=0)
    query.add_argument("--provider", action="append", default=None, help="Provider id (repeatable)")
    query.add_argument("--dest-lat", type=float, default=None)
    query.add_argument("--dest-lng", type=float, default=None)
    query.add_argument("--corridor", type=float, default=None)
    query.add_argument("--diagnostics", action="store_true", help="Include per-provider fetch status")
    return parser


async def _run_query(config: ScooterConfig, args: argparse.Namespace) -> dict[str, Any]:
    destination = None
    if args.dest_lat is not None and args.dest_lng is not None:
        destination = (args.dest_lat, args.dest_lng)
    async with ScooterClient(config) as client:
        result = await client.nearby(
            config.default_lat if args.lat is None else args.lat,
            config.default_lng if args.lng is None else args.lng,
            radius=args.radius,
            min_battery=args.min_battery,
            providers=args.provider,
            destination=destination,
            corridor_width=args.corridor,
        )
    return result.to_payload(include_diagnostics=args.diagnostics)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    if getattr(args, "host", None) is not None:
        overrides["host"] = args.host
    if getattr(args, "port", None) is not None:
        overrides["port"] = args.port

    try:
        config = ScooterConfig.from_env(**overrides)
    except ScooterError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.command == "serve":
        from pyscooters.server import run

        run(config)
        return 0

    try:
        payload = asyncio.run(_run_query(config, args))
    except ValidationError as exc:
        print(f"Invalid query: {exc}", file=sys.stderr)
        return 2
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
