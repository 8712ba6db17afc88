"""
Dump every configuration object and container of a controller to JSON files.

The result describes the controller's API schema: which objects and
containers exist and what their responses look like.

Usage:
    ARUBAOS_HOST=10.1.1.1 ARUBAOS_USERNAME=admin ARUBAOS_PASSWORD=... \
        python scripts/list_all_objects_and_containers.py --output-dir ./schema

Connection settings are read from the environment (see arubaos_api.config).
"""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from arubaos_api import ArubaOsApiClient, ArubaOsApiError, ClientConfig, RequestType


async def dump_schema(config: ClientConfig, output_dir: Path) -> None:
    """Fetch all objects and containers and write one file for each."""
    output_dir.mkdir(parents=True, exist_ok=True)

    async with ArubaOsApiClient(config) as client:
        await client.login()
        try:
            for request_type, filename in (
                (RequestType.OBJECT, "allObjects.json"),
                (RequestType.CONTAINER, "allContainers.json"),
            ):
                response = await client.api_request(request_type)
                # Responses are huge, so they go to disk instead of stdout
                path = output_dir / filename
                path.write_text(json.dumps(response, indent=2), encoding="utf-8")
                print(f"Wrote {path}")
        finally:
            await client.logout()


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump all controller objects and containers.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for allObjects.json and allContainers.json (default: .).",
    )
    args = parser.parse_args()

    try:
        asyncio.run(dump_schema(ClientConfig.from_env(), args.output_dir))
    except (ArubaOsApiError, ValueError) as e:
        print(e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
