"""
Point a net destination at the current public (WAN) IP address.

Useful when the ISP hands out dynamic addresses and firewall policies on the
controller refer to the WAN address through a net destination. The script:

1. looks up the current public IP (ipinfo.io),
2. reads the net destination with a filtered Get,
3. if it is outdated, replaces the host entry with a Set request,
4. saves the configuration with ``write_memory``.

Usage:
    ARUBAOS_HOST=10.1.1.1 ARUBAOS_USERNAME=admin ARUBAOS_PASSWORD=... \
        python scripts/update_netdst_with_wan_ip.py --netdst wan-ip
"""

from __future__ import annotations

import argparse
import asyncio

import httpx

from arubaos_api import (
    ArubaOsApiClient,
    ArubaOsApiError,
    ClientConfig,
    FilterOperator,
    GetModifiers,
    filter_condition,
)

PUBLIC_IP_URL = "http://ipinfo.io/json"


async def get_public_ip() -> str:
    """Return the public IP address this host is seen from."""
    async with httpx.AsyncClient() as http:
        response = await http.get(PUBLIC_IP_URL)
        response.raise_for_status()
        return str(response.json()["ip"])


async def update_netdst(config: ClientConfig, netdst_name: str) -> None:
    """Update ``netdst_name`` to the public IP if it differs."""
    public_ip = await get_public_ip()
    print(f'Current public IP is "{public_ip}".')

    async with ArubaOsApiClient(config) as client:
        await client.login()
        try:
            response = await client.api_request(
                "object",
                "netdst",
                get_modifiers=GetModifiers(
                    filter=[filter_condition("netdst.dstname", FilterOperator.EQ, [netdst_name])]
                ),
            )
            controller_ip = response["_data"]["netdst"][0]["netdst__entry"][0]["address"]

            if controller_ip == public_ip:
                print(f'Net destination "{netdst_name}" is up-to-date, "{public_ip}".')
                return

            print(
                f'Net destination "{netdst_name}" is outdated. '
                f'Updating from "{controller_ip}" to "{public_ip}".'
            )
            await client.api_request(
                "object",
                "netdst",
                payload={
                    "dstname": netdst_name,
                    "netdst__entry": [
                        {
                            "address": controller_ip,
                            "hosttag": "address",
                            "_action": "delete",
                            "_objname": "netdst__host",
                        },
                        {
                            "address": public_ip,
                            "hosttag": "address",
                            "_action": "add",
                            "_objname": "netdst__host",
                        },
                    ],
                },
            )

            # The change only takes effect once written to memory
            await client.api_request("object", "write_memory", payload={})
            print("Configuration saved.")
        finally:
            await client.logout()


def main() -> int:
    parser = argparse.ArgumentParser(description="Sync a net destination with the WAN IP.")
    parser.add_argument("--netdst", required=True, help="Name of the net destination to update.")
    args = parser.parse_args()

    try:
        asyncio.run(update_netdst(ClientConfig.from_env(), args.netdst))
    except (ArubaOsApiError, httpx.HTTPError, ValueError, KeyError, IndexError) as e:
        print(e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
