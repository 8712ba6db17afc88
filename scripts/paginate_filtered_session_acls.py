"""
Page through the session ACLs of a controller with a filter applied.

Shows how GET modifiers combine filtering with pagination: ACLs whose name
contains ``-acl`` are skipped, only the ACL name is returned, and results
are fetched a few at a time. The running total reported by the controller
is passed back on each page.

Usage:
    ARUBAOS_HOST=10.1.1.1 ARUBAOS_USERNAME=admin ARUBAOS_PASSWORD=... \
        python scripts/paginate_filtered_session_acls.py --page-size 5
"""

from __future__ import annotations

import argparse
import asyncio
import json

from arubaos_api import (
    ArubaOsApiClient,
    ArubaOsApiError,
    ClientConfig,
    FilterOperator,
    GetModifiers,
    Paginate,
    filter_condition,
)

ACL_FILTER = [
    filter_condition("acl_sess.accname", FilterOperator.NIN, ["-acl"]),
    filter_condition("OBJECT", FilterOperator.EQ, ["acl_sess.accname"]),
]


async def print_acls(config: ClientConfig, page_size: int) -> None:
    """Print every matching ACL, one page at a time."""
    async with ArubaOsApiClient(config) as client:
        await client.login()
        try:
            total_count = 0
            offset = 1  # the controller counts from 1

            while True:
                response = await client.api_request(
                    "object",
                    "acl_sess",
                    get_modifiers=GetModifiers(
                        filter=ACL_FILTER,
                        paginate=Paginate(limit=page_size, offset=offset, total=total_count),
                    ),
                )

                # The total may change while we iterate, so refresh it per page
                page = response["_data"]["acl_sess"]
                total_count = response["_count"]["acl_sess"]

                print(
                    f"Page {offset}-{offset + len(page) - 1} of {total_count} results: "
                    + json.dumps(page, indent=2)
                )

                if not page or offset >= total_count:
                    return
                offset += len(page)
        finally:
            await client.logout()


def main() -> int:
    parser = argparse.ArgumentParser(description="List filtered session ACLs page by page.")
    parser.add_argument("--page-size", type=int, default=5, help="ACLs per page (default: 5).")
    args = parser.parse_args()

    try:
        asyncio.run(print_acls(ClientConfig.from_env(), args.page_size))
    except (ArubaOsApiError, ValueError, KeyError) as e:
        print(e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
