"""Start the API (or use a running one) and print resolved site images."""

import argparse
import json

import requests

from e2e_helpers import add_server_args, start_server, wait_for_overrides, wait_for_server


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Inspect resolved site images and their responsive variants."
    )
    add_server_args(parser)
    parser.add_argument("--asset-id", default="hero-bg", help="Asset id to inspect")
    parser.add_argument(
        "--policy",
        choices=["deferred", "static_first"],
        default="deferred",
        help="Loading policy to request",
    )
    args = parser.parse_args()

    server_process = None
    if not args.no_server:
        server_process = start_server(args)
    else:
        wait_for_server(args.api, args.server_timeout)

    try:
        health = wait_for_overrides(args.api, args.server_timeout)
        asset_resp = requests.get(
            f"{args.api}/api/v1/site-assets/{args.asset_id}",
            params={"policy": args.policy},
            timeout=30,
        )
        asset_resp.raise_for_status()
        asset = asset_resp.json()

        responsive = None
        if asset.get("url"):
            responsive_resp = requests.get(
                f"{args.api}/api/v1/images/responsive",
                params={"url": asset["url"]},
                timeout=30,
            )
            responsive_resp.raise_for_status()
            responsive = responsive_resp.json()

        print(json.dumps({"health": health, "asset": asset, "responsive": responsive}, indent=2))
    finally:
        if server_process:
            server_process.terminate()
            server_process.wait(timeout=10)


if __name__ == "__main__":
    main()
