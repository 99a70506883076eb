#!/usr/bin/env python3
"""
Admin helper for a running shopfront server: issue the next discount code or dump stats.

Usage:
    python admin_cli.py generate [--base-url http://localhost:8080]
    python admin_cli.py stats    [--base-url http://localhost:8080]
"""
import argparse
import json
import os
import sys

import requests

DEFAULT_BASE_URL = os.getenv("SHOPFRONT_URL", "http://localhost:8080")
TIMEOUT = 5


def _error_message(resp: requests.Response) -> str:
    try:
        return resp.json().get("error") or resp.text
    except ValueError:
        return resp.text


def generate_discount(base_url: str) -> bool:
    """Asks the server for the next discount code and prints it."""
    try:
        resp = requests.post(f"{base_url.rstrip('/')}/api/admin/discounts/generate", timeout=TIMEOUT)
    except requests.RequestException as e:
        print(f"Request failed: {e}")
        return False

    if resp.status_code != 201:
        print(f"Could not generate a code ({resp.status_code}): {_error_message(resp)}")
        return False

    code = resp.json()
    print(f"Code: {code['code']} ({code['percentage']:g}% off, unlocked at order #{code['eligibleOrderNumber']})")
    return True


def show_stats(base_url: str) -> bool:
    try:
        resp = requests.get(f"{base_url.rstrip('/')}/api/admin/stats", timeout=TIMEOUT)
    except requests.RequestException as e:
        print(f"Request failed: {e}")
        return False

    if resp.status_code != 200:
        print(f"Could not fetch stats ({resp.status_code}): {_error_message(resp)}")
        return False

    print(json.dumps(resp.json(), indent=2))
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Shopfront admin helper")
    parser.add_argument("command", choices=["generate", "stats"])
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args(argv)

    if args.command == "generate":
        ok = generate_discount(args.base_url)
    else:
        ok = show_stats(args.base_url)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
