#!/usr/bin/env python3
"""
Basic usage examples for the Context.IO client library.

Reads CONTEXTIO_KEY and CONTEXTIO_SECRET from the environment and lists the
accounts visible to that key.
"""

import json
import logging
import os
import sys

from contextio import ContextIO, ContextIOError


def main():
    """Run basic usage examples."""
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    key = os.environ.get("CONTEXTIO_KEY")
    secret = os.environ.get("CONTEXTIO_SECRET")
    if not key or not secret:
        print("Set CONTEXTIO_KEY and CONTEXTIO_SECRET first.")
        return 1

    with ContextIO(key, secret, timeout=30) as client:
        # Inspect a signed request without sending it
        request = client.new_request("GET", "2.0/accounts", {"limit": "5"})
        print(f"URL: {request.url}")
        print(f"Authorization: {request.headers['Authorization'][:40]}...")

        try:
            accounts = json.loads(client.do_json("GET", "2.0/accounts", {"limit": "5"}))
        except ContextIOError as e:
            print(f"Request failed: {e}")
            return 1

        for account in accounts:
            print(f"  {account.get('id')}: {account.get('email_addresses')}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
