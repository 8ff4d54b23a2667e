#!/usr/bin/env python3
"""
Reset a running installation between exhibition sessions.

Usage:
    python scripts/reset_installation.py [--url http://localhost:3000]
"""
import argparse
import sys

import httpx

from app.platform.config import get_settings


def reset_installation(base_url: str) -> dict:
    response = httpx.post(f"{base_url.rstrip('/')}{get_settings().API_V1_PREFIX}/reset", timeout=10)
    response.raise_for_status()
    return response.json()["data"]


def main() -> int:
    parser = argparse.ArgumentParser(description="Clear all phones and scan events")
    parser.add_argument("--url", default=f"http://localhost:{get_settings().PORT}", help="Server base URL")
    args = parser.parse_args()

    try:
        data = reset_installation(args.url)
    except httpx.HTTPError as e:
        print(f"❌ Reset failed: {e}")
        return 1

    print(f"✅ Installation reset: {data['phonesCleared']} phones, {data['eventsCleared']} events cleared")
    return 0


if __name__ == "__main__":
    sys.exit(main())
