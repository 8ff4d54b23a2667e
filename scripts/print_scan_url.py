#!/usr/bin/env python3
"""
Print the URL the installation's QR code should point to, and the QR code.

Uses the same resolution order as GET /api/v1/server-url, so it works
without the server running.

Usage:
    python scripts/print_scan_url.py
    python scripts/print_scan_url.py --output qr-scan.svg
"""
import argparse
from pathlib import Path

from app.features.installation.services.qr_code import render_ascii, save_svg
from app.features.installation.services.server_url import resolve_server_url
from app.platform.config import get_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the installation's scan URL as a QR code")
    parser.add_argument("--output", type=Path, help="Also save the QR code as an SVG file")
    args = parser.parse_args()

    server_url = resolve_server_url(get_settings())
    print(f"🔗 URL to scan ({server_url.type}): {server_url.scan_url}")
    print("")
    print(render_ascii(server_url.scan_url))

    if args.output:
        save_svg(server_url.scan_url, args.output)
        print(f"✅ QR saved to {args.output}")


if __name__ == "__main__":
    main()
