#!/usr/bin/env python3
"""Fetch one AI-generated cause list and dump it as JSON, for quick smoke-testing of the API key."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from datetime import date

from causelist.clients import FetchError, GeminiCauseListClient
from causelist.config import Settings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("complex_name", help="Court complex name, e.g. 'Patiala House Courts'")
    parser.add_argument(
        "--date",
        dest="date",
        default=date.today().isoformat(),
        help="Cause list date (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--api-key",
        dest="api_key",
        default=None,
        help="Gemini API key. Defaults to API_KEY/.env",
    )
    parser.add_argument(
        "--model",
        dest="model",
        default=None,
        help="Override the model (default gemini-2.5-flash)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = Settings()
    api_key = args.api_key or settings.api_key
    if not api_key:
        print("ERROR: API key required via --api-key or API_KEY", file=sys.stderr)
        return 2

    with GeminiCauseListClient(
        api_key,
        base_url=settings.api_base_url,
        model=args.model or settings.model,
        timeout=settings.api_timeout,
        user_agent=settings.user_agent,
    ) as client:
        try:
            courts = client.fetch_docket(args.complex_name, args.date)
        except FetchError as exc:
            print(f"ERROR: {exc.message}", file=sys.stderr)
            return 1

    payload = {
        "complex": args.complex_name,
        "date": args.date,
        "courts": [asdict(court) for court in courts],
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
