# local entry point: builds the same viewer-request event cloudfront would send
# and prints the generated page (or the whole envelope with --json)

from __future__ import annotations
import argparse
import json
import logging
import sys
from urllib.parse import urlencode
from typing import Any, Dict, List
from .app import COUNTRY_HEADER, ClimaEdgeApp
from .config import Settings


def build_event(country: str, cities: str = "") -> Dict[str, Any]:
    querystring = urlencode({"cities": cities}) if cities else ""
    request = {
        "uri": "/",
        "method": "GET",
        "querystring": querystring,
        "headers": {COUNTRY_HEADER: [{"key": "CloudFront-Viewer-Country", "value": country}]},
    }
    return {"Records": [{"cf": {"request": request}}]}


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="clima-edge", description="Render the Clima Edge forecast page locally.")
    parser.add_argument("--country", required=True, help="viewer country code, e.g. US")
    parser.add_argument("--cities", default="", help="comma separated city ids, e.g. paris,tokyo")
    parser.add_argument("--json", action="store_true", help="print the full response envelope as JSON")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    app = ClimaEdgeApp(settings)
    try:
        response = app.handle(build_event(args.country, args.cities))
    finally:
        app.close()

    if args.json:
        print(json.dumps(response.to_dict(), indent=2))
    else:
        print(response.body)
    return 0 if response.status == "200" else 1


if __name__ == "__main__":
    sys.exit(main())
