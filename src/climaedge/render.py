# bundled html template and lambda@edge response envelope
# pure functions of an AggregateResult, no i/o

from __future__ import annotations
from html import escape
from typing import Iterable
from .models import FORECAST_UNAVAILABLE, AggregateResult, CityForecast, EdgeResponse

STYLESHEET_URL = "http://d170se51itnvn3.cloudfront.net/style.css"

RESPONSE_HEADERS = {
    # the page is personalised per viewer, caches must not share it
    "vary": [{"key": "Vary", "value": "*"}],
    "content-type": [{"key": "Content-Type", "value": "text/html; charset=utf-8"}],
}

PAGE_TEMPLATE = """<!DOCTYPE html>
<html style="width: 100%; text-align: center;">
    <head>
        <title>Clima Edge - Weather Forecasts</title>
        <link rel="stylesheet" media="screen" href="{stylesheet}">
    </head>
    <body>
        <h1>Clima Edge - Forecasts</h1>
        <table style="width: 100%">
          <thead>
            <tr>
              <th>City</th>
              <th>Forecast</th>
            </tr>
          </thead>

          <tbody>
            {rows}
          </tbody>
        </table>
        <div class="ad-container">
          {advertisement}
        </div>
        <div class="error">
          {error}
        </div>
        <footer>
            <p>Generate at an AWS location near {location}. Powered by Lambda@Edge.</p>
        </footer>
    </body>
</html>"""

ROW_TEMPLATE = """
          <tr>
            <td>{city}</td>
            <td>{forecast}</td>
          </tr>"""


def render_rows(forecasts: Iterable[CityForecast]) -> str:
    return "".join(
        ROW_TEMPLATE.format(city=escape(f.city), forecast=escape(f.forecast if f.available else FORECAST_UNAVAILABLE))
        for f in forecasts
    )


def render_page(result: AggregateResult, aws_location: str = "") -> str:
    return PAGE_TEMPLATE.format(
        stylesheet=STYLESHEET_URL,
        rows=render_rows(result.forecasts),
        advertisement=escape(result.advertisement),
        error=escape(result.error) if result.failed else "",
        location=escape(aws_location or ""),
    )


def render_response(
    result: AggregateResult,
    status: str,
    status_description: str,
    aws_location: str = "",
) -> EdgeResponse:
    return EdgeResponse(
        status=status,
        status_description=status_description,
        body=render_page(result, aws_location),
        headers={key: [dict(h) for h in values] for key, values in RESPONSE_HEADERS.items()},
    )
