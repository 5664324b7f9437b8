# wires settings, the process-wide worker pool and both resolvers together,
# and turns one cloudfront viewer-request event into one response envelope

from __future__ import annotations
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Dict, List, Tuple
from urllib.parse import parse_qs
from .advertisements import AdvertisementResolver
from .client import EdgeHTTPClient
from .config import Settings
from .models import AggregateResult, EdgeResponse
from .render import render_response
from .service import ForecastAggregator, aggregate

logger = logging.getLogger(__name__)

COUNTRY_HEADER = "cloudfront-viewer-country"


class ViewerRequestError(ValueError):
    # the event is missing something the page cannot be built without
    pass


def parse_cities(querystring: str | None) -> List[str]:
    # ?cities=paris,tokyo -> ["paris", "tokyo"]; first value wins if repeated
    values = parse_qs(querystring or "").get("cities")
    if not values:
        return []
    return [city for city in values[0].split(",") if city]


def parse_viewer_request(event: Dict[str, Any]) -> Tuple[str, List[str]]:
    try:
        request = event["Records"][0]["cf"]["request"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ViewerRequestError("Event is not a CloudFront viewer request") from exc

    headers = request.get("headers") or {}
    try:
        country = headers[COUNTRY_HEADER][0]["value"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ViewerRequestError(f"Missing {COUNTRY_HEADER} header") from exc

    return country, parse_cities(request.get("querystring"))


class ClimaEdgeApp:
    # one per process; building it starts the advertisement prefetch
    def __init__(
        self,
        settings: Settings,
        client: EdgeHTTPClient | None = None,
        executor: Executor | None = None,
    ):
        self.settings = settings
        self.client = client or EdgeHTTPClient(
            timeout=settings.http_timeout,
            user_agent=settings.user_agent,
            pool_size=settings.max_workers,
        )
        self.executor = executor or ThreadPoolExecutor(
            max_workers=settings.max_workers, thread_name_prefix="clima-edge-fetch"
        )
        self.advertisements = AdvertisementResolver(self.client, settings.advertisements_uri, self.executor)
        self.forecasts = ForecastAggregator(self.client, settings.city_forecast_base_uri, self.executor)

    @classmethod
    def from_env(cls) -> "ClimaEdgeApp":
        return cls(Settings.from_env())

    def handle(self, event: Dict[str, Any]) -> EdgeResponse:
        # always returns something renderable for the viewer
        try:
            country, cities = parse_viewer_request(event)
            result = aggregate(self.advertisements, self.forecasts, country, cities)
        except ViewerRequestError as exc:
            logger.warning("Rejected viewer request: %s", exc)
            return self._render(AggregateResult(error=str(exc)), "400", "Bad Request")
        except Exception as exc:
            logger.exception("Failed to aggregate response")
            return self._render(AggregateResult(error=str(exc) or type(exc).__name__), "500", "Internal Server Error")

        return self._render(result, "200", "OK")

    def _render(self, result: AggregateResult, status: str, description: str) -> EdgeResponse:
        return render_response(result, status, description, aws_location=self.settings.aws_region)

    def close(self) -> None:
        self.executor.shutdown(wait=False)
