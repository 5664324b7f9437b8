# orchestration and business rules
# city forecasts fan out on the shared ThreadPoolExecutor, one task per city,
# and are gathered back in request order; the advertisement resolves on the calling thread meanwhile

from __future__ import annotations
import logging
from concurrent.futures import Executor, Future
from typing import List, Sequence
from urllib.parse import quote
from .advertisements import AdvertisementResolver
from .client import EdgeFetchError, EdgeHTTPClient
from .models import FORECAST_UNAVAILABLE, AggregateResult, CityForecast

logger = logging.getLogger(__name__)


def forecast_url(base_uri: str, city: str) -> str:
    # city ids are opaque, keep each one inside a single path segment
    return base_uri + quote(city, safe="")


# single city path: fetch -> wrap, a failure only ever affects this city's row
def fetch_city_forecast(client: EdgeHTTPClient, base_uri: str, city: str) -> CityForecast:
    try:
        forecast = client.get_text(forecast_url(base_uri, city))
    except EdgeFetchError as exc:
        logger.info("Forecast unavailable for %r: %s", city, exc)
        return CityForecast(city=city, forecast=FORECAST_UNAVAILABLE)
    return CityForecast(city=city, forecast=forecast)


class ForecastAggregator:
    def __init__(self, client: EdgeHTTPClient, base_uri: str, executor: Executor):
        self._client = client
        self._base_uri = base_uri
        self._executor = executor

    def start(self, cities: Sequence[str]) -> List[Future]:
        # submit only, so the caller can overlap other work with the fetches
        return [
            self._executor.submit(fetch_city_forecast, self._client, self._base_uri, city)
            for city in cities
        ]

    def gather(self, pending: Sequence[Future]) -> List[CityForecast]:
        # index order, not completion order
        return [fut.result() for fut in pending]

    def resolve_forecasts(self, cities: Sequence[str]) -> List[CityForecast]:
        if not cities:
            return []
        return self.gather(self.start(cities))


# join both halves of a request; neither half raises for sub-fetch failures
def aggregate(
    resolver: AdvertisementResolver,
    aggregator: ForecastAggregator,
    country: str,
    cities: Sequence[str],
) -> AggregateResult:
    pending = aggregator.start(cities)
    advertisement = resolver.resolve(country)
    forecasts = aggregator.gather(pending)
    return AggregateResult(advertisement=advertisement, forecasts=tuple(forecasts))
