# value objects shared by the resolver, the aggregator and the renderer

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

# placeholder for a city whose forecast could not be fetched
FORECAST_UNAVAILABLE = "N/A"
# shown when the country has no advertisement or the data set is unreachable
GENERIC_ADVERTISEMENT = "Generic Advertisement Sprite"

# country code -> advertisement id
AdvertisementSet = Dict[str, str]


@dataclass(frozen=True)
class CityForecast:
    city: str
    forecast: str

    @property
    def available(self) -> bool:
        return bool(self.forecast) and self.forecast != FORECAST_UNAVAILABLE


@dataclass(frozen=True)
class AggregateResult:
    # one request worth of resolved data, consumed by the renderer and dropped
    advertisement: str = ""
    forecasts: Tuple[CityForecast, ...] = ()
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class EdgeResponse:
    status: str
    status_description: str
    body: str
    headers: Dict[str, List[Dict[str, str]]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        # shape expected by lambda@edge for a generated response
        return {
            "status": self.status,
            "statusDescription": self.status_description,
            "headers": self.headers,
            "body": self.body,
        }
