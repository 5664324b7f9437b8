# environment driven settings, read once per process
# local development can drop values into a .env file

from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()  # in production, environment variables are injected by the lambda runtime

ADVERTISEMENTS_URI = "https://d95lokw8aag9n.cloudfront.net/advertisements_by_country.json"
CITY_FORECAST_BASE_URI = "https://d95lokw8aag9n.cloudfront.net/city_forecast/3D/"


class ConfigError(ValueError):
    pass


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number (got {raw!r})") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer (got {raw!r})") from exc
    if value < 1:
        raise ConfigError(f"{name} must be at least 1 (got {value})")
    return value


@dataclass(frozen=True)
class Settings:
    advertisements_uri: str = ADVERTISEMENTS_URI
    city_forecast_base_uri: str = CITY_FORECAST_BASE_URI
    http_timeout: float = 10.0
    max_workers: int = 16
    user_agent: str = "clima-edge/0.1"
    log_level: str = "INFO"
    aws_region: str = ""

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            advertisements_uri=os.getenv("CLIMAEDGE_ADVERTISEMENTS_URI") or ADVERTISEMENTS_URI,
            city_forecast_base_uri=os.getenv("CLIMAEDGE_CITY_FORECAST_BASE_URI") or CITY_FORECAST_BASE_URI,
            http_timeout=_env_float("CLIMAEDGE_HTTP_TIMEOUT", cls.http_timeout),
            max_workers=_env_int("CLIMAEDGE_MAX_WORKERS", cls.max_workers),
            user_agent=os.getenv("CLIMAEDGE_USER_AGENT") or cls.user_agent,
            log_level=(os.getenv("CLIMAEDGE_LOG_LEVEL") or cls.log_level).upper(),
            # set by the lambda runtime; the footer renders it as-is
            aws_region=os.getenv("AWS_REGION", ""),
        )
