# lambda@edge entry point (viewer request)
# the app is built at import time so the advertisement prefetch starts with the container

from __future__ import annotations
import json
import logging
from typing import Any, Dict
from .app import ClimaEdgeApp
from .config import Settings

settings = Settings.from_env()
logging.getLogger().setLevel(settings.log_level)
logger = logging.getLogger(__name__)

app = ClimaEdgeApp(settings)


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    logger.info("Service log, event: %s", json.dumps(event))
    response = app.handle(event).to_dict()
    logger.info("Service log, response: %s", json.dumps(response))
    return response
