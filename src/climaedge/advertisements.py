# server-side ad insertion: one advertisement data set shared by every request in the process
# the set is prefetched when the resolver is built and replaced (never mutated) when a
# request finds the current fetch failed

from __future__ import annotations
import logging
import threading
from concurrent.futures import Executor, Future
from typing import Any
from .client import DecodeFailure, EdgeHTTPClient
from .models import GENERIC_ADVERTISEMENT, AdvertisementSet

logger = logging.getLogger(__name__)


def parse_advertisements(payload: Any, url: str = "") -> AdvertisementSet:
    # provider shape: {"Advertisement": {"US": "<ad id>", ...}}, everything else is opaque
    mapping = payload.get("Advertisement") if isinstance(payload, dict) else None
    if not isinstance(mapping, dict):
        raise DecodeFailure(url, "Unexpected advertisement payload: missing Advertisement mapping")
    return {str(country): str(ad) for country, ad in mapping.items() if ad is not None}


class AdvertisementResolver:
    # resolve() never raises: a failed shared fetch is replaced by a fresh one exactly
    # once per observation; if that fails too the caller gets GENERIC_ADVERTISEMENT
    # while the replacement stays in place for the next request to retry on its own

    def __init__(self, client: EdgeHTTPClient, url: str, executor: Executor):
        self._client = client
        self._url = url
        self._executor = executor
        # guards the reference only, never held across a network wait
        self._lock = threading.Lock()
        self._current: Future = self._start_fetch()

    @property
    def current(self) -> Future:
        with self._lock:
            return self._current

    def _fetch(self) -> AdvertisementSet:
        payload = self._client.get_json(self._url)
        logger.debug("Ads %s", payload)
        return parse_advertisements(payload, self._url)

    def _start_fetch(self) -> Future:
        return self._executor.submit(self._fetch)

    def refresh(self) -> Future:
        # swap in a new fetch for every later caller, waiters on the old one are unaffected
        with self._lock:
            self._current = self._start_fetch()
            return self._current

    def resolve(self, country: str) -> str:
        try:
            advertisements = self.current.result()
        except Exception as exc:
            logger.warning("Advertisement fetch failed (%r), retrying once", exc)
            try:
                advertisements = self.refresh().result()
            except Exception as retry_exc:
                logger.warning("Advertisement retry failed (%r), using generic advertisement", retry_exc)
                return GENERIC_ADVERTISEMENT

        return advertisements.get(country) or GENERIC_ADVERTISEMENT
