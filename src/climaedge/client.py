# OOP boundary for outbound i/o
# one GET per call, no retries here: retry policy belongs to the callers
# use a thread-local session per ThreadPoolExecutor worker

from __future__ import annotations
import json
import logging
import threading
from typing import Any
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)


class EdgeFetchError(RuntimeError):
    # common base so callers can absorb any fetch problem with one except clause
    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class FetchFailure(EdgeFetchError):
    # transport error or a response status in the error range
    def __init__(self, url: str, message: str, status_code: int | None = None):
        super().__init__(url, message)
        self.status_code = status_code


class DecodeFailure(EdgeFetchError):
    # body arrived but is not the JSON shape we need
    pass


class EdgeHTTPClient:
    # encapsulates transport details like timeout, headers and connection pooling
    ERROR_STATUS = 400
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        timeout: float | None = DEFAULT_TIMEOUT,
        user_agent: str = "clima-edge/0.1",
        pool_size: int = 16,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.pool_size = pool_size

        # each worker thread lazily obtains its own session through _session()
        self._local = threading.local()

        # urllib3 must not retry behind our back, the advertisement resolver owns that policy
        self._retry = Retry(total=0, raise_on_status=False)

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        adapter = HTTPAdapter(
            max_retries=self._retry,
            pool_connections=self.pool_size,
            pool_maxsize=self.pool_size,
        )
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
        return sess

    def get_text(self, url: str) -> str:
        try:
            resp = self._session().get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Error fetching %s: %s", url, exc)
            raise FetchFailure(url, f"Request error for {url}: {exc}") from exc

        if resp.status_code >= self.ERROR_STATUS:
            raise FetchFailure(url, f"HTTP {resp.status_code} for {url}", status_code=resp.status_code)

        # the origin does not always declare a charset, bodies are utf-8
        resp.encoding = "utf-8"
        return resp.text

    def get_json(self, url: str) -> Any:
        text = self.get_text(url)
        try:
            return json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise DecodeFailure(url, f"Invalid JSON from {url}: {exc}") from exc
