# shared fixtures: a scripted stand-in for EdgeHTTPClient so tests never hit the network

import json
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
import pytest
from climaedge.client import DecodeFailure, FetchFailure

DATA_DIR = Path(__file__).parent / "data"
ADS_URL = "https://edge.test/advertisements_by_country.json"
FORECAST_BASE = "https://edge.test/city_forecast/3D/"


class FakeClient:
    # each url maps to a list of outcomes consumed in order; the last one repeats
    # an outcome is a body string, an exception instance, or a (delay, outcome) pair

    def __init__(self, script=None):
        self.script = {url: list(outcomes) for url, outcomes in (script or {}).items()}
        self.calls = []
        self._lock = threading.Lock()

    def _next(self, url):
        with self._lock:
            self.calls.append(url)
            outcomes = self.script.get(url)
            if not outcomes:
                return FetchFailure(url, f"HTTP 404 for {url}", status_code=404)
            return outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]

    def get_text(self, url):
        outcome = self._next(url)
        if isinstance(outcome, tuple):
            delay, outcome = outcome
            time.sleep(delay)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get_json(self, url):
        text = self.get_text(url)
        try:
            return json.loads(text)
        except ValueError as exc:
            raise DecodeFailure(url, str(exc)) from exc

    def count(self, url):
        return self.calls.count(url)


@pytest.fixture
def ads_payload():
    return (DATA_DIR / "advertisements_by_country.json").read_text()


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def fetch_failure():
    return FetchFailure(ADS_URL, "Request error: connection reset")


class StubResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text
        self.encoding = None


class StubSession:
    # stands in for the thread-local requests.Session of EdgeHTTPClient
    def __init__(self, outcome):
        self.outcome = outcome
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append((url, timeout))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome
