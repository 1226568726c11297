import json

import httpx
import pytest

from stockdash.config import get_settings
from stockdash.services.finnhub_service import FinnhubService, RateLimiter
from stockdash.services.webhook_store import get_webhook_store
from tests.payloads import CANDLES, FINANCIALS, METRICS, NEWS, PROFILE, QUOTE


@pytest.fixture(autouse=True)
def settings_env(monkeypatch):
    monkeypatch.setenv("FINNHUB_API_KEY", "test-key")
    monkeypatch.setenv("HUGGINGFACE_TOKEN", "")
    monkeypatch.setenv("SENTIMENT_BATCH_DELAY", "0")
    monkeypatch.setenv("FINNHUB_WEBHOOK_SECRET", "s3cret")
    get_settings.cache_clear()
    get_webhook_store.cache_clear()
    yield
    get_settings.cache_clear()
    get_webhook_store.cache_clear()


def finnhub_handler(routes: dict):
    """Build a MockTransport handler answering Finnhub paths from `routes`.

    A route value may be a payload, an int status code, or a callable taking the request.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v1")
        if path not in routes:
            return httpx.Response(404, json={"error": "not found"})
        value = routes[path]
        if callable(value):
            value = value(request)
        if isinstance(value, int):
            return httpx.Response(value, json={"error": "upstream"})
        return httpx.Response(200, content=json.dumps(value), headers={"content-type": "application/json"})

    return handler


@pytest.fixture
def default_routes():
    return {
        "/quote": QUOTE,
        "/stock/profile2": PROFILE,
        "/stock/metric": METRICS,
        "/stock/financials": FINANCIALS,
        "/stock/candle": CANDLES,
        "/company-news": NEWS,
        "/news": NEWS,
        "/search": {"count": 1, "result": [{"symbol": "AAPL", "description": "APPLE INC"}]},
    }


@pytest.fixture
def make_finnhub():
    """Factory for a FinnhubService answering from a route table, with its own rate limiter."""
    def make(routes: dict) -> FinnhubService:
        return FinnhubService(transport=httpx.MockTransport(finnhub_handler(routes)), rate_limiter=RateLimiter())

    return make
