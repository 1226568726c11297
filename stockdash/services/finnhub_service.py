import asyncio
import logging
import time
from datetime import datetime, timedelta, timezone

import httpx

from stockdash.config import get_settings

logger = logging.getLogger(__name__)


class FinnhubError(Exception):
    """Raised when a required Finnhub call cannot be completed."""


class RateLimiter:
    """Simple sliding-window rate limiter for Finnhub: 60 calls/min."""

    def __init__(self, max_calls: int = 60, period: float = 60.0):
        self.max_calls = max_calls
        self.period = period
        self.calls: list[float] = []
        self._lock = asyncio.Lock()

    async def acquire(self):
        async with self._lock:
            now = time.monotonic()
            self.calls = [t for t in self.calls if now - t < self.period]
            if len(self.calls) >= self.max_calls:
                sleep_time = self.period - (now - self.calls[0])
                await asyncio.sleep(sleep_time)
            self.calls.append(time.monotonic())


_rate_limiter: RateLimiter | None = None


def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter shared by every FinnhubService instance."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter(max_calls=get_settings().finnhub_rate_limit)
    return _rate_limiter


def date_range(days: int) -> tuple[str, str]:
    """(from, to) as YYYY-MM-DD strings covering the last `days` days."""
    to_date = datetime.now(timezone.utc)
    from_date = to_date - timedelta(days=days)
    return from_date.strftime("%Y-%m-%d"), to_date.strftime("%Y-%m-%d")


class FinnhubService:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None, rate_limiter: RateLimiter | None = None):
        settings = get_settings()
        self.api_key = settings.finnhub_api_key
        self.base_url = settings.finnhub_base_url
        self.timeout = settings.finnhub_timeout
        self.rate_limiter = rate_limiter or get_rate_limiter()
        self.transport = transport
        self.enabled = bool(self.api_key)

    async def _request(self, endpoint: str, params: dict = None):
        if not self.enabled:
            raise FinnhubError("FINNHUB_API_KEY is not configured")
        await self.rate_limiter.acquire()
        params = dict(params or {})
        params["token"] = self.api_key
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(f"{self.base_url}{endpoint}", params=params)
        except httpx.HTTPError as e:
            raise FinnhubError(f"Finnhub request to {endpoint} failed: {e}") from e
        if resp.status_code != 200:
            raise FinnhubError(f"Finnhub {endpoint} returned {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise FinnhubError(f"Finnhub {endpoint} returned invalid JSON") from e

    async def _get(self, endpoint: str, params: dict = None):
        """Like _request, but returns None instead of raising. For optional data."""
        try:
            return await self._request(endpoint, params)
        except FinnhubError as e:
            logger.warning(str(e))
            return None

    async def get_quote(self, symbol: str) -> dict:
        return await self._request("/quote", {"symbol": symbol})

    async def get_company_profile(self, symbol: str) -> dict | None:
        result = await self._get("/stock/profile2", {"symbol": symbol})
        # Finnhub answers unknown symbols with an empty object
        return result if isinstance(result, dict) and result else None

    async def get_basic_financials(self, symbol: str) -> dict | None:
        result = await self._get("/stock/metric", {"symbol": symbol, "metric": "all"})
        return result if isinstance(result, dict) else None

    async def get_financials(self, symbol: str, statement: str = "ic", freq: str = "annual") -> dict | None:
        """Standardized income statement (ic), balance sheet (bs) or cash flow (cf)."""
        result = await self._get("/stock/financials", {"symbol": symbol, "statement": statement, "freq": freq})
        return result if isinstance(result, dict) else None

    async def get_candles(self, symbol: str, resolution: str, from_ts: int, to_ts: int) -> dict:
        return await self._request("/stock/candle", {
            "symbol": symbol,
            "resolution": resolution,
            "from": from_ts,
            "to": to_ts,
        })

    async def get_recent_candles(self, symbol: str, days: int) -> dict | None:
        to_ts = int(time.time())
        from_ts = to_ts - days * 24 * 60 * 60
        try:
            return await self.get_candles(symbol, "D", from_ts, to_ts)
        except FinnhubError as e:
            logger.warning(f"Historical data unavailable for {symbol}: {e}")
            return None

    async def search(self, query: str) -> dict:
        return await self._request("/search", {"q": query})

    async def get_company_news(self, symbol: str, days: int) -> list | None:
        from_date, to_date = date_range(days)
        result = await self._get("/company-news", {"symbol": symbol, "from": from_date, "to": to_date})
        return result if isinstance(result, list) else None

    async def get_market_news(self, category: str = "general") -> list:
        result = await self._request("/news", {"category": category})
        return result if isinstance(result, list) else []
