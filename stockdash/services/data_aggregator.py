import asyncio
import logging
import time
from datetime import datetime, timezone

from pydantic import BaseModel, ValidationError

from stockdash.analysis.fundamental_analyzer import analyze_fundamentals
from stockdash.analysis.sentiment import aggregate_sentiments
from stockdash.analysis.technical_scorer import TechnicalScorer
from stockdash.config import get_settings
from stockdash.schemas.market import Candles, CompanyProfile, HistoricalPrices, Quote
from stockdash.schemas.sentiment import SentimentSummary
from stockdash.schemas.stock import (
    FundamentalsResponse,
    HistoryResponse,
    MarketNewsResponse,
    NewsArticle,
    NewsResponse,
    StockReport,
)
from stockdash.services.finnhub_service import FinnhubService, date_range
from stockdash.services.news_service import NewsService
from stockdash.services.sentiment_service import SentimentService

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse(model: type[BaseModel], payload, what: str):
    """Validate a provider payload, treating malformed data as missing."""
    if payload is None or isinstance(payload, Exception):
        if isinstance(payload, Exception):
            logger.warning(f"{what} fetch failed: {payload}")
        return None
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Malformed {what} payload: {e}")
        return None


def _metric_map(basic_financials) -> dict | None:
    if not isinstance(basic_financials, dict):
        return None
    metric = basic_financials.get("metric")
    return metric if isinstance(metric, dict) and metric else None


class DataAggregator:
    def __init__(
        self,
        finnhub: FinnhubService | None = None,
        sentiment: SentimentService | None = None,
    ):
        self.settings = get_settings()
        self.finnhub = finnhub or FinnhubService()
        self.news = NewsService(self.finnhub)
        self.sentiment = sentiment or SentimentService()
        self.scorer = TechnicalScorer()

    async def get_stock_report(self, symbol: str, include_news: bool = False) -> StockReport | None:
        """Quote, profile, scores and history for one symbol. None when the symbol is unknown."""
        quote_raw, profile_raw, financials_raw = await asyncio.gather(
            self.finnhub.get_quote(symbol),
            self.finnhub.get_company_profile(symbol),
            self.finnhub.get_basic_financials(symbol),
            return_exceptions=True,
        )
        if isinstance(quote_raw, Exception):
            raise quote_raw

        quote = _parse(Quote, quote_raw, f"quote for {symbol}")
        # Finnhub returns zeros rather than an error for unknown symbols
        if quote is None or not quote.c:
            return None

        profile = _parse(CompanyProfile, profile_raw, f"profile for {symbol}")
        metrics = _metric_map(None if isinstance(financials_raw, Exception) else financials_raw)

        candles_raw = await self.finnhub.get_recent_candles(symbol, self.settings.history_days)
        candles = _parse(Candles, candles_raw, f"candles for {symbol}")
        if candles is not None and not candles.ok:
            candles = None

        scoring = self.scorer.score(quote, profile, candles)
        fundamentals = analyze_fundamentals(metrics, profile)

        news = sentiment = None
        if include_news:
            news, sentiment = await self._news_with_sentiment(symbol, self.settings.news_days, True)

        return StockReport(
            symbol=symbol,
            quote=quote,
            profile=profile,
            scoring=scoring,
            fundamentals=fundamentals,
            historical=HistoricalPrices.from_candles(candles) if candles else None,
            news=news,
            sentiment=sentiment,
            timestamp=_now_iso(),
        )

    async def get_history(
        self,
        symbol: str,
        resolution: str = "D",
        from_ts: int | None = None,
        to_ts: int | None = None,
        days: int | None = None,
    ) -> HistoryResponse | None:
        if from_ts is None or to_ts is None:
            to_ts = int(time.time())
            from_ts = to_ts - (days or self.settings.history_days) * 24 * 60 * 60

        raw = await self.finnhub.get_candles(symbol, resolution, from_ts, to_ts)
        candles = _parse(Candles, raw, f"candles for {symbol}")
        if candles is None or not candles.ok:
            return None
        return HistoryResponse(
            symbol=symbol,
            resolution=resolution,
            from_ts=from_ts,
            to_ts=to_ts,
            data=HistoricalPrices.from_candles(candles),
        )

    async def get_news(self, symbol: str, days: int | None = None, with_sentiment: bool = True) -> NewsResponse:
        days = days or self.settings.news_days
        from_date, to_date = date_range(days)
        news, sentiment = await self._news_with_sentiment(symbol, days, with_sentiment)
        return NewsResponse(symbol=symbol, from_date=from_date, to_date=to_date, news=news, sentiment=sentiment)

    async def get_market_news(self, category: str = "general") -> MarketNewsResponse:
        return MarketNewsResponse(category=category, news=await self.news.get_market_news(category))

    async def get_fundamentals(self, symbol: str) -> FundamentalsResponse | None:
        financials_raw, profile_raw, statements_raw = await asyncio.gather(
            self.finnhub.get_basic_financials(symbol),
            self.finnhub.get_company_profile(symbol),
            self.finnhub.get_financials(symbol),
            return_exceptions=True,
        )
        metrics = _metric_map(None if isinstance(financials_raw, Exception) else financials_raw)
        profile = _parse(CompanyProfile, profile_raw, f"profile for {symbol}")

        analysis = analyze_fundamentals(metrics, profile)
        if not analysis.available:
            return None
        return FundamentalsResponse(
            symbol=symbol,
            analysis=analysis,
            raw_metrics=metrics,
            raw_financials=statements_raw if isinstance(statements_raw, dict) else None,
            timestamp=_now_iso(),
        )

    async def search(self, query: str) -> dict:
        return await self.finnhub.search(query)

    async def _news_with_sentiment(
        self, symbol: str, days: int, with_sentiment: bool
    ) -> tuple[list[NewsArticle], SentimentSummary | None]:
        articles = await self.news.get_company_news(symbol, days)
        if not with_sentiment or not self.sentiment.is_configured or not articles:
            return articles, None

        results = await self.sentiment.analyze_many([a.headline for a in articles])
        articles = [a.model_copy(update={"sentiment": r}) for a, r in zip(articles, results)]
        return articles, aggregate_sentiments(results)
