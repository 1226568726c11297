import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from stockdash.config import get_settings
from stockdash.schemas.stock import NewsArticle
from stockdash.services.finnhub_service import FinnhubService

logger = logging.getLogger(__name__)


def _epoch_to_iso(epoch) -> str:
    """Convert a unix epoch timestamp to an ISO 8601 UTC string."""
    if epoch is None:
        return ""
    try:
        ts = int(epoch)
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    except (ValueError, TypeError, OSError):
        return str(epoch)


def format_articles(raw: list | None, limit: int) -> list[NewsArticle]:
    """Drop headline-less items, keep the first `limit`, newest first."""
    articles = []
    for item in raw or []:
        if not isinstance(item, dict):
            continue
        headline = (item.get("headline") or "").strip()
        if not headline:
            continue
        published = item.get("datetime")
        sort_key = published if isinstance(published, (int, float)) else 0
        try:
            articles.append((
                sort_key,
                NewsArticle(
                    id=item.get("id") or f"{sort_key}-{len(articles)}",
                    headline=headline,
                    summary=item.get("summary") or "",
                    url=item.get("url") or "",
                    datetime=_epoch_to_iso(published),
                    source=item.get("source") or "Unknown",
                    image=item.get("image") or None,
                ),
            ))
        except ValidationError as e:
            logger.warning(f"Skipping malformed news item: {e}")
        if len(articles) >= limit:
            break

    articles.sort(key=lambda pair: pair[0], reverse=True)
    return [article for _, article in articles]


class NewsService:
    def __init__(self, finnhub: FinnhubService):
        self.finnhub = finnhub
        self.settings = get_settings()

    async def get_company_news(self, symbol: str, days: int | None = None) -> list[NewsArticle]:
        days = days or self.settings.news_days
        raw = await self.finnhub.get_company_news(symbol, days)
        if raw is None:
            return []
        articles = format_articles(raw, self.settings.news_limit)
        logger.info(f"Fetched {len(articles)} news articles for {symbol}")
        return articles

    async def get_market_news(self, category: str = "general") -> list[NewsArticle]:
        raw = await self.finnhub.get_market_news(category)
        return format_articles(raw, self.settings.market_news_limit)
