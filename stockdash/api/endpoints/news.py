import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from stockdash.api.dependencies import get_aggregator
from stockdash.api.validation import validate_symbol
from stockdash.schemas.stock import MarketNewsResponse, NewsResponse
from stockdash.services.data_aggregator import DataAggregator
from stockdash.services.finnhub_service import FinnhubError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stocks", tags=["news"])


@router.get("/news/market", response_model=MarketNewsResponse)
async def get_market_news(
    category: str = "general",
    aggregator: DataAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.get_market_news(category)
    except FinnhubError as e:
        logger.error(f"Error fetching market news: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{symbol}/news", response_model=NewsResponse)
async def get_news(
    symbol: str,
    days: int | None = Query(None, ge=1, le=365),
    sentiment: bool = True,
    aggregator: DataAggregator = Depends(get_aggregator),
):
    symbol = validate_symbol(symbol)
    # NewsService.get_company_news() always returns a list (empty if no news found)
    return await aggregator.get_news(symbol, days=days, with_sentiment=sentiment)
