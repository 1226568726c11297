import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from stockdash.analysis.metric_definitions import METRIC_DEFINITIONS
from stockdash.api.dependencies import get_aggregator
from stockdash.api.validation import validate_query, validate_symbol
from stockdash.schemas.fundamental import MetricDefinition
from stockdash.schemas.stock import HistoryResponse, StockReport
from stockdash.services.data_aggregator import DataAggregator
from stockdash.services.finnhub_service import FinnhubError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("/search")
async def search_stocks(
    q: str | None = Query(None, max_length=50),
    aggregator: DataAggregator = Depends(get_aggregator),
):
    """Search for symbols by ticker or company name."""
    query = validate_query(q)
    try:
        return await aggregator.search(query)
    except FinnhubError as e:
        logger.error(f"Search error for {query!r}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/metrics/definitions", response_model=dict[str, MetricDefinition])
async def get_metric_definitions():
    return dict(METRIC_DEFINITIONS)


@router.get("/{symbol}", response_model=StockReport)
async def get_stock(
    symbol: str,
    include_news: bool = False,
    aggregator: DataAggregator = Depends(get_aggregator),
):
    symbol = validate_symbol(symbol)
    try:
        result = await aggregator.get_stock_report(symbol, include_news=include_news)
    except FinnhubError as e:
        logger.error(f"Error fetching data for {symbol}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if not result:
        raise HTTPException(status_code=404, detail="Stock symbol not found or invalid")
    return result


@router.get("/{symbol}/history", response_model=HistoryResponse)
async def get_history(
    symbol: str,
    resolution: str = Query("D", pattern=r"^(1|5|15|30|60|D|W|M)$"),
    days: int | None = Query(None, ge=1, le=3650),
    from_ts: int | None = Query(None, alias="from"),
    to_ts: int | None = Query(None, alias="to"),
    aggregator: DataAggregator = Depends(get_aggregator),
):
    symbol = validate_symbol(symbol)
    try:
        result = await aggregator.get_history(symbol, resolution, from_ts, to_ts, days)
    except FinnhubError as e:
        logger.error(f"Error fetching historical data for {symbol}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if not result:
        raise HTTPException(status_code=404, detail="Historical data not available for this symbol")
    return result
