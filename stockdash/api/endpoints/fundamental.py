from fastapi import APIRouter, Depends, HTTPException

from stockdash.api.dependencies import get_aggregator
from stockdash.api.validation import validate_symbol
from stockdash.schemas.stock import FundamentalsResponse
from stockdash.services.data_aggregator import DataAggregator

router = APIRouter(prefix="/api/stocks", tags=["fundamental"])


@router.get("/{symbol}/fundamentals", response_model=FundamentalsResponse)
async def get_fundamental_analysis(
    symbol: str,
    aggregator: DataAggregator = Depends(get_aggregator),
):
    symbol = validate_symbol(symbol)
    result = await aggregator.get_fundamentals(symbol)
    if not result:
        raise HTTPException(status_code=404, detail="Fundamental data not available for this symbol")
    return result
