"""Path and query parameter checks shared by the stock endpoints."""
import re

from fastapi import HTTPException

# AAPL, BRK.B, BF-B, 0700.HK
SYMBOL_PATTERN = re.compile(r"^[A-Z0-9.\-]{1,10}$")


def _required(value: str | None, message: str) -> str:
    stripped = (value or "").strip()
    if not stripped:
        raise HTTPException(status_code=400, detail=message)
    return stripped


def validate_symbol(symbol: str | None) -> str:
    """Uppercase a path symbol and reject anything outside SYMBOL_PATTERN with a 400."""
    symbol = _required(symbol, "Stock symbol is required").upper()
    if not SYMBOL_PATTERN.match(symbol):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid symbol format: '{symbol}'. Use 1-10 letters, digits, dots or dashes.",
        )
    return symbol


def validate_query(query: str | None) -> str:
    return _required(query, "Search query is required")
