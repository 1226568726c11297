"""Normalize Finnhub /stock/metric keys into the canonical KeyRatios set."""
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from stockdash.analysis.grading import is_number
from stockdash.schemas.fundamental import KeyRatios

# Canonical ratio -> provider keys in priority order (TTM, then quarterly, then annual/fiscal year)
RATIO_KEYS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "pe_ratio": ("peBasicExclExtraTTM", "peTTM", "peExclExtraTTM", "peAnnual"),
    "pb_ratio": ("pbQuarterly", "pbAnnual", "pb"),
    "roe": ("roeTTM", "roeRfy", "roe5Y"),
    "roa": ("roaTTM", "roaRfy", "roa5Y"),
    "eps": ("epsBasicExclExtraItemsTTM", "epsTTM", "epsExclExtraItemsTTM", "epsAnnual"),
    "book_value": ("bookValuePerShareQuarterly", "bookValuePerShareAnnual"),
    "debt_to_equity": (
        "totalDebt/totalEquityQuarterly",
        "totalDebt/totalEquityAnnual",
        "totalDebt2EquityQuarterly",
        "totalDebt2EquityAnnual",
    ),
    "current_ratio": ("currentRatioQuarterly", "currentRatioAnnual"),
    "quick_ratio": ("quickRatioQuarterly", "quickRatioAnnual"),
    "profit_margin": ("netProfitMarginTTM", "netProfitMarginAnnual"),
    "operating_margin": ("operatingMarginTTM", "operatingMarginAnnual"),
    "dividend_yield": ("dividendYieldIndicatedAnnual", "currentDividendYieldTTM"),
    "dividend_per_share": ("dividendsPerShareTTM", "dividendPerShareAnnual"),
    "revenue_growth": ("revenueGrowthTTMYoy", "revenueGrowthQuarterlyYoy"),
    "eps_growth": ("epsGrowthTTMYoy", "epsGrowthQuarterlyYoy"),
})


def first_number(metrics: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = metrics.get(key)
        if is_number(value):
            return float(value)
    return None


def extract_key_ratios(metrics: Mapping[str, Any] | None) -> KeyRatios:
    if not isinstance(metrics, Mapping):
        return KeyRatios()
    return KeyRatios(**{name: first_number(metrics, keys) for name, keys in RATIO_KEYS.items()})
