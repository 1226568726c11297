"""
Technical scoring engine.
Combines five 0-100 sub-scores into one composite:
- Price performance (30%): daily percent change bucketed
- Momentum (25%): position of the current price within the day's range
- Volatility (20%): day range relative to previous close, inverse scored
- Market cap (15%): larger companies score as more stable
- Trend (10%): recent 5-close average vs. the oldest 5 of the last 20 closes

Trend needs at least 10 closes. When history is shorter it is left out and its
weight is redistributed over the remaining sub-scores.
"""
import logging

import numpy as np

from stockdash.analysis.grading import NEUTRAL_LABEL, bucket, clamp, is_number, technical_label
from stockdash.analysis.recommendation import describe, generate_explanation, get_recommendation
from stockdash.schemas.market import Candles, CompanyProfile, Quote
from stockdash.schemas.scoring import CategoryScore, CompositeScore, RatioComparison

logger = logging.getLogger(__name__)

WEIGHTS: dict[str, float] = {
    "price": 0.30,
    "momentum": 0.25,
    "volatility": 0.20,
    "market": 0.15,
    "trend": 0.10,
}

NEUTRAL = 50
MIN_TREND_CLOSES = 10
TREND_WINDOW = 20
TREND_SAMPLE = 5

PRICE_BUCKETS = [(5, 90), (2, 80), (0, 65), (-2, 35), (-5, 20)]
TREND_BUCKETS = [(10, 90), (5, 80), (0, 65), (-5, 35), (-10, 20)]
MARKET_CAP_BUCKETS = [(10_000, 80), (2_000, 65), (300, 45)]  # USD millions
# (upper bound %, score): first bound the range falls under wins
VOLATILITY_BUCKETS = [(1, 80), (2, 70), (3, 60), (5, 40), (8, 25)]


def price_score(quote: Quote | None) -> int:
    if quote is None or not is_number(quote.dp):
        return NEUTRAL
    return bucket(quote.dp, PRICE_BUCKETS, floor=10)


def momentum_score(quote: Quote | None) -> int:
    if quote is None or not all(is_number(v) for v in (quote.c, quote.h, quote.l)):
        return NEUTRAL
    day_range = quote.h - quote.l
    if day_range == 0:
        return NEUTRAL
    position = (quote.c - quote.l) / day_range
    return int(clamp(round(position * 100)))


def volatility_score(quote: Quote | None) -> int:
    if quote is None or not all(is_number(v) for v in (quote.h, quote.l, quote.pc)):
        return NEUTRAL
    if quote.pc <= 0:
        return NEUTRAL
    range_pct = (quote.h - quote.l) / quote.pc * 100
    for upper, score in VOLATILITY_BUCKETS:
        if range_pct < upper:
            return score
    return 10


def market_score(profile: CompanyProfile | None) -> int:
    if profile is None or not is_number(profile.marketCapitalization) or not profile.marketCapitalization:
        return NEUTRAL
    return bucket(profile.marketCapitalization, MARKET_CAP_BUCKETS, floor=30)


def trend_change(candles: Candles | None) -> float | None:
    """Percent change between the recent and older close averages, or None."""
    if candles is None or len(candles.c) < MIN_TREND_CLOSES:
        return None
    closes = np.array(candles.c[-TREND_WINDOW:], dtype=float)
    if not np.all(np.isfinite(closes)):
        return None
    recent = float(np.mean(closes[-TREND_SAMPLE:]))
    older = float(np.mean(closes[:TREND_SAMPLE]))
    if older <= 0:
        return None
    return (recent - older) / older * 100


def trend_score(candles: Candles | None) -> int | None:
    change = trend_change(candles)
    if change is None:
        return None
    return bucket(change, TREND_BUCKETS, floor=10)


def weighted_composite(sub_scores: dict[str, int | None]) -> int:
    """Weighted average over the sub-scores present, rounded and clamped."""
    total = 0.0
    total_weight = 0.0
    for name, weight in WEIGHTS.items():
        score = sub_scores.get(name)
        if score is None:
            continue
        total += score * weight
        total_weight += weight
    if total_weight == 0:
        return NEUTRAL
    return int(clamp(round(total / total_weight)))


def neutral_composite() -> CompositeScore:
    label, color = NEUTRAL_LABEL
    return CompositeScore(
        score=NEUTRAL,
        label=label,
        color=color,
        breakdown={},
        explanation="Unable to calculate score due to insufficient data",
        recommendation=get_recommendation(NEUTRAL),
    )


class TechnicalScorer:
    def score(
        self,
        quote: Quote | None,
        profile: CompanyProfile | None,
        candles: Candles | None = None,
    ) -> CompositeScore:
        try:
            return self._score(quote, profile, candles)
        except Exception:
            logger.exception("Technical scoring failed, falling back to neutral score")
            return neutral_composite()

    def _score(self, quote: Quote | None, profile: CompanyProfile | None, candles: Candles | None) -> CompositeScore:
        sub_scores: dict[str, int | None] = {
            "price": price_score(quote),
            "momentum": momentum_score(quote),
            "volatility": volatility_score(quote),
            "market": market_score(profile),
            "trend": trend_score(candles),
        }
        inputs = self._inputs(quote, profile, candles)

        breakdown: dict[str, CategoryScore] = {}
        for name, value in sub_scores.items():
            if value is None:
                continue
            insight = describe(name, value)
            breakdown[name] = CategoryScore(
                score=value,
                insights=[insight] if insight else [],
                ratios=inputs.get(name, {}),
            )

        overall = weighted_composite(sub_scores)
        label, color = technical_label(overall)
        return CompositeScore(
            score=overall,
            label=label,
            color=color,
            breakdown=breakdown,
            explanation=generate_explanation(breakdown),
            recommendation=get_recommendation(overall),
        )

    def _inputs(self, quote: Quote | None, profile: CompanyProfile | None,
                candles: Candles | None) -> dict[str, dict[str, RatioComparison]]:
        quote = quote or Quote()
        day_range = None
        if is_number(quote.h) and is_number(quote.l) and is_number(quote.pc) and quote.pc > 0:
            day_range = round((quote.h - quote.l) / quote.pc * 100, 2)
        change = trend_change(candles)
        return {
            "price": {"change_percent": RatioComparison(value=quote.dp)},
            "momentum": {
                "current": RatioComparison(value=quote.c),
                "day_high": RatioComparison(value=quote.h),
                "day_low": RatioComparison(value=quote.l),
            },
            "volatility": {"day_range_percent": RatioComparison(value=day_range)},
            "market": {"market_cap_millions": RatioComparison(value=profile.marketCapitalization if profile else None)},
            "trend": {"trend_percent": RatioComparison(value=round(change, 2) if change is not None else None)},
        }
