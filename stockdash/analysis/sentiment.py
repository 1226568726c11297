"""Aggregate per-headline sentiment results into a summary."""
from collections.abc import Iterable

from stockdash.schemas.sentiment import SentimentPercentages, SentimentResult, SentimentSummary

LABELS = ("positive", "neutral", "negative")


def map_star_label(label: str) -> str:
    """Map a 1-5 star classifier label onto positive/neutral/negative."""
    lower = (label or "").lower()
    if "5 stars" in lower or "4 stars" in lower:
        return "positive"
    if "1 star" in lower or "2 stars" in lower:
        return "negative"
    return "neutral"


def aggregate_sentiments(results: Iterable[SentimentResult] | None) -> SentimentSummary:
    results = list(results or [])
    if not results:
        return SentimentSummary(summary="No sentiment data available.")

    counts = dict.fromkeys(LABELS, 0)
    for result in results:
        # Failed or unrecognized classifications count as neutral
        if result.error or result.label not in counts:
            counts["neutral"] += 1
        else:
            counts[result.label] += 1

    positive, neutral, negative = counts["positive"], counts["neutral"], counts["negative"]
    total = positive + neutral + negative

    if positive > negative + neutral:
        overall = "positive"
        summary = (
            f"Recent news is mostly positive, with {positive} positive, "
            f"{neutral} neutral, and {negative} negative headlines."
        )
    elif negative > positive + neutral:
        overall = "negative"
        summary = (
            f"Recent news is mostly negative, with {negative} negative, "
            f"{neutral} neutral, and {positive} positive headlines."
        )
    else:
        overall = "neutral"
        summary = (
            f"Recent news sentiment is mixed, with {positive} positive, "
            f"{neutral} neutral, and {negative} negative headlines."
        )

    return SentimentSummary(
        positive=positive,
        neutral=neutral,
        negative=negative,
        total=total,
        overall=overall,
        summary=summary,
        percentages=SentimentPercentages(
            positive=round(positive / total * 100),
            neutral=round(neutral / total * 100),
            negative=round(negative / total * 100),
        ),
    )
