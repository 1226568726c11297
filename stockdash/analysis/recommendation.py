"""Readable explanations and recommendation actions for technical scores."""
from stockdash.schemas.scoring import CategoryScore, Insight, Recommendation

STRONG_THRESHOLD = 70
WEAK_THRESHOLD = 30

# Fixed category order for explanations: (category, strong phrase, weak phrase)
CATEGORY_PHRASES: tuple[tuple[str, str, str], ...] = (
    ("price", "strong price performance", "weak price performance"),
    ("momentum", "positive momentum", "negative momentum"),
    ("volatility", "low volatility", "high volatility"),
    ("market", "large market capitalization", "small market capitalization"),
    ("trend", "upward price trend", "downward price trend"),
)


def describe(category: str, score: int) -> Insight | None:
    """Insight for a notably high or low sub-score, None when unremarkable."""
    for name, strong, weak in CATEGORY_PHRASES:
        if name != category:
            continue
        if score > STRONG_THRESHOLD:
            return Insight(type="positive", text=strong)
        if score < WEAK_THRESHOLD:
            return Insight(type="negative", text=weak)
    return None


def generate_explanation(breakdown: dict[str, CategoryScore]) -> str:
    phrases = []
    for name, _, _ in CATEGORY_PHRASES:
        category = breakdown.get(name)
        if category is None:
            continue
        insight = describe(name, category.score)
        if insight:
            phrases.append(insight.text)

    if not phrases:
        return "Mixed signals from various indicators"
    return f"Based on {', '.join(phrases)}"


def get_recommendation(score: float) -> Recommendation:
    if score >= 70:
        return Recommendation(
            action="Consider",
            description="Stock shows strong indicators across multiple metrics",
        )
    elif score >= 40:
        return Recommendation(
            action="Monitor",
            description="Stock shows mixed signals, worth monitoring for opportunities",
        )
    else:
        return Recommendation(
            action="Caution",
            description="Stock shows weak indicators, exercise caution",
        )
