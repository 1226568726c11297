from typing import Literal

from pydantic import BaseModel

InsightType = Literal["positive", "negative", "neutral", "warning"]


class Insight(BaseModel):
    type: InsightType
    text: str


class RatioComparison(BaseModel):
    value: float | None = None
    benchmark: float | None = None


class CategoryScore(BaseModel):
    score: int = 50  # 0-100
    insights: list[Insight] = []
    ratios: dict[str, RatioComparison] = {}


class Recommendation(BaseModel):
    action: str  # Consider, Monitor, Caution
    description: str


class CompositeScore(BaseModel):
    score: int = 50
    label: str = "Neutral"
    color: str = "#6B7280"
    breakdown: dict[str, CategoryScore] = {}
    explanation: str = ""
    recommendation: Recommendation | None = None
