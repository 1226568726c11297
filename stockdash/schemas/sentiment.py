from typing import Literal

from pydantic import BaseModel

SentimentLabel = Literal["positive", "negative", "neutral"]


class SentimentResult(BaseModel):
    label: str = "neutral"
    score: float = 0.5
    error: str | None = None


class SentimentPercentages(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class SentimentSummary(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0
    total: int = 0
    overall: SentimentLabel = "neutral"
    summary: str = ""
    percentages: SentimentPercentages = SentimentPercentages()
