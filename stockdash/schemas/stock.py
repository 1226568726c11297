from pydantic import BaseModel

from stockdash.schemas.fundamental import FundamentalAnalysis
from stockdash.schemas.market import CompanyProfile, HistoricalPrices, Quote
from stockdash.schemas.scoring import CompositeScore
from stockdash.schemas.sentiment import SentimentResult, SentimentSummary


class NewsArticle(BaseModel):
    id: int | str
    headline: str
    summary: str = ""
    url: str = ""
    datetime: str = ""  # ISO 8601 UTC
    source: str = "Unknown"
    image: str | None = None
    sentiment: SentimentResult | None = None


class StockReport(BaseModel):
    symbol: str
    quote: Quote
    profile: CompanyProfile | None = None
    scoring: CompositeScore
    fundamentals: FundamentalAnalysis
    historical: HistoricalPrices | None = None
    news: list[NewsArticle] | None = None
    sentiment: SentimentSummary | None = None
    timestamp: str


class HistoryResponse(BaseModel):
    symbol: str
    resolution: str
    from_ts: int
    to_ts: int
    data: HistoricalPrices


class NewsResponse(BaseModel):
    symbol: str
    from_date: str
    to_date: str
    news: list[NewsArticle] = []
    sentiment: SentimentSummary | None = None


class MarketNewsResponse(BaseModel):
    category: str
    news: list[NewsArticle] = []


class FundamentalsResponse(BaseModel):
    symbol: str
    analysis: FundamentalAnalysis
    raw_metrics: dict | None = None
    raw_financials: dict | None = None  # /stock/financials income statement
    timestamp: str
