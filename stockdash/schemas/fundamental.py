from pydantic import BaseModel, ConfigDict

from stockdash.schemas.scoring import CategoryScore


class KeyRatios(BaseModel):
    """Canonical ratio set. Percent-valued fields stay in percent (15.2 == 15.2%)."""
    pe_ratio: float | None = None
    pb_ratio: float | None = None
    roe: float | None = None  # %
    roa: float | None = None  # %
    eps: float | None = None
    book_value: float | None = None  # per share
    debt_to_equity: float | None = None
    current_ratio: float | None = None
    quick_ratio: float | None = None
    profit_margin: float | None = None  # %
    operating_margin: float | None = None  # %
    dividend_yield: float | None = None  # %
    dividend_per_share: float | None = None
    revenue_growth: float | None = None  # % YoY
    eps_growth: float | None = None  # % YoY


class IndustryBenchmark(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "default"
    pe_ratio: float = 20
    pb_ratio: float = 2.5
    roe: float = 12
    debt_to_equity: float = 0.5
    current_ratio: float = 2.0
    profit_margin: float = 10
    # Generic comparison points shared by every bucket
    roa: float = 5
    operating_margin: float = 15
    quick_ratio: float = 1.0
    dividend_yield: float = 3.0
    revenue_growth: float = 10
    eps_growth: float = 10


class FundamentalOverall(BaseModel):
    score: int = 50
    label: str = "Fair"
    color: str = "#d97706"
    summary: str = ""


class FundamentalAnalysis(BaseModel):
    available: bool = True
    key_ratios: KeyRatios | None = None
    valuation: CategoryScore | None = None
    profitability: CategoryScore | None = None
    liquidity: CategoryScore | None = None
    leverage: CategoryScore | None = None
    dividend: CategoryScore | None = None
    growth: CategoryScore | None = None
    overall: FundamentalOverall | None = None
    message: str = ""

    @classmethod
    def unavailable(cls, message: str = "Fundamental data not available") -> "FundamentalAnalysis":
        return cls(available=False, message=message)


class MetricDefinition(BaseModel):
    name: str
    description: str
    formula: str
    good_range: str
