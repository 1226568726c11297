"""Provider-shaped market data: quotes, profiles, candles and news."""
from pydantic import BaseModel, ConfigDict


class Quote(BaseModel):
    """Finnhub /quote payload. Field names follow the provider."""
    model_config = ConfigDict(frozen=True)

    c: float | None = None  # current price
    h: float | None = None  # day high
    l: float | None = None  # day low
    o: float | None = None  # day open
    pc: float | None = None  # previous close
    dp: float | None = None  # percent change
    d: float | None = None  # absolute change
    t: int | None = None  # unix timestamp


class CompanyProfile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None
    ticker: str | None = None
    exchange: str | None = None
    country: str | None = None
    currency: str | None = None
    ipo: str | None = None
    marketCapitalization: float | None = None  # USD millions
    shareOutstanding: float | None = None  # millions
    finnhubIndustry: str | None = None
    logo: str | None = None
    weburl: str | None = None


class Candles(BaseModel):
    """Finnhub /stock/candle payload (parallel arrays)."""
    c: list[float] = []
    h: list[float] = []
    l: list[float] = []
    o: list[float] = []
    t: list[int] = []
    v: list[float] = []
    s: str = "no_data"

    @property
    def ok(self) -> bool:
        return self.s == "ok" and bool(self.c)


class HistoricalPrices(BaseModel):
    prices: list[float] = []
    timestamps: list[int] = []
    volumes: list[float] = []
    highs: list[float] = []
    lows: list[float] = []
    opens: list[float] = []

    @classmethod
    def from_candles(cls, candles: Candles) -> "HistoricalPrices":
        return cls(
            prices=candles.c,
            timestamps=candles.t,
            volumes=candles.v,
            highs=candles.h,
            lows=candles.l,
            opens=candles.o,
        )
