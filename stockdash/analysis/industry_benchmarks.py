"""
Industry ratio benchmarks.

Maps a Finnhub industry classification to the expected ratio values used as
comparison baselines by the fundamental analyzer. Matching is a
case-insensitive substring search over a small, ordered set of buckets; the
first bucket with a matching keyword wins.
"""
from types import MappingProxyType

from stockdash.schemas.fundamental import IndustryBenchmark

TECHNOLOGY = IndustryBenchmark(
    name="technology", pe_ratio=25, pb_ratio=4.5, roe=15, debt_to_equity=0.3, current_ratio=2.0, profit_margin=20,
)
HEALTHCARE = IndustryBenchmark(
    name="healthcare", pe_ratio=18, pb_ratio=3.2, roe=12, debt_to_equity=0.4, current_ratio=2.5, profit_margin=15,
)
FINANCIAL = IndustryBenchmark(
    name="financial", pe_ratio=12, pb_ratio=1.2, roe=10, debt_to_equity=0.8, current_ratio=1.1, profit_margin=25,
)
DEFAULT_BENCHMARK = IndustryBenchmark(
    name="default", pe_ratio=20, pb_ratio=2.5, roe=12, debt_to_equity=0.5, current_ratio=2.0, profit_margin=10,
)

# Ordered: (keywords, benchmark). Healthcare precedes technology because
# "biotechnology" contains "technology".
_BUCKETS: tuple[tuple[tuple[str, ...], IndustryBenchmark], ...] = (
    (("healthcare", "health care", "pharmaceutical", "biotechnology"), HEALTHCARE),
    (("technology", "software", "semiconductor"), TECHNOLOGY),
    (("financial", "bank", "insurance"), FINANCIAL),
)

BENCHMARKS = MappingProxyType({b.name: b for _, b in _BUCKETS} | {"default": DEFAULT_BENCHMARK})


def benchmark_for(industry: str | None) -> IndustryBenchmark:
    """Return the benchmark for an industry name, falling back to the default."""
    if not industry:
        return DEFAULT_BENCHMARK

    industry_lower = industry.lower()
    for keywords, benchmark in _BUCKETS:
        if any(keyword in industry_lower for keyword in keywords):
            return benchmark

    return DEFAULT_BENCHMARK
