"""
Declarative rule table for fundamental scoring.

Each category starts at 50. Rules are grouped by (category, ratio) into
exclusive chains: the first rule in a chain whose condition holds fires,
adjusting the score by its delta and emitting an insight. A ratio that is
missing fires nothing.

Thresholds are absolute unless `relative_to` names an IndustryBenchmark field,
in which case the threshold is a multiple of that benchmark value.
"""
import operator
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable

from stockdash.schemas.fundamental import IndustryBenchmark
from stockdash.schemas.scoring import Insight, InsightType

CATEGORIES: tuple[str, ...] = ("valuation", "profitability", "liquidity", "leverage", "dividend", "growth")

_OPS: dict[str, Callable[[float, float], bool]] = {
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
    "eq": operator.eq,
    "any": lambda value, threshold: True,
}


@dataclass(frozen=True)
class Rule:
    category: str
    ratio: str
    op: str
    threshold: float
    delta: int
    insight_type: InsightType
    template: str
    relative_to: str | None = None
    upper: float | None = None  # inclusive upper bound, for range rules

    def limit(self, benchmark: IndustryBenchmark) -> float:
        if self.relative_to is None:
            return self.threshold
        return self.threshold * getattr(benchmark, self.relative_to)

    def matches(self, value: float, benchmark: IndustryBenchmark) -> bool:
        if not _OPS[self.op](value, self.limit(benchmark)):
            return False
        return self.upper is None or value <= self.upper

    def insight(self, value: float) -> Insight:
        return Insight(type=self.insight_type, text=self.template.format(value=value))


FUNDAMENTAL_RULES: tuple[Rule, ...] = (
    # Valuation
    Rule("valuation", "pe_ratio", "lt", 0.8, +15, "positive",
         "P/E ratio of {value:.1f} is below industry average, suggesting potential undervaluation",
         relative_to="pe_ratio"),
    Rule("valuation", "pe_ratio", "gt", 1.5, -10, "negative",
         "P/E ratio of {value:.1f} is significantly above industry average, "
         "indicating high growth expectations or overvaluation",
         relative_to="pe_ratio"),
    Rule("valuation", "pe_ratio", "any", 0, 0, "neutral",
         "P/E ratio of {value:.1f} is reasonable compared to industry average"),
    Rule("valuation", "pb_ratio", "lt", 1.0, +10, "positive",
         "P/B ratio of {value:.2f} below 1.0 suggests stock trades below book value"),
    Rule("valuation", "pb_ratio", "gt", 1.5, -5, "negative",
         "P/B ratio of {value:.2f} is high, suggesting premium valuation",
         relative_to="pb_ratio"),
    # Profitability
    Rule("profitability", "roe", "gt", 1.0, +15, "positive",
         "Strong ROE of {value:.1f}% indicates efficient use of shareholders' equity",
         relative_to="roe"),
    Rule("profitability", "roe", "lt", 0.7, -10, "negative",
         "ROE of {value:.1f}% is below industry standards",
         relative_to="roe"),
    Rule("profitability", "profit_margin", "gt", 1.0, +10, "positive",
         "Healthy profit margin of {value:.1f}% shows good cost control",
         relative_to="profit_margin"),
    Rule("profitability", "profit_margin", "lt", 5, -10, "negative",
         "Low profit margin of {value:.1f}% may indicate pricing pressure or high costs"),
    # Liquidity
    Rule("liquidity", "current_ratio", "ge", 2.0, +15, "positive",
         "Strong current ratio of {value:.2f} indicates good short-term liquidity"),
    Rule("liquidity", "current_ratio", "lt", 1.0, -15, "negative",
         "Current ratio of {value:.2f} below 1.0 suggests potential liquidity concerns"),
    Rule("liquidity", "quick_ratio", "ge", 1.0, +10, "positive",
         "Quick ratio of {value:.2f} shows ability to meet short-term obligations without selling inventory"),
    # Leverage
    Rule("leverage", "debt_to_equity", "lt", 0.7, +15, "positive",
         "Conservative debt-to-equity ratio of {value:.2f} indicates low financial risk",
         relative_to="debt_to_equity"),
    Rule("leverage", "debt_to_equity", "gt", 1.5, -15, "negative",
         "High debt-to-equity ratio of {value:.2f} may indicate elevated financial risk",
         relative_to="debt_to_equity"),
    Rule("leverage", "debt_to_equity", "any", 0, 0, "neutral",
         "Debt-to-equity ratio of {value:.2f} is within reasonable range"),
    # Dividend
    Rule("dividend", "dividend_yield", "gt", 6, -5, "warning",
         "Very high dividend yield of {value:.2f}% may be unsustainable or indicate stock price decline"),
    Rule("dividend", "dividend_yield", "ge", 2, +10, "positive",
         "Attractive dividend yield of {value:.2f}% provides good income potential",
         upper=6),
    Rule("dividend", "dividend_yield", "eq", 0, 0, "neutral",
         "Company does not pay dividends, likely reinvesting profits for growth"),
    # Growth
    Rule("growth", "revenue_growth", "gt", 20, +20, "positive",
         "Strong revenue growth of {value:.1f}% indicates expanding business"),
    Rule("growth", "revenue_growth", "lt", 0, -15, "negative",
         "Negative revenue growth of {value:.1f}% shows declining business"),
    Rule("growth", "eps_growth", "gt", 15, +15, "positive",
         "Excellent EPS growth of {value:.1f}% shows improving profitability"),
    Rule("growth", "eps_growth", "lt", -10, -15, "negative",
         "Declining EPS growth of {value:.1f}% indicates profitability challenges"),
)

# Ratios reported per category, with the benchmark field each is compared to
# (None when there is no meaningful benchmark).
CATEGORY_RATIOS: Mapping[str, tuple[tuple[str, str | None], ...]] = MappingProxyType({
    "valuation": (("pe_ratio", "pe_ratio"), ("pb_ratio", "pb_ratio")),
    "profitability": (
        ("roe", "roe"),
        ("roa", "roa"),
        ("profit_margin", "profit_margin"),
        ("operating_margin", "operating_margin"),
    ),
    "liquidity": (("current_ratio", "current_ratio"), ("quick_ratio", "quick_ratio")),
    "leverage": (("debt_to_equity", "debt_to_equity"),),
    "dividend": (("dividend_yield", "dividend_yield"), ("dividend_per_share", None)),
    "growth": (("revenue_growth", "revenue_growth"), ("eps_growth", "eps_growth")),
})


def rule_chains(category: str) -> list[tuple[str, list[Rule]]]:
    """Rules of one category grouped by ratio, in table order."""
    chains: dict[str, list[Rule]] = {}
    for rule in FUNDAMENTAL_RULES:
        if rule.category == category:
            chains.setdefault(rule.ratio, []).append(rule)
    return list(chains.items())
