"""
Fundamental analysis engine.
Scores six categories against industry benchmarks, each starting from a
neutral 50 and adjusted by the rules in fundamental_rules:
- Valuation (25%): P/E, P/B
- Profitability (25%): ROE, profit margin (ROA and operating margin reported)
- Liquidity (15%): current ratio, quick ratio
- Leverage (15%): debt-to-equity
- Dividend (10%): dividend yield
- Growth (10%): revenue and EPS growth YoY

Missing ratios contribute nothing, so a company with no data scores 50
everywhere. A missing metrics payload yields the "unavailable" analysis.
"""
import logging
from collections.abc import Mapping
from typing import Any

from stockdash.analysis.fundamental_rules import CATEGORIES, CATEGORY_RATIOS, rule_chains
from stockdash.analysis.grading import clamp, fundamental_label
from stockdash.analysis.industry_benchmarks import benchmark_for
from stockdash.analysis.ratio_extractor import extract_key_ratios
from stockdash.schemas.fundamental import FundamentalAnalysis, FundamentalOverall, IndustryBenchmark, KeyRatios
from stockdash.schemas.market import CompanyProfile
from stockdash.schemas.scoring import CategoryScore, RatioComparison

logger = logging.getLogger(__name__)

BASELINE = 50

CATEGORY_WEIGHTS: dict[str, float] = {
    "valuation": 0.25,
    "profitability": 0.25,
    "liquidity": 0.15,
    "leverage": 0.15,
    "dividend": 0.10,
    "growth": 0.10,
}


class FundamentalAnalyzer:
    def analyze(self, ratios: KeyRatios | None, benchmark: IndustryBenchmark) -> FundamentalAnalysis:
        if ratios is None:
            return FundamentalAnalysis.unavailable()

        categories = {name: self._score_category(name, ratios, benchmark) for name in CATEGORIES}
        return FundamentalAnalysis(
            key_ratios=ratios,
            overall=self._overall(categories),
            **categories,
        )

    def _score_category(self, category: str, ratios: KeyRatios, benchmark: IndustryBenchmark) -> CategoryScore:
        score = BASELINE
        insights = []
        for ratio, chain in rule_chains(category):
            value = getattr(ratios, ratio)
            if value is None:
                continue
            for rule in chain:
                if rule.matches(value, benchmark):
                    score += rule.delta
                    insights.append(rule.insight(value))
                    break

        comparisons = {
            ratio: RatioComparison(
                value=getattr(ratios, ratio),
                benchmark=getattr(benchmark, field) if field else None,
            )
            for ratio, field in CATEGORY_RATIOS[category]
        }
        return CategoryScore(score=int(clamp(score)), insights=insights, ratios=comparisons)

    def _overall(self, categories: dict[str, CategoryScore]) -> FundamentalOverall:
        weighted = sum(categories[name].score * weight for name, weight in CATEGORY_WEIGHTS.items())
        weighted = clamp(weighted)
        label, color = fundamental_label(weighted)
        return FundamentalOverall(
            score=int(round(weighted)),
            label=label,
            color=color,
            summary=self._summary(categories),
        )

    def _summary(self, categories: dict[str, CategoryScore]) -> str:
        insights = [i for category in categories.values() for i in category.insights]
        positives = sum(1 for i in insights if i.type == "positive")
        negatives = sum(1 for i in insights if i.type == "negative")

        if positives > negatives:
            opening = "The company shows strong fundamental metrics with "
        elif negatives > positives:
            opening = "The company faces some fundamental challenges with "
        else:
            opening = "The company shows mixed fundamental signals with "
        return f"{opening}{positives} positive and {negatives} concerning indicators."


def analyze_fundamentals(
    metrics: Mapping[str, Any] | None,
    profile: CompanyProfile | None = None,
) -> FundamentalAnalysis:
    """Extract ratios from a raw metric map and score them against the profile's industry."""
    if metrics is None:
        return FundamentalAnalysis.unavailable()

    industry = profile.finnhubIndustry if profile else None
    benchmark = benchmark_for(industry)
    logger.debug(f"Using {benchmark.name} benchmark for industry {industry!r}")
    return FundamentalAnalyzer().analyze(extract_key_ratios(metrics), benchmark)
