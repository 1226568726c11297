from stockdash.analysis.fundamental_analyzer import FundamentalAnalyzer, analyze_fundamentals
from stockdash.analysis.fundamental_rules import CATEGORIES, FUNDAMENTAL_RULES, rule_chains
from stockdash.analysis.industry_benchmarks import DEFAULT_BENCHMARK, TECHNOLOGY
from stockdash.schemas.fundamental import IndustryBenchmark, KeyRatios
from stockdash.schemas.market import CompanyProfile
from tests.payloads import METRICS


def analyze(benchmark=DEFAULT_BENCHMARK, **ratios):
    return FundamentalAnalyzer().analyze(KeyRatios(**ratios), benchmark)


def test_all_null_ratios_score_baseline_everywhere():
    result = analyze()
    assert result.available
    for name in CATEGORIES:
        category = getattr(result, name)
        assert category.score == 50
        assert category.insights == []
    assert result.overall.score == 50
    assert result.overall.label == "Fair"
    assert result.overall.summary == "The company shows mixed fundamental signals with 0 positive and 0 concerning indicators."


def test_low_pe_against_benchmark_is_positive():
    result = analyze(IndustryBenchmark(pe_ratio=20), pe_ratio=10)
    assert result.valuation.score == 65
    assert len(result.valuation.insights) == 1
    insight = result.valuation.insights[0]
    assert insight.type == "positive"
    assert "10.0" in insight.text
    assert result.valuation.ratios["pe_ratio"].value == 10
    assert result.valuation.ratios["pe_ratio"].benchmark == 20


def test_pe_rules_are_an_exclusive_chain():
    high = analyze(IndustryBenchmark(pe_ratio=20), pe_ratio=31)
    fair = analyze(IndustryBenchmark(pe_ratio=20), pe_ratio=20)
    assert high.valuation.score == 40
    assert high.valuation.insights[0].type == "negative"
    assert fair.valuation.score == 50
    assert [i.type for i in fair.valuation.insights] == ["neutral"]


def test_pb_below_book_value():
    result = analyze(pb_ratio=0.8)
    assert result.valuation.score == 60
    assert "0.80" in result.valuation.insights[0].text


def test_profitability_rules():
    result = analyze(roe=20, profit_margin=3)
    assert result.profitability.score == 55
    assert [i.type for i in result.profitability.insights] == ["positive", "negative"]
    assert result.profitability.ratios["roa"].benchmark == 5
    assert result.profitability.ratios["operating_margin"].benchmark == 15


def test_liquidity_rules():
    assert analyze(current_ratio=2.0, quick_ratio=1.2).liquidity.score == 75
    assert analyze(current_ratio=0.5).liquidity.score == 35
    assert analyze(current_ratio=1.5).liquidity.insights == []


def test_leverage_zero_debt_counts():
    result = analyze(debt_to_equity=0.0)
    assert result.leverage.score == 65
    assert result.leverage.insights[0].type == "positive"


def test_leverage_neutral_band():
    result = analyze(debt_to_equity=0.5)
    assert result.leverage.score == 50
    assert result.leverage.insights[0].type == "neutral"


def test_dividend_rules():
    high = analyze(dividend_yield=7.5)
    attractive = analyze(dividend_yield=6.0)
    none_paid = analyze(dividend_yield=0.0)
    small = analyze(dividend_yield=1.0)

    assert high.dividend.score == 45
    assert high.dividend.insights[0].type == "warning"
    assert "unsustainable" in high.dividend.insights[0].text
    assert attractive.dividend.score == 60
    assert none_paid.dividend.score == 50
    assert none_paid.dividend.insights[0].type == "neutral"
    assert small.dividend.insights == []


def test_growth_rules_and_clamp():
    strong = analyze(revenue_growth=35, eps_growth=40)
    weak = analyze(revenue_growth=-5, eps_growth=-20)
    assert strong.growth.score == 85
    assert weak.growth.score == 20


def test_overall_weighting_and_summary():
    result = analyze_fundamentals(METRICS["metric"], CompanyProfile(finnhubIndustry="Technology"))

    assert result.valuation.score == 60
    assert result.profitability.score == 75
    assert result.liquidity.score == 35
    assert result.leverage.score == 35
    assert result.dividend.score == 50
    assert result.growth.score == 50
    assert result.overall.score == 54
    assert result.overall.label == "Fair"
    assert result.overall.summary.endswith("with 3 positive and 3 concerning indicators.")
    assert result.valuation.ratios["pe_ratio"].benchmark == TECHNOLOGY.pe_ratio


def test_overall_labels():
    good = analyze(
        pe_ratio=5, pb_ratio=0.5, roe=30, profit_margin=30,
        current_ratio=3, quick_ratio=2, debt_to_equity=0.1,
        dividend_yield=3, revenue_growth=30, eps_growth=30,
    )
    poor = analyze(
        pe_ratio=80, pb_ratio=10, roe=1, profit_margin=1,
        current_ratio=0.5, debt_to_equity=3,
        dividend_yield=9, revenue_growth=-10, eps_growth=-30,
    )
    assert good.overall.score == 73
    assert good.overall.label == "Good"
    assert good.overall.summary.startswith("The company shows strong fundamental metrics")
    assert poor.overall.label == "Poor"
    assert poor.overall.summary.startswith("The company faces some fundamental challenges")


def test_missing_metrics_is_unavailable():
    result = analyze_fundamentals(None, CompanyProfile(finnhubIndustry="Technology"))
    assert not result.available
    assert result.overall is None
    assert result.valuation is None
    assert result.message == "Fundamental data not available"


def test_analyzer_with_no_ratios_is_unavailable():
    assert not FundamentalAnalyzer().analyze(None, DEFAULT_BENCHMARK).available


def test_analysis_is_idempotent():
    first = analyze_fundamentals(METRICS["metric"]).model_dump_json()
    second = analyze_fundamentals(METRICS["metric"]).model_dump_json()
    assert first == second


def test_rule_table_is_well_formed():
    benchmark_fields = set(IndustryBenchmark.model_fields)
    ratio_fields = set(KeyRatios.model_fields)
    for rule in FUNDAMENTAL_RULES:
        assert rule.category in CATEGORIES
        assert rule.ratio in ratio_fields
        assert rule.relative_to is None or rule.relative_to in benchmark_fields
        rule.insight(1.0)  # template formats


def test_rule_chains_preserve_table_order():
    chains = dict(rule_chains("valuation"))
    assert [r.op for r in chains["pe_ratio"]] == ["lt", "gt", "any"]
