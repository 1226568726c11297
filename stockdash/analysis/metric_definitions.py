"""Tooltip definitions for the ratios shown on the fundamentals panel."""
from types import MappingProxyType

from stockdash.schemas.fundamental import MetricDefinition

METRIC_DEFINITIONS = MappingProxyType({
    "pe_ratio": MetricDefinition(
        name="Price-to-Earnings Ratio",
        description="Current share price divided by earnings per share. "
                    "Indicates how much investors are willing to pay per dollar of earnings.",
        formula="Stock Price ÷ Earnings Per Share",
        good_range="10-25 (varies by industry)",
    ),
    "pb_ratio": MetricDefinition(
        name="Price-to-Book Ratio",
        description="Market value compared to book value. Shows if stock is over or undervalued relative to assets.",
        formula="Market Price per Share ÷ Book Value per Share",
        good_range="1-3 (varies by industry)",
    ),
    "roe": MetricDefinition(
        name="Return on Equity",
        description="Measures profitability by revealing how much profit a company generates "
                    "with shareholders' equity.",
        formula="Net Income ÷ Shareholders' Equity × 100",
        good_range="15%+ is generally good",
    ),
    "roa": MetricDefinition(
        name="Return on Assets",
        description="Indicates how efficiently a company uses its assets to generate profit.",
        formula="Net Income ÷ Total Assets × 100",
        good_range="5%+ is generally good",
    ),
    "debt_to_equity": MetricDefinition(
        name="Debt-to-Equity Ratio",
        description="Measures financial leverage by comparing total debt to shareholders' equity.",
        formula="Total Debt ÷ Shareholders' Equity",
        good_range="0.3-0.6 (varies by industry)",
    ),
    "current_ratio": MetricDefinition(
        name="Current Ratio",
        description="Measures ability to pay short-term obligations with current assets.",
        formula="Current Assets ÷ Current Liabilities",
        good_range="1.5-3.0",
    ),
    "quick_ratio": MetricDefinition(
        name="Quick Ratio",
        description="Like current ratio but excludes inventory. More conservative liquidity measure.",
        formula="(Current Assets - Inventory) ÷ Current Liabilities",
        good_range="1.0-2.0",
    ),
    "profit_margin": MetricDefinition(
        name="Net Profit Margin",
        description="Percentage of revenue that remains as profit after all expenses.",
        formula="Net Income ÷ Total Revenue × 100",
        good_range="10%+ is generally good",
    ),
    "dividend_yield": MetricDefinition(
        name="Dividend Yield",
        description="Annual dividend payment as a percentage of stock price.",
        formula="Annual Dividends per Share ÷ Price per Share × 100",
        good_range="2-6% for dividend stocks",
    ),
    "eps": MetricDefinition(
        name="Earnings Per Share",
        description="Company's profit divided by the outstanding shares of common stock.",
        formula="Net Income ÷ Outstanding Shares",
        good_range="Positive and growing",
    ),
    "book_value": MetricDefinition(
        name="Book Value per Share",
        description="Company's equity divided by number of outstanding shares.",
        formula="Shareholders' Equity ÷ Outstanding Shares",
        good_range="Higher than market price suggests undervaluation",
    ),
    "operating_margin": MetricDefinition(
        name="Operating Margin",
        description="Operating income as a percentage of revenue, showing operational efficiency.",
        formula="Operating Income ÷ Revenue × 100",
        good_range="15%+ is generally good",
    ),
})
