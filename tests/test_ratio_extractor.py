import math

import pytest

from stockdash.analysis.ratio_extractor import RATIO_KEYS, extract_key_ratios
from stockdash.schemas.fundamental import KeyRatios
from tests.payloads import METRICS


def test_extracts_canonical_ratios():
    ratios = extract_key_ratios(METRICS["metric"])
    assert ratios.pe_ratio == 18.0
    assert ratios.pb_ratio == 40.0
    assert ratios.roe == 150.0
    assert ratios.debt_to_equity == 1.8
    assert ratios.dividend_yield == 0.5
    assert ratios.eps is None


def test_ttm_preferred_over_annual():
    ratios = extract_key_ratios({"roeRfy": 12.0, "roeTTM": 15.2})
    assert ratios.roe == 15.2


def test_falls_back_to_later_synonym():
    ratios = extract_key_ratios({"peTTM": None, "peAnnual": 22.5})
    assert ratios.pe_ratio == 22.5


@pytest.mark.parametrize("bad", ["12.5", True, math.nan, math.inf, None, [1]])
def test_non_numeric_values_are_skipped(bad):
    ratios = extract_key_ratios({"peBasicExclExtraTTM": bad, "peTTM": 30})
    assert ratios.pe_ratio == 30.0


def test_integers_become_floats():
    ratios = extract_key_ratios({"currentRatioQuarterly": 2})
    assert ratios.current_ratio == 2.0
    assert isinstance(ratios.current_ratio, float)


@pytest.mark.parametrize("metrics", [None, [], "metric", 3])
def test_non_mapping_input_yields_empty_ratios(metrics):
    assert extract_key_ratios(metrics) == KeyRatios()


def test_every_canonical_field_has_synonyms():
    assert set(RATIO_KEYS) == set(KeyRatios.model_fields)
    assert all(RATIO_KEYS.values())
