from __future__ import annotations

import pandas as pd
import pytest

from campaign_core.n3_1_apportion import (
    add_derived_metrics,
    apportion,
    round_count,
    round_for_display,
    safe_ratio,
)


def test_apportion_takes_percentage_share():
    assert apportion(1000, 25) == 250
    assert apportion(3.5, 50) == pytest.approx(1.75)


def test_apportion_does_not_validate_range():
    assert apportion(100, 150) == 150
    assert apportion(100, -10) == -10


def test_round_count_rounds_half_up():
    assert round_count(2.5) == 3
    assert round_count(3.5) == 4
    assert round_count(2.49) == 2
    assert isinstance(round_count(2.5), int)


def test_round_count_on_series_keeps_index():
    s = pd.Series([0.5, 1.4, 1.5], index=["a", "b", "c"])
    out = round_count(s)
    assert list(out) == [1, 1, 2]
    assert list(out.index) == ["a", "b", "c"]


def test_safe_ratio_zero_denominator():
    assert safe_ratio(5, 0) == 0.0
    assert safe_ratio(5, 10, 100) == 50.0


def test_derived_metrics_zero_denominators_are_zero():
    df = pd.DataFrame({
        "impressions": [0, 100],
        "clicks": [0, 0],
        "conversions": [0, 0],
        "spend": [0.0, 10.0],
        "revenue": [0.0, 0.0],
    })
    out = add_derived_metrics(df, cost_ratios=True)

    assert list(out["ctr"]) == [0.0, 0.0]
    assert list(out["conversion_rate"]) == [0.0, 0.0]
    assert list(out["cpc"]) == [0.0, 0.0]
    assert list(out["cpa"]) == [0.0, 0.0]
    assert list(out["roas"]) == [0.0, 0.0]
    assert not out.isna().any().any()


def test_derived_metrics_come_from_summed_bases():
    # bucket A: 100 imp / 10 clk (10%), bucket B: 200 imp / 10 clk (5%)
    merged = pd.DataFrame({"impressions": [300], "clicks": [20], "conversions": [2]})
    out = round_for_display(add_derived_metrics(merged))

    assert out.loc[0, "ctr"] == 6.67
    assert out.loc[0, "ctr"] != 7.5
    assert out.loc[0, "conversion_rate"] == 10.0


def test_derived_metrics_does_not_mutate_input():
    df = pd.DataFrame({"impressions": [10], "clicks": [1], "conversions": [1]})
    add_derived_metrics(df)
    assert "ctr" not in df.columns


def test_derived_metrics_on_empty_frame_adds_columns():
    df = pd.DataFrame(columns=["impressions", "clicks", "conversions", "spend", "revenue"])
    out = add_derived_metrics(df, cost_ratios=True)
    assert {"ctr", "conversion_rate", "cpc", "cpa", "roas"}.issubset(out.columns)
    assert out.empty
