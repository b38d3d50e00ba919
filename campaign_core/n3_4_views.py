# 3- 4- view shapes

# ========================================================
# MARK: DOCUMENT -> CHART-READY SERIES, ONE BLOCK PER PAGE
# ========================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from campaign_core.n1_1_document import ADDITIVE_METRICS
from campaign_core.n3_1_apportion import add_derived_metrics, round_for_display, safe_ratio
from campaign_core.n3_2_merge_reduce import (
    DEMOGRAPHIC,
    DEVICE,
    REGIONAL,
    WEEKLY,
    flatten_breakdown,
    merge_reduce,
)
from campaign_core.n3_3_geocode import CoordinateResolver, scale_bubbles, to_bubble_points

DEVICE_TYPES = ["Mobile", "Desktop", "Tablet"]
GENDERS = ["Male", "Female"]
CARD_METRICS = ["clicks", "spend", "revenue"]

PERFORMANCE_COLUMNS = ["impressions", "clicks", "conversions", "ctr", "conversion_rate"]

# (title, metric, min_radius, max_radius, is_money)
REGION_CHARTS = [
    ("Revenue by Region", "revenue", 10, 60, True),
    ("Spend by Region", "spend", 10, 60, True),
    ("Impressions by Region", "impressions", 8, 50, False),
    ("Conversions by Region", "conversions", 8, 50, False),
]


def _campaigns(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    return document.get("campaigns") or []


def _bar_series(df: pd.DataFrame, label_col: str, metric: str) -> pd.DataFrame:
    return (
        df[[label_col, metric]]
        .rename(columns={label_col: "label", metric: "value"})
        .reset_index(drop=True)
    )


def _cards(merged: pd.DataFrame, key: str, labels: List[str]) -> Dict[str, Dict[str, float]]:
    cards = {label: {m: 0 for m in CARD_METRICS} for label in labels}

    if merged.empty:
        return cards

    totals = merged.groupby(key, sort=False)[CARD_METRICS].sum()
    for label in labels:
        if label in totals.index:
            cards[label] = {m: totals.at[label, m].item() for m in CARD_METRICS}

    return cards


# ==================================================
# Overview
# ==================================================
def portfolio_summary(document: Dict[str, Any]) -> Dict[str, float]:
    """Totals across all campaigns plus rates derived from those totals."""
    totals = {
        m: sum(c.get(m, 0) for c in _campaigns(document))
        for m in ADDITIVE_METRICS
    }
    totals["campaigns"] = len(_campaigns(document))
    totals["ctr"] = safe_ratio(totals["clicks"], totals["impressions"], 100)
    totals["conversion_rate"] = safe_ratio(totals["conversions"], totals["clicks"], 100)
    totals["cpc"] = safe_ratio(totals["spend"], totals["clicks"])
    totals["cpa"] = safe_ratio(totals["spend"], totals["conversions"])
    totals["roas"] = safe_ratio(totals["revenue"], totals["spend"])
    return totals


# ==================================================
# Weekly view
# ==================================================
def _week_label(value: Any) -> str:
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return "Unknown" if pd.isna(value) else str(value)
    return f"{ts:%b} {ts.day}"


def weekly_chart_data(document: Dict[str, Any]) -> pd.DataFrame:
    """
    Merged weekly buckets, ascending by week_start, with a short
    "Jan 5" style `name` for the x axis.
    """
    weekly = merge_reduce(_campaigns(document), WEEKLY)
    weekly.insert(0, "name", weekly["week_start"].map(_week_label).astype(object))
    return round_for_display(weekly)


# ==================================================
# Device view
# ==================================================
def device_metrics(document: Dict[str, Any]) -> Dict[str, Dict[str, float]]:
    """Clicks / spend / revenue cards for Mobile, Desktop and Tablet."""
    merged = merge_reduce(_campaigns(document), DEVICE)
    return _cards(merged, "device_type", DEVICE_TYPES)


def device_chart_data(document: Dict[str, Any]) -> Dict[str, pd.DataFrame]:
    merged = merge_reduce(_campaigns(document), DEVICE)
    return {
        "spend": _bar_series(merged, "device_type", "spend"),
        "revenue": _bar_series(merged, "device_type", "revenue"),
    }


def device_campaign_tables(document: Dict[str, Any]) -> Dict[str, pd.DataFrame]:
    """
    Per-campaign performance split by device (not merged across campaigns):
    one table per device type.
    """
    flat = add_derived_metrics(flatten_breakdown(_campaigns(document), DEVICE))
    flat = round_for_display(flat)
    columns = ["campaign_name", "device_type", *PERFORMANCE_COLUMNS]

    return {
        device: flat.loc[flat["device_type"] == device, columns].reset_index(drop=True)
        for device in DEVICE_TYPES
    }


# ==================================================
# Demographic view
# ==================================================
def demographic_metrics(document: Dict[str, Any]) -> Dict[str, Dict[str, float]]:
    merged = merge_reduce(_campaigns(document), DEMOGRAPHIC)
    return _cards(merged, "gender", GENDERS)


def age_group_chart_data(document: Dict[str, Any]) -> Dict[str, pd.DataFrame]:
    merged = merge_reduce(_campaigns(document), DEMOGRAPHIC)

    by_age = (
        merged
        .groupby("age_group", sort=False, dropna=False)[["spend", "revenue"]]
        .sum()
        .reset_index()
    )
    by_age = by_age.sort_values("age_group", key=lambda s: s.astype(str), kind="mergesort")

    return {
        "spend": _bar_series(by_age, "age_group", "spend"),
        "revenue": _bar_series(by_age, "age_group", "revenue"),
    }


def demographic_tables(document: Dict[str, Any]) -> Dict[str, pd.DataFrame]:
    """Merged (age_group, gender) buckets split into one table per gender."""
    merged = round_for_display(merge_reduce(_campaigns(document), DEMOGRAPHIC))
    columns = ["age_group", "gender", *PERFORMANCE_COLUMNS]

    return {
        gender: merged.loc[merged["gender"] == gender, columns].reset_index(drop=True)
        for gender in GENDERS
    }


# ==================================================
# Region view
# ==================================================
def regional_data(document: Dict[str, Any]) -> pd.DataFrame:
    return merge_reduce(_campaigns(document), REGIONAL)


def regional_bubbles(
        document: Dict[str, Any],
        value_type: str,
        min_radius: float,
        max_radius: float,
        resolver: Optional[CoordinateResolver] = None,
) -> pd.DataFrame:
    points = to_bubble_points(regional_data(document), value_type, resolver)
    return scale_bubbles(points, min_radius=min_radius, max_radius=max_radius)
