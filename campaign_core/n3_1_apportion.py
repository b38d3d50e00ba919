# 3- 1- apportionment + derived metrics

from __future__ import annotations

import numpy as np
import pandas as pd


def apportion(total: float, percentage: float) -> float:
    """
    Share of `total` that belongs to a sub-category holding `percentage`
    of the audience. Percentages outside [0, 100] are not validated.
    """
    return total * (percentage / 100)


def round_count(value):
    """
    Round half-up to a whole number (2.5 -> 3, not banker's 2).
    Works on scalars, numpy arrays and pandas Series.
    """
    rounded = np.floor(np.asarray(value, dtype=float) + 0.5)
    if isinstance(value, pd.Series):
        return pd.Series(rounded, index=value.index, name=value.name).astype("int64")
    if np.ndim(rounded) == 0:
        return int(rounded)
    return rounded.astype("int64")


def safe_ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator * scale


# ========================================================
# Derived metrics (Source of Truth: summed bases)
# ========================================================
def _ratio_col(df: pd.DataFrame, num: str, den: str, scale: float = 1.0) -> pd.Series:
    return (
        (df[num] / df[den].replace({0: np.nan})) * scale
    ).replace([np.inf, -np.inf], np.nan).fillna(0.0)


def add_derived_metrics(df: pd.DataFrame, cost_ratios: bool = False) -> pd.DataFrame:
    """
    Recompute rate metrics from summed numerators / denominators.

    - ctr             = clicks / impressions * 100
    - conversion_rate = conversions / clicks * 100
    - (cost_ratios) cpc = spend / clicks, cpa = spend / conversions,
      roas = revenue / spend

    Zero denominators yield 0, never NaN. Values are left unrounded;
    `round_for_display` handles the 2 dp presentation.
    """
    df = df.copy()

    if df.empty:
        for col in ["ctr", "conversion_rate"] + (["cpc", "cpa", "roas"] if cost_ratios else []):
            df[col] = pd.Series(dtype=float)
        return df

    df["ctr"] = _ratio_col(df, "clicks", "impressions", 100)
    df["conversion_rate"] = _ratio_col(df, "conversions", "clicks", 100)

    if cost_ratios:
        df["cpc"] = _ratio_col(df, "spend", "clicks")
        df["cpa"] = _ratio_col(df, "spend", "conversions")
        df["roas"] = _ratio_col(df, "revenue", "spend")

    return df


def round_for_display(df: pd.DataFrame, columns=None, decimals: int = 2) -> pd.DataFrame:
    columns = columns or [
        c for c in ["ctr", "conversion_rate", "cpc", "cpa", "roas"] if c in df.columns
    ]
    df = df.copy()
    if columns:
        df[columns] = df[columns].round(decimals)
    return df
