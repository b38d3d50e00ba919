# 3- 2- merge-reduce

# ========================================================
# MARK: MERGE BREAKDOWNS INTO DIMENSION × KEY GRAIN
# ========================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from campaign_core.n1_1_document import ADDITIVE_METRICS, COUNT_METRICS
from campaign_core.n3_1_apportion import add_derived_metrics, apportion, round_count

logger = logging.getLogger(__name__)

PERCENTAGE_FIELD = "percentage_of_audience"


@dataclass(frozen=True)
class Dimension:
    """
    How one breakdown list is keyed, sourced and ordered.

    source:
        "apportioned" - contributions are campaign totals × entry percentage
        "entry"       - the entry carries its own absolute metrics; entries
                        without metrics but with a percentage are apportioned
    sort_as:
        None   - first-appearance order
        "date" - ascending by parsed `sort_by`
        "text" - lexicographic by `sort_by` (stable)
    """

    name: str
    field: str
    keys: Tuple[str, ...]
    source: str = "apportioned"
    sort_by: Optional[str] = None
    sort_as: Optional[str] = None
    carry: Tuple[str, ...] = field(default_factory=tuple)
    cost_ratios: bool = False


WEEKLY = Dimension(
    name="weekly",
    field="weekly_performance",
    keys=("week_start",),
    source="entry",
    sort_by="week_start",
    sort_as="date",
    carry=("week_end",),
)

REGIONAL = Dimension(
    name="regional",
    field="regional_performance",
    keys=("region", "country"),
    source="entry",
    cost_ratios=True,
)

DEMOGRAPHIC = Dimension(
    name="demographic",
    field="demographic_breakdown",
    keys=("age_group", "gender"),
    sort_by="age_group",
    sort_as="text",
)

DEVICE = Dimension(
    name="device",
    field="device_breakdown",
    keys=("device_type",),
)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return isinstance(value, float) and pd.isna(value)


# ----------------------------------
# Internal: one entry's contribution
# ----------------------------------
def _entry_contribution(
        campaign: Dict[str, Any],
        entry: Dict[str, Any],
        dimension: Dimension,
        metrics: List[str],
) -> Optional[Dict[str, float]]:
    has_own_metrics = any(entry.get(m) is not None for m in metrics)

    if dimension.source == "entry" and has_own_metrics:
        raw = {m: float(entry.get(m) or 0) for m in metrics}
    else:
        pct = entry.get(PERCENTAGE_FIELD)
        if pct is None:
            logger.warning(
                "Dropping %s entry without %s in campaign %r: %s",
                dimension.name, PERCENTAGE_FIELD, campaign.get("name"), entry,
            )
            return None
        raw = {m: apportion(float(campaign.get(m) or 0), float(pct)) for m in metrics}

    return {
        m: round_count(v) if m in COUNT_METRICS else v
        for m, v in raw.items()
    }


# ==================================================
# Flatten (campaign × entry grain)
# ==================================================
def flatten_breakdown(
        campaigns: Iterable[Dict[str, Any]],
        dimension: Dimension,
        metrics: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    One row per (campaign, breakdown entry) with the entry's contributions.

    Columns: campaign_id, campaign_name, <keys>, <carry>, percentage_of_audience,
    <metrics>. Campaigns with an empty or missing list contribute nothing;
    entries missing any key column are dropped with a warning.
    """
    metrics = list(metrics or ADDITIVE_METRICS)
    columns = [
        "campaign_id",
        "campaign_name",
        *dimension.keys,
        *dimension.carry,
        PERCENTAGE_FIELD,
        *metrics,
    ]

    rows: List[Dict[str, Any]] = []

    for campaign in campaigns:
        for entry in campaign.get(dimension.field) or []:
            missing = [k for k in dimension.keys if _is_missing(entry.get(k))]
            if missing:
                logger.warning(
                    "Dropping %s entry without %s in campaign %r: %s",
                    dimension.name, ", ".join(missing), campaign.get("name"), entry,
                )
                continue

            contribution = _entry_contribution(campaign, entry, dimension, metrics)
            if contribution is None:
                continue

            rows.append({
                "campaign_id": campaign.get("id"),
                "campaign_name": campaign.get("name"),
                **{k: entry.get(k) for k in dimension.keys},
                **{c: entry.get(c) for c in dimension.carry},
                PERCENTAGE_FIELD: entry.get(PERCENTAGE_FIELD),
                **contribution,
            })

    return pd.DataFrame(rows, columns=columns)


# ==================================================
# Merge-reduce (dimension key grain)
# ==================================================
def _order(df: pd.DataFrame, dimension: Dimension) -> pd.DataFrame:
    if not dimension.sort_by or df.empty:
        return df

    if dimension.sort_as == "date":
        key = lambda s: pd.to_datetime(s, errors="coerce")  # noqa: E731
    else:
        key = lambda s: s.astype(str)  # noqa: E731

    return df.sort_values(dimension.sort_by, key=key, kind="mergesort", na_position="last")


def merge_reduce(
        campaigns: Iterable[Dict[str, Any]],
        dimension: Dimension,
        metrics: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    Fold every campaign's breakdown entries into one row per dimension key.

    Operations:
    - apportion / take each entry's additive metrics
    - group by the dimension key (first-appearance order)
    - sum additive metrics, keep the first value of carried columns
    - recompute ctr / conversion_rate (and cpc / cpa / roas for regions)
      from the summed bases, never by averaging entry rates
    - order per dimension (weekly by date, demographic by age group)
    """
    metrics = list(metrics or ADDITIVE_METRICS)
    keys = list(dimension.keys)

    flat = flatten_breakdown(campaigns, dimension, metrics)

    agg_dict: Dict[str, str] = {m: "sum" for m in metrics}
    for col in dimension.carry:
        agg_dict[col] = "first"

    if flat.empty:
        merged = flat[keys + list(dimension.carry) + metrics].copy()
    else:
        merged = (
            flat
            .groupby(keys, sort=False, dropna=False)
            .agg(agg_dict)
            .reset_index()
        )

    if {"impressions", "clicks", "conversions"}.issubset(metrics):
        merged = add_derived_metrics(
            merged,
            cost_ratios=dimension.cost_ratios and {"spend", "revenue"}.issubset(metrics),
        )

    return _order(merged, dimension).reset_index(drop=True)
