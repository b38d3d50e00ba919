# 1- 1- document normalization

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

import pandas as pd

logger = logging.getLogger(__name__)

COUNT_METRICS = ["impressions", "clicks", "conversions"]
MONEY_METRICS = ["spend", "revenue"]
ADDITIVE_METRICS = COUNT_METRICS + MONEY_METRICS

BREAKDOWN_FIELDS = [
    "weekly_performance",
    "regional_performance",
    "demographic_breakdown",
    "device_breakdown",
]


# ----------------------------------
# Internal: numeric coercion
# ----------------------------------
def _to_number(value: Any, integer: bool = False) -> float:
    """
    Coerce a JSON scalar into a finite non-NaN number.
    Anything unusable becomes 0.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0 if integer else 0.0

    if math.isnan(number) or math.isinf(number):
        return 0 if integer else 0.0

    return int(round(number)) if integer else number


def _normalize_campaign(campaign: Dict[str, Any], position: int) -> Dict[str, Any]:
    out = dict(campaign)

    out["id"] = campaign.get("id", position)
    out["name"] = campaign.get("name") or f"Campaign {position + 1}"

    for metric in COUNT_METRICS:
        out[metric] = _to_number(campaign.get(metric), integer=True)
    for metric in MONEY_METRICS:
        out[metric] = _to_number(campaign.get(metric))

    for field in BREAKDOWN_FIELDS:
        entries = campaign.get(field)

        if field == "device_breakdown" and entries is None:
            # absence is meaningful: device synthesis fills it in later
            out.pop(field, None)
            continue

        if not isinstance(entries, list):
            if entries is not None:
                logger.warning(
                    "Campaign %r: %s is not a list, treating as empty", out["name"], field
                )
            out[field] = []
            continue

        out[field] = [dict(e) for e in entries if isinstance(e, dict)]

    return out


# ==================================================
# Public API
# ==================================================
def normalize_document(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build a clean copy of the fetched marketing document.

    Rules:
    - `campaigns` must be a list, otherwise ValueError
    - scalar totals coerced to numbers (counts -> int, money -> float)
    - null / missing breakdown lists become []
    - a missing device_breakdown stays missing (see device synthesis)
    - input payload is never mutated
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("campaigns"), list):
        raise ValueError("Malformed payload: expected an object with a 'campaigns' list")

    document = {k: v for k, v in payload.items() if k != "campaigns"}
    document["campaigns"] = [
        _normalize_campaign(c, i)
        for i, c in enumerate(payload["campaigns"])
        if isinstance(c, dict)
    ]
    return document


def campaign_totals_frame(document: Dict[str, Any]) -> pd.DataFrame:
    """One row per campaign with its scalar totals."""
    rows: List[Dict[str, Any]] = [
        {
            "campaign_id": c["id"],
            "campaign_name": c["name"],
            **{m: c[m] for m in ADDITIVE_METRICS},
        }
        for c in document.get("campaigns", [])
    ]
    return pd.DataFrame(rows, columns=["campaign_id", "campaign_name", *ADDITIVE_METRICS])
