# 1- 2- device breakdown synthesis

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np

logger = logging.getLogger(__name__)

# device -> (low, high) percentage-of-audience before normalization
SYNTHETIC_DEVICE_RANGES = {
    "Mobile": (25.0, 75.0),
    "Desktop": (10.0, 40.0),
    "Tablet": (2.0, 12.0),
}


def synthesize_device_breakdown(rng: np.random.Generator) -> List[Dict[str, Any]]:
    """
    Draw one random share per device type and rescale so they sum to 100.
    """
    raw = {
        device: rng.uniform(low, high)
        for device, (low, high) in SYNTHETIC_DEVICE_RANGES.items()
    }
    total = sum(raw.values())

    return [
        {"device_type": device, "percentage_of_audience": value / total * 100}
        for device, value in raw.items()
    ]


def with_device_breakdown(
        document: Dict[str, Any],
        rng: Optional[np.random.Generator] = None,
) -> Dict[str, Any]:
    """
    Return a copy of `document` where every campaign has a device_breakdown.

    Older payloads ship without the field; those campaigns get a synthetic,
    normalized split. Campaigns that already carry one are left as-is and
    the input document is not modified.
    """
    rng = rng if rng is not None else np.random.default_rng()

    campaigns = []
    synthesized = 0

    for campaign in document.get("campaigns", []):
        if campaign.get("device_breakdown") is None:
            campaign = {**campaign, "device_breakdown": synthesize_device_breakdown(rng)}
            synthesized += 1
        campaigns.append(campaign)

    if synthesized:
        logger.info("Synthesized device breakdown for %d campaign(s)", synthesized)

    return {**document, "campaigns": campaigns}
