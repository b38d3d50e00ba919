# file1 - export every view's chart-ready series

from __future__ import annotations

import argparse
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from campaign_core.n0_1_config import configure_logging, device_seed
from campaign_core.n1_1_document import campaign_totals_frame
from campaign_core.n1_2_device_synthesis import with_device_breakdown
from campaign_core.n2_1_api_ingestion import fetch_marketing_data, load_marketing_file
from campaign_core.n3_4_views import (
    REGION_CHARTS,
    age_group_chart_data,
    demographic_tables,
    device_campaign_tables,
    device_chart_data,
    regional_bubbles,
    regional_data,
    weekly_chart_data,
)

# =============================
# CONFIG
# =============================
DEFAULT_OUTPUT_DIR = Path("data/views")


def _frames(document: Dict[str, Any]) -> Dict[str, Callable[[], pd.DataFrame]]:
    """output name -> builder; builders run lazily so progress is per file."""
    frames: Dict[str, Callable[[], pd.DataFrame]] = {
        "campaign_totals": lambda: campaign_totals_frame(document),
        "weekly": lambda: weekly_chart_data(document),
        "regional": lambda: regional_data(document),
        "device_spend": lambda: device_chart_data(document)["spend"],
        "device_revenue": lambda: device_chart_data(document)["revenue"],
        "age_group_spend": lambda: age_group_chart_data(document)["spend"],
        "age_group_revenue": lambda: age_group_chart_data(document)["revenue"],
    }

    for device in ("Mobile", "Desktop", "Tablet"):
        frames[f"device_campaigns_{device.lower()}"] = (
            lambda d=device: device_campaign_tables(document)[d]
        )

    for gender in ("Male", "Female"):
        frames[f"demographic_{gender.lower()}"] = (
            lambda g=gender: demographic_tables(document)[g]
        )

    for _, metric, min_r, max_r, _ in REGION_CHARTS:
        frames[f"bubbles_{metric}"] = (
            lambda m=metric, lo=min_r, hi=max_r: regional_bubbles(document, m, lo, hi)
        )

    return frames


# =============================
# EXPORT PIPELINE
# =============================
def run_export(
        *,
        output_dir: Path,
        source_path: Optional[Path] = None,
        source_url: Optional[str] = None,
        seed: Optional[int] = None,
) -> Dict[str, Path]:
    """
    Fetch the marketing document once and write each view's series to CSV.

    Flow:
    fetch / read
    -> device breakdown synthesis (older payloads)
    -> merge-reduce per view
    -> write outputs
    """
    print("\n===============================")
    print("⬇️ VIEW EXPORT START")
    print("===============================")

    output_dir.mkdir(parents=True, exist_ok=True)

    if source_path is not None:
        document = load_marketing_file(source_path)
    else:
        document = fetch_marketing_data(url=source_url)

    if not document["campaigns"]:
        raise RuntimeError("Marketing document contains no campaigns.")

    document = with_device_breakdown(document, rng=np.random.default_rng(seed))

    written: Dict[str, Path] = {}
    frames = _frames(document)

    for name, build in tqdm(frames.items(), desc="Views", unit="file"):
        df = build()
        path = output_dir / f"{name}.csv"
        df.to_csv(path, index=False)
        written[name] = path

    print("✅ VIEW EXPORT COMPLETE.")
    print(f"Campaigns -> {len(document['campaigns'])}")
    print(f"Files     -> {len(written)}")
    print(f"Saved     -> {output_dir.resolve()}")
    print(f"Run at    -> {datetime.utcnow().isoformat()}")

    return written


# =============================
# CLI
# =============================
if __name__ == "__main__":
    parser = argparse.ArgumentParser("Export dashboard view series")

    parser.add_argument(
        "--source-path",
        type=Path,
        default=os.getenv("MARKETING_DATA_PATH"),
        help="Local JSON payload. CLI > ENV. Falls back to the API.",
    )
    parser.add_argument(
        "--source-url",
        default=None,
        help="Marketing API endpoint (defaults to MARKETING_DATA_URL).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=device_seed(),
        help="Seed for synthetic device breakdowns.",
    )

    args = parser.parse_args()

    configure_logging()

    run_export(
        output_dir=args.output_dir,
        source_path=args.source_path,
        source_url=args.source_url,
        seed=args.seed,
    )
