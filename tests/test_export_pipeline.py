from __future__ import annotations

import json

import pandas as pd
import pytest

from pipelines.file1_export_views import run_export


def test_export_writes_every_view(tmp_path, payload):
    source = tmp_path / "marketing.json"
    source.write_text(json.dumps(payload), encoding="utf-8")
    out = tmp_path / "views"

    written = run_export(output_dir=out, source_path=source, seed=3)

    assert {"weekly", "regional", "bubbles_revenue", "demographic_male"}.issubset(written)
    assert all(p.exists() for p in written.values())

    weekly = pd.read_csv(written["weekly"])
    assert list(weekly["name"]) == ["Jan 1", "Jan 8"]

    bubbles = pd.read_csv(written["bubbles_revenue"])
    assert "Atlantis" not in set(bubbles["region"])

    # campaign without a device split gets a synthetic one
    tablet = pd.read_csv(written["device_campaigns_tablet"])
    assert list(tablet["campaign_name"]) == ["Brand Push"]


def test_export_rejects_empty_document(tmp_path):
    source = tmp_path / "marketing.json"
    source.write_text(json.dumps({"campaigns": []}), encoding="utf-8")

    with pytest.raises(RuntimeError, match="no campaigns"):
        run_export(output_dir=tmp_path / "views", source_path=source)
