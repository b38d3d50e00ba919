from __future__ import annotations

import json
from unittest.mock import Mock

import pytest
import requests

from campaign_core.n2_1_api_ingestion import (
    FetchError,
    fetch_marketing_data,
    load_marketing_data,
    load_marketing_file,
)


def _session(response=None, error=None):
    session = Mock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


def _response(payload=None, status=200, json_error=None):
    r = Mock()
    r.status_code = status
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(response=r)
    else:
        r.raise_for_status.return_value = None
    if json_error is not None:
        r.json.side_effect = json_error
    else:
        r.json.return_value = payload
    return r


def test_fetch_returns_normalized_document(payload):
    session = _session(_response(payload))

    doc = fetch_marketing_data(url="http://api.test/data", timeout=5, session=session)

    session.get.assert_called_once_with("http://api.test/data", timeout=5)
    assert [c["name"] for c in doc["campaigns"]] == ["Summer Sale", "Brand Push"]


def test_http_error_becomes_fetch_error():
    session = _session(_response(status=500))

    with pytest.raises(FetchError, match="HTTP 500"):
        fetch_marketing_data(url="http://api.test/data", session=session)


def test_connection_error_becomes_fetch_error():
    session = _session(error=requests.ConnectionError("refused"))

    with pytest.raises(FetchError, match="Failed to fetch data"):
        fetch_marketing_data(url="http://api.test/data", session=session)


def test_non_json_body_becomes_fetch_error():
    session = _session(_response(json_error=ValueError("bad json")))

    with pytest.raises(FetchError, match="not valid JSON"):
        fetch_marketing_data(url="http://api.test/data", session=session)


def test_payload_without_campaigns_is_rejected():
    session = _session(_response({"data": []}))

    with pytest.raises(FetchError, match="Malformed payload"):
        fetch_marketing_data(url="http://api.test/data", session=session)


def test_fetch_makes_a_single_attempt():
    session = _session(error=requests.Timeout("slow"))

    with pytest.raises(FetchError):
        fetch_marketing_data(url="http://api.test/data", session=session)

    assert session.get.call_count == 1


def test_url_and_timeout_default_from_env(monkeypatch, payload):
    monkeypatch.setenv("MARKETING_DATA_URL", "http://env.test/marketing")
    monkeypatch.setenv("MARKETING_REQUEST_TIMEOUT", "12")
    session = _session(_response(payload))

    fetch_marketing_data(session=session)

    session.get.assert_called_once_with("http://env.test/marketing", timeout=12.0)


def test_load_file(tmp_path, payload):
    path = tmp_path / "marketing.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    doc = load_marketing_file(path)

    assert len(doc["campaigns"]) == 2


def test_load_missing_file():
    with pytest.raises(FetchError, match="not found"):
        load_marketing_file("/nonexistent/marketing.json")


def test_load_invalid_file(tmp_path):
    path = tmp_path / "marketing.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(FetchError, match="Could not read"):
        load_marketing_file(path)


def test_load_marketing_data_prefers_env_path(monkeypatch, tmp_path, payload):
    path = tmp_path / "marketing.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    monkeypatch.setenv("MARKETING_DATA_PATH", str(path))

    doc = load_marketing_data()

    assert doc["company_info"]["name"] == "Acme Retail"
