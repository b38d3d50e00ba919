# 2- 1- marketing API ingestion

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests

from campaign_core import n0_1_config as config
from campaign_core.n1_1_document import normalize_document

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The marketing document could not be loaded. `str(err)` is user-facing."""


# ----------------------------------
# Internal: payload -> normalized document
# ----------------------------------
def _to_document(payload: Any) -> Dict[str, Any]:
    try:
        return normalize_document(payload)
    except ValueError as err:
        raise FetchError(str(err)) from err


# ==================================================
# HTTP (single attempt, no retry)
# ==================================================
def fetch_marketing_data(
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    GET the campaign document from the marketing API.

    Handles:
    - connection errors / timeouts
    - non-2xx responses
    - non-JSON bodies
    - payloads without a `campaigns` list
    All of them surface as FetchError with a readable message.
    """
    url = url or config.data_url()
    timeout = timeout if timeout is not None else config.request_timeout()
    http = session or requests

    logger.info("Fetching marketing data from %s", url)

    try:
        r = http.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.HTTPError as err:
        status = err.response.status_code if err.response is not None else "?"
        raise FetchError(f"Failed to fetch data (HTTP {status})") from err
    except requests.RequestException as err:
        raise FetchError(f"Failed to fetch data: {err}") from err

    try:
        payload = r.json()
    except ValueError as err:
        raise FetchError("Failed to fetch data: response is not valid JSON") from err

    return _to_document(payload)


# ==================================================
# Local file (offline / demo)
# ==================================================
def load_marketing_file(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)

    logger.info("Loading marketing data from %s", path)

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as err:
        raise FetchError(f"Marketing data file not found: {path}") from err
    except (OSError, ValueError) as err:
        raise FetchError(f"Could not read marketing data file {path}: {err}") from err

    return _to_document(payload)


def load_marketing_data() -> Dict[str, Any]:
    """File if MARKETING_DATA_PATH is set, otherwise the HTTP endpoint."""
    path = config.data_path()
    if path is not None:
        return load_marketing_file(path)
    return fetch_marketing_data()
