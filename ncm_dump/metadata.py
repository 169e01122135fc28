"""
ncm_dump.metadata
=================
Per-node lookups: how many configs are stored, and which one to fetch.
"""

from typing import Any

import requests
from requests.cookies import RequestsCookieJar

from .config import (
    AJAX_HEADERS,
    CONFIG_COUNT_URL,
    CONFIGS_PARAMS,
    CONFIGS_URL,
    REQUEST_TIMEOUT,
)
from .errors import NoConfigFileError, ResponseShapeError
from .inventory import as_text
from .logging_setup import log

_STRIP_CHARS = str.maketrans("", "", '[]"')


def clean(value: str) -> str:
    """Drop ``[``, ``]`` and ``"`` from *value*; a clean value is unchanged."""
    return value.translate(_STRIP_CHARS)


def _post_json(
    session: requests.Session,
    cookies: RequestsCookieJar,
    url: str,
    body: dict,
    params: dict | None = None,
) -> Any:
    resp = session.post(
        url,
        params=params,
        json=body,
        headers=AJAX_HEADERS,
        cookies=cookies,
        timeout=REQUEST_TIMEOUT,
    )
    try:
        return resp.json()
    except ValueError as exc:
        raise ResponseShapeError(
            f"Response from {url} is not JSON", status_code=resp.status_code
        ) from exc


def normalise_count(value: Any) -> str:
    """
    Turn the ``d`` value of GetConfigsTotalRows into a decimal string.

    The service returns either a JSON number or an already-stringified one;
    ``5``, ``5.0`` and ``"5"`` all become ``"5"``.
    """
    if isinstance(value, bool):
        raise ResponseShapeError(f"Config count is not a number: {value!r}", payload=value)
    if isinstance(value, (int, float)):
        try:
            return str(int(value))
        except (ValueError, OverflowError) as exc:
            # NaN / Infinity are accepted by the JSON decoder
            raise ResponseShapeError(
                f"Config count is not a finite number: {value!r}", payload=value
            ) from exc
    if isinstance(value, str):
        return value
    raise ResponseShapeError(f"Config count is not a number: {value!r}", payload=value)


def get_config_count(
    session: requests.Session, cookies: RequestsCookieJar, base: str, node_id: str
) -> str:
    """Return the number of stored configs for *node_id* as a string."""
    node_id = clean(node_id)
    payload = _post_json(session, cookies, base + CONFIG_COUNT_URL, {"nodeId": node_id})
    try:
        value = payload["d"]
    except (KeyError, TypeError) as exc:
        raise ResponseShapeError("Config count response has no 'd'", payload=payload) from exc
    count = normalise_count(value)
    log.debug("Node %s: %s stored config(s)", node_id, count)
    return count


def get_config_file_id(
    session: requests.Session, cookies: RequestsCookieJar, base: str, node_id: str
) -> str:
    """
    Return the id of the first config listed for *node_id* (sorted by name).

    Raises NoConfigFileError when the config table has no rows.
    """
    node_id = clean(node_id)
    body = {
        "nodeId": node_id,
        "start": "1",
        "showAllConfigs": "FALSE",
        "clientOffset": "240",
    }
    payload = _post_json(session, cookies, base + CONFIGS_URL, body, params=CONFIGS_PARAMS)
    try:
        rows = payload["d"]["DataTable"]["Rows"]
    except (KeyError, TypeError) as exc:
        raise ResponseShapeError(
            "Config list response has no d.DataTable.Rows", payload=payload
        ) from exc

    if not rows or not isinstance(rows[0], list) or not rows[0]:
        raise NoConfigFileError(f"No config file listed for node {node_id}", payload=payload)

    file_id = as_text(rows[0][0])
    log.debug("Node %s: config file id %s", node_id, file_id)
    return file_id
