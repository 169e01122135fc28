"""Retrieve a stored configuration through the export or the edit endpoint."""

from enum import Enum

import requests
from requests.cookies import RequestsCookieJar

from ..config import CONFIG_ENCODING, CONFIG_ERRORS, EDIT_URL, EXPORT_URL, REQUEST_TIMEOUT
from ..logging_setup import log
from .html import extract_textarea


class ExtractionMode(Enum):
    """Which console page the configuration text is read from."""

    EDIT = "edit"
    EXPORT = "export"


def config_request(base: str, file_id: str, mode: ExtractionMode) -> tuple[str, dict[str, str]]:
    """Return the ``(url, query params)`` pair for *file_id* in *mode*."""
    if mode is ExtractionMode.EXPORT:
        # The export handler wants the GUID in braces
        return base + EXPORT_URL, {"configID": "{" + file_id + "}"}
    return base + EDIT_URL, {"ConfigID": file_id}


def fetch_config(
    session: requests.Session,
    cookies: RequestsCookieJar,
    base: str,
    file_id: str,
    mode: ExtractionMode = ExtractionMode.EDIT,
) -> str:
    """
    GET the config page for *file_id* and return the embedded text.

    An empty string means the page held no config textarea.
    """
    url, params = config_request(base, file_id, mode)
    resp = session.get(url, params=params, cookies=cookies, timeout=REQUEST_TIMEOUT)
    log.debug("Config %s via %s: HTTP %s, %d bytes",
              file_id, mode.value, resp.status_code, len(resp.content))
    # resp.text would guess ISO-8859-1 for charset-less text/html
    return extract_textarea(resp.content.decode(CONFIG_ENCODING, CONFIG_ERRORS))
