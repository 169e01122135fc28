"""
ncm_dump.inventory
==================
Fetch the managed-node list from ``GetNodesPaged`` and decode it.

The service answers with a generic ``DataTable``: a list of column
descriptors and a list of rows, every row a plain JSON array.  Fields are
read by position using the ``NODE_COLUMNS`` table from the config module.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Iterator

import requests
from requests.cookies import RequestsCookieJar

from .config import (
    AJAX_HEADERS,
    INVENTORY_BODY,
    INVENTORY_PARAMS,
    NODE_COLUMNS,
    NODES_URL,
    REQUEST_TIMEOUT,
)
from .errors import InventoryError
from .logging_setup import log


@dataclass
class DeviceRecord:
    """One managed node and its configuration-retrieval state."""

    node_id: str = ""
    name: str = ""
    address: str = ""
    machine_type: str = ""
    vendor: str = ""
    city: str = ""
    country: str = ""
    # Filled in per node by the dumper, not by the inventory
    config_count: str = ""
    config_file_id: str = ""


@dataclass
class Inventory:
    """Decoded node list plus the total the server claims to hold."""

    devices: list[DeviceRecord] = field(default_factory=list)
    reported_total: str = ""

    def __iter__(self) -> Iterator[DeviceRecord]:
        return iter(self.devices)

    def __len__(self) -> int:
        return len(self.devices)

    @property
    def truncated(self) -> bool:
        """True when the server declares more nodes than were returned."""
        try:
            return int(self.reported_total) > len(self.devices)
        except ValueError:
            return False


def as_text(value: Any) -> str:
    """
    Render any JSON value as text.

    Cells arrive as strings, numbers or null depending on the column and the
    node, so everything is forced to ``str`` before it is used:
    null → ``""``, ``5`` / ``5.0`` → ``"5"``, ``True`` → ``"true"``,
    arrays and objects → compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return json.dumps(value, separators=(",", ":"))


def decode_row(row: list[Any], columns: dict[str, int] = NODE_COLUMNS) -> DeviceRecord:
    """Map one DataTable row onto a DeviceRecord using the *columns* table."""
    values = {
        name: as_text(row[index]) if index < len(row) else ""
        for name, index in columns.items()
    }
    return DeviceRecord(**values)


def decode_inventory(payload: Any, columns: dict[str, int] = NODE_COLUMNS) -> Inventory:
    """
    Decode a parsed ``GetNodesPaged`` response body.

    Raises InventoryError when ``d.DataTable.Rows`` is missing; an empty row
    list is a valid, empty inventory.
    """
    try:
        root = payload["d"]
        table = root["DataTable"]
        rows = table["Rows"]
    except (KeyError, TypeError) as exc:
        raise InventoryError(f"Node list has no d.DataTable.Rows: {exc!r}", payload=payload) from exc
    if rows is None:
        rows = []
    if not isinstance(rows, list):
        raise InventoryError("Node list rows are not an array", payload=payload)

    devices = []
    for idx, row in enumerate(rows):
        if not isinstance(row, list):
            log.warning("Skipping node row %d: not an array (%r)", idx, row)
            continue
        devices.append(decode_row(row, columns))

    return Inventory(devices=devices, reported_total=as_text(root.get("TotalRows")))


def fetch_inventory(
    session: requests.Session,
    cookies: RequestsCookieJar,
    base: str,
    columns: dict[str, int] = NODE_COLUMNS,
) -> Inventory:
    """
    POST to ``GetNodesPaged`` and return the decoded inventory.

    Only the first page (``INVENTORY_PAGE_SIZE`` rows) is requested.
    """
    try:
        resp = session.post(
            base + NODES_URL,
            params=INVENTORY_PARAMS,
            json=INVENTORY_BODY,
            headers=AJAX_HEADERS,
            cookies=cookies,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise InventoryError(f"Node list request failed: {exc}") from exc

    try:
        payload = resp.json()
    except ValueError as exc:
        raise InventoryError(
            "Node list response is not JSON", status_code=resp.status_code
        ) from exc

    inventory = decode_inventory(payload, columns)

    log.info("Discovered %s managed devices", inventory.reported_total or "?")
    if inventory.truncated:
        log.warning(
            "Only %d of %s nodes were returned (single page of %d); "
            "the rest are not processed",
            len(inventory), inventory.reported_total, INVENTORY_PARAMS["limit"],
        )
    for device in inventory:
        log.debug("Node: %s", device)
    return inventory
