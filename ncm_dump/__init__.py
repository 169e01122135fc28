"""
ncm_dump
========
Python package for dumping the stored device configurations of a
SolarWinds Orion Network Configuration Manager (NCM) server.

Package structure
-----------------
ncm_dump/
├── __init__.py       – package init and public API
├── config.py         – endpoints, request bodies, column table
├── errors.py         – fatal and per-node error types
├── logging_setup.py  – colored console logging
├── session.py        – requests.Session factory
├── auth.py           – forms login, auth-cookie check
├── inventory.py      – GetNodesPaged fetch and row decoding
├── metadata.py       – per-node config count and file id
├── sink.py           – stdout / per-node file output
├── dumper.py         – ConfigDumper pipeline
├── cli.py            – argparse CLI (``python -m ncm_dump``)
├── utils/            – file naming and saving
└── extract/          – sub-package: config page retrieval
    ├── __init__.py
    ├── core.py       – export / edit endpoint selection
    └── html.py       – raw textarea extraction

Quick start
-----------
    from pathlib import Path
    from ncm_dump import ConfigDumper, ExtractionMode

    dumper = ConfigDumper(
        host="10.0.0.5",
        username="admin",
        password="your_password",
        mode=ExtractionMode.EXPORT,
        output_dir=Path("configs"),
    )
    dumper.run()
"""

from .auth import login
from .dumper import ConfigDumper
from .errors import (
    AuthenticationError,
    InventoryError,
    NcmDumpError,
    NoConfigFileError,
    OrionConnectionError,
    ResponseShapeError,
)
from .extract import ExtractionMode, extract_textarea, fetch_config
from .inventory import DeviceRecord, Inventory, fetch_inventory
from .metadata import clean, get_config_count, get_config_file_id

__all__ = [
    "ConfigDumper",
    "ExtractionMode",
    "login",
    "fetch_inventory",
    "get_config_count",
    "get_config_file_id",
    "fetch_config",
    "extract_textarea",
    "clean",
    "DeviceRecord",
    "Inventory",
    "NcmDumpError",
    "AuthenticationError",
    "OrionConnectionError",
    "InventoryError",
    "ResponseShapeError",
    "NoConfigFileError",
]
