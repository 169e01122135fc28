"""Configuration constants for the Orion NCM configuration dumper."""

import os

# Credentials can also be supplied via ORION_USER / ORION_PASSWORD env vars
DEFAULT_HOST = os.environ.get("ORION_HOST", "")
DEFAULT_USER = os.environ.get("ORION_USER", "guest")
DEFAULT_PASSWORD = os.environ.get("ORION_PASSWORD", "")
DEFAULT_OUTPUT = "."

USER_AGENT = "NCM Dump"

LOGIN_PATH = "/Orion/Login.aspx?ReturnUrl=%2fOrion%2fNCM%2fConfigurationManagement.aspx"
NODES_URL = "/Orion/NCM/Services/ConfigManagement.asmx/GetNodesPaged"
CONFIG_COUNT_URL = "/Orion/NCM/Services/ConfigManagement.asmx/GetConfigsTotalRows"
CONFIGS_URL = "/Orion/NCM/Services/ConfigManagement.asmx/GetConfigsPaged"
EXPORT_URL = "/Orion/NCM/Resources/NCMConfigDetails/ConfigExporter.ashx"
EDIT_URL = "/Orion/NCM/Resources/Configs/EditConfig.aspx"

# ASP.NET forms-auth cookie; only present when the login was accepted
AUTH_COOKIE_MARKER = "ASPXAUTH"

REQUEST_TIMEOUT = 30    # seconds per HTTP request

# The inventory is fetched as a single page; larger estates are truncated.
INVENTORY_PAGE_SIZE = 1000
INVENTORY_PARAMS = {
    "start": 0,
    "limit": INVENTORY_PAGE_SIZE,
    "sort": "LastTransferDate",
    "dir": "DESC",
}
INVENTORY_BODY = {
    "groupingQueryString": "",
    "showSelectedOnly": "False",
    "colToSearch": "Nodes.Caption",
    "searchTerm": "",
    "clientOffset": 240,
}
CONFIGS_PARAMS = {"sort": "Name", "dir": "ASC"}

# Headers the web console's own XHR calls send to the ASMX services
AJAX_HEADERS = {
    "X-Requested-With": "XMLHttpRequest",
    "Content-Type": "application/json",
}

# Position of each node field in a GetNodesPaged row.  The console does not
# name its columns in a usable way, so this table is the contract with the
# remote schema: if Orion reorders its columns, this is the only place to fix.
NODE_COLUMNS: dict[str, int] = {
    "node_id":      0,
    "name":         2,
    "address":      3,
    "machine_type": 17,
    "vendor":       18,
    "city":         23,
    "country":      26,
}

# File id returned for nodes whose config table holds an empty object
EMPTY_FILE_ID = "{}"

OUTPUT_EXTENSION = ".ncm"

# Config pages are read as bytes; undecodable bytes survive as surrogates so
# the text written out is byte-for-byte what the console served.
CONFIG_ENCODING = "utf-8"
CONFIG_ERRORS = "surrogateescape"
