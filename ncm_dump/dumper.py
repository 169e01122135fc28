"""
Orchestrates one NCM dump run.

login once → fetch the inventory once → walk the nodes in inventory order,
one request at a time:

    count == "0"              → report, skip
    no file id / "{}"         → skip
    empty textarea            → report "no content", skip
    otherwise                 → hand the text to the sink
"""

from pathlib import Path

import requests
from tqdm import tqdm

from .auth import login
from .config import EMPTY_FILE_ID
from .errors import NoConfigFileError, ResponseShapeError
from .extract import ExtractionMode, fetch_config
from .inventory import DeviceRecord, Inventory, fetch_inventory
from .logging_setup import log
from .metadata import clean, get_config_count, get_config_file_id
from .session import base_url, build_session
from .sink import FileSink, StdoutSink


class ConfigDumper:
    """
    Retrieves the latest stored configuration of every node an Orion NCM
    console manages.

    Fatal errors (AuthenticationError, OrionConnectionError, InventoryError)
    propagate out of run(); the caller decides how to terminate.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: str | None = None,
        use_tls: bool = False,
        mode: ExtractionMode = ExtractionMode.EDIT,
        output_dir: Path | None = None,
        verify_ssl: bool = False,
    ) -> None:
        self.host = host
        self.username = username
        self.password = password
        self.mode = mode
        self.base = base_url(host, port, use_tls)
        self.session = build_session(verify_ssl=verify_ssl)
        self.sink = FileSink(output_dir) if output_dir is not None else StdoutSink()

        self.cookies = None
        self._stats = {"ok": 0, "skip": 0, "empty": 0, "err": 0}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> Inventory:
        log.info("Target console   : %s", self.base)
        log.info("Username         : %s", self.username)
        log.info("Extraction mode  : %s", self.mode.value)

        self.cookies = login(self.session, self.base, self.username, self.password)
        inventory = fetch_inventory(self.session, self.cookies, self.base)

        if isinstance(self.sink, FileSink):
            self._run_with_progress(inventory)
        else:
            for device in inventory:
                self.process(device)

        log.info(
            "Dump complete. nodes=%d  ok=%d  skip=%d  empty=%d  err=%d",
            len(inventory),
            self._stats["ok"],
            self._stats["skip"],
            self._stats["empty"],
            self._stats["err"],
        )
        return inventory

    def process(self, device: DeviceRecord) -> None:
        """Resolve, fetch and route the configuration of one node."""
        if self.cookies is None:
            raise RuntimeError("process() called before login")

        node_id = clean(device.node_id)
        try:
            device.config_count = get_config_count(
                self.session, self.cookies, self.base, node_id
            )
            if device.config_count == "0":
                log.warning("No config files found on %s", device.name)
                self._stats["skip"] += 1
                return

            log.info("Retrieving config file from %s", device.name)
            try:
                device.config_file_id = get_config_file_id(
                    self.session, self.cookies, self.base, node_id
                )
            except NoConfigFileError as exc:
                log.debug("%s", exc)
                device.config_file_id = EMPTY_FILE_ID

            if device.config_file_id == EMPTY_FILE_ID:
                self._stats["skip"] += 1
                return

            text = fetch_config(
                self.session, self.cookies, self.base, device.config_file_id, self.mode
            )
        except (ResponseShapeError, requests.RequestException) as exc:
            log.error("Failed to retrieve config for %s: %s", device.name, exc)
            self._stats["err"] += 1
            return

        if not text:
            log.warning("No content in config %s of %s",
                        device.config_file_id, device.name)
            self._stats["empty"] += 1
            return

        self.sink.write(device, text)
        self._stats["ok"] += 1

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _run_with_progress(self, inventory: Inventory) -> None:
        """Node loop with a tqdm progress bar."""
        bar = tqdm(
            inventory.devices,
            desc="Dumping",
            unit="node",
            dynamic_ncols=True,
        )
        for device in bar:
            self.process(device)
            bar.set_postfix(
                ok=self._stats["ok"],
                skip=self._stats["skip"],
                err=self._stats["err"],
            )
        bar.close()
