"""
Tests for the ConfigDumper pipeline – skip policy, single extraction per
node, sink routing, fatal error propagation.
"""

import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests
from requests.cookies import RequestsCookieJar

from ncm_dump.config import CONFIG_COUNT_URL, CONFIGS_URL, EXPORT_URL, LOGIN_PATH, NODES_URL
from ncm_dump.dumper import ConfigDumper
from ncm_dump.errors import AuthenticationError, NoConfigFileError, ResponseShapeError
from ncm_dump.extract import ExtractionMode
from ncm_dump.inventory import DeviceRecord, Inventory
from ncm_dump.sink import FileSink, StdoutSink

BASE = "http://10.0.0.5"


def _inventory(*devices):
    return Inventory(devices=list(devices), reported_total=str(len(devices)))


def _dumper(**kwargs):
    with patch("ncm_dump.dumper.build_session", return_value=MagicMock()):
        dumper = ConfigDumper(host="10.0.0.5", username="admin", password="secret", **kwargs)
    if not isinstance(dumper.sink, FileSink):
        dumper.sink = StdoutSink(io.StringIO())
    return dumper


class TestPipeline(unittest.TestCase):
    """The dumper sequences the lookups and honours the skip rules."""

    def setUp(self):
        self.cookies = RequestsCookieJar()
        patches = {
            "login": patch("ncm_dump.dumper.login", return_value=self.cookies),
            "fetch_inventory": patch("ncm_dump.dumper.fetch_inventory"),
            "get_config_count": patch("ncm_dump.dumper.get_config_count"),
            "get_config_file_id": patch("ncm_dump.dumper.get_config_file_id"),
            "fetch_config": patch("ncm_dump.dumper.fetch_config"),
        }
        self.mocks = {}
        for name, p in patches.items():
            self.mocks[name] = p.start()
            self.addCleanup(p.stop)

    def test_zero_count_device_never_extracted(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id="1", name="EmptyNode"),
            DeviceRecord(node_id="2", name="RouterB"),
        )
        self.mocks["get_config_count"].side_effect = (
            lambda session, cookies, base, node_id: "0" if node_id == "1" else "3"
        )
        self.mocks["get_config_file_id"].return_value = "cfg-2"
        self.mocks["fetch_config"].return_value = "hostname RouterB\n"

        dumper = _dumper()
        inventory = dumper.run()

        self.assertEqual(self.mocks["get_config_count"].call_count, 2)
        self.mocks["get_config_file_id"].assert_called_once_with(
            dumper.session, self.cookies, BASE, "2"
        )
        self.mocks["fetch_config"].assert_called_once_with(
            dumper.session, self.cookies, BASE, "cfg-2", ExtractionMode.EDIT
        )
        self.assertEqual(dumper.sink.stream.getvalue(), "hostname RouterB\n\n")
        self.assertEqual(inventory.devices[0].config_count, "0")
        self.assertEqual(inventory.devices[1].config_count, "3")
        self.assertEqual(inventory.devices[1].config_file_id, "cfg-2")

    def test_selected_mode_used(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id="2", name="RouterB"),
        )
        self.mocks["get_config_count"].return_value = "1"
        self.mocks["get_config_file_id"].return_value = "cfg-2"
        self.mocks["fetch_config"].return_value = "hostname RouterB"

        _dumper(mode=ExtractionMode.EXPORT).run()

        self.mocks["fetch_config"].assert_called_once()
        self.assertIs(self.mocks["fetch_config"].call_args[0][4], ExtractionMode.EXPORT)

    def test_node_id_cleaned(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id='["2"]', name="RouterB"),
        )
        self.mocks["get_config_count"].return_value = "0"

        _dumper().run()

        self.assertEqual(self.mocks["get_config_count"].call_args[0][3], "2")

    def test_empty_object_file_id_skipped(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id="2", name="RouterB"),
        )
        self.mocks["get_config_count"].return_value = "1"
        self.mocks["get_config_file_id"].return_value = "{}"

        dumper = _dumper()
        dumper.run()

        self.mocks["fetch_config"].assert_not_called()
        self.assertEqual(dumper._stats["skip"], 1)

    def test_no_config_file_skipped(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id="2", name="RouterB"),
            DeviceRecord(node_id="3", name="RouterC"),
        )
        self.mocks["get_config_count"].return_value = "1"
        self.mocks["get_config_file_id"].side_effect = [
            NoConfigFileError("empty table"),
            "cfg-3",
        ]
        self.mocks["fetch_config"].return_value = "hostname RouterC"

        dumper = _dumper()
        inventory = dumper.run()

        self.mocks["fetch_config"].assert_called_once()
        self.assertEqual(inventory.devices[0].config_file_id, "{}")
        self.assertEqual(dumper._stats["ok"], 1)

    def test_empty_text_reported_not_written(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id="2", name="RouterB"),
        )
        self.mocks["get_config_count"].return_value = "1"
        self.mocks["get_config_file_id"].return_value = "cfg-2"
        self.mocks["fetch_config"].return_value = ""

        dumper = _dumper()
        with self.assertLogs("ncm-dump", level="WARNING") as logs:
            dumper.run()

        self.assertEqual(dumper.sink.stream.getvalue(), "")
        self.assertEqual(dumper._stats["empty"], 1)
        self.assertTrue(any("No content" in line for line in logs.output))

    def test_per_node_error_does_not_stop_run(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id="2", name="RouterB"),
            DeviceRecord(node_id="3", name="RouterC"),
        )
        self.mocks["get_config_count"].side_effect = [
            ResponseShapeError("bad count"),
            "1",
        ]
        self.mocks["get_config_file_id"].return_value = "cfg-3"
        self.mocks["fetch_config"].return_value = "hostname RouterC"

        dumper = _dumper()
        dumper.run()

        self.assertEqual(dumper._stats["err"], 1)
        self.assertEqual(dumper._stats["ok"], 1)

    def test_login_failure_processes_nothing(self):
        self.mocks["login"].side_effect = AuthenticationError("Login failed")

        with self.assertRaises(AuthenticationError):
            _dumper().run()

        self.mocks["fetch_inventory"].assert_not_called()
        self.mocks["get_config_count"].assert_not_called()

    def test_process_requires_login(self):
        with self.assertRaises(RuntimeError):
            _dumper().process(DeviceRecord(node_id="1", name="A"))

    def test_file_sink(self):
        self.mocks["fetch_inventory"].return_value = _inventory(
            DeviceRecord(node_id="2", name='"RouterB"'),
        )
        self.mocks["get_config_count"].return_value = "2"
        self.mocks["get_config_file_id"].return_value = "cfg-2"
        self.mocks["fetch_config"].return_value = "hostname RouterB\n!\n"

        with tempfile.TemporaryDirectory() as tmp:
            dumper = _dumper(output_dir=Path(tmp))
            dumper.run()
            written = Path(tmp) / "RouterB.ncm"
            self.assertTrue(written.exists())
            self.assertEqual(written.read_text(encoding="utf-8"), "hostname RouterB\n!\n")


class TestPipelineOverHttp(unittest.TestCase):
    """Full run against a fake console: only the node with configs is fetched."""

    def _response(self, payload=None, text="", cookies=None):
        resp = MagicMock(spec=requests.Response)
        resp.status_code = 200
        resp.headers = {}
        resp.json.return_value = payload
        resp.text = text
        resp.content = text.encode("utf-8")
        resp.cookies = cookies if cookies is not None else RequestsCookieJar()
        return resp

    def test_two_devices(self):
        auth = RequestsCookieJar()
        auth.set(".ASPXAUTH", "TOKEN", domain="10.0.0.5", path="/")

        row_a = [None] * 27
        row_a[0], row_a[2], row_a[3] = 1, "EmptyNode", "10.0.1.1"
        row_b = [None] * 27
        row_b[0], row_b[2], row_b[3], row_b[18] = 2, "RouterB", "10.0.1.2", "Cisco"
        nodes = {"d": {"DataTable": {"Columns": [], "Rows": [row_a, row_b]}, "TotalRows": 2}}

        def post(url, **kwargs):
            if url.endswith(LOGIN_PATH):
                return self._response(cookies=auth)
            if url.endswith(NODES_URL):
                return self._response(nodes)
            if url.endswith(CONFIG_COUNT_URL):
                count = 0 if kwargs["json"]["nodeId"] == "1" else 3.0
                return self._response({"d": count})
            if url.endswith(CONFIGS_URL):
                return self._response({"d": {"DataTable": {"Rows": [["cfg-b", "running"]]}}})
            raise AssertionError(f"unexpected POST {url}")

        session = MagicMock(spec=requests.Session)
        session.post.side_effect = post
        session.get.return_value = self._response(
            text='<html><textarea id="cfg" readonly>hostname RouterB\n!\n</textarea></html>'
        )

        with patch("ncm_dump.dumper.build_session", return_value=session):
            dumper = ConfigDumper(host="10.0.0.5", username="admin", password="secret",
                                  mode=ExtractionMode.EXPORT)
        dumper.sink = StdoutSink(io.StringIO())
        dumper.run()

        session.get.assert_called_once()
        args, kwargs = session.get.call_args
        self.assertEqual(args[0], BASE + EXPORT_URL)
        self.assertEqual(kwargs["params"], {"configID": "{cfg-b}"})
        self.assertIs(kwargs["cookies"], auth)
        config_posts = [c for c in session.post.call_args_list if c[0][0].endswith(CONFIGS_URL)]
        self.assertEqual(len(config_posts), 1)
        self.assertEqual(config_posts[0][1]["json"]["nodeId"], "2")
        self.assertEqual(dumper.sink.stream.getvalue(), "hostname RouterB\n!\n\n")


if __name__ == "__main__":
    unittest.main()
