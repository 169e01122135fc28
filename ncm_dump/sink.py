"""Where retrieved configuration text ends up: stdout or one file per node."""

import sys
from pathlib import Path
from typing import TextIO

from .config import CONFIG_ENCODING, CONFIG_ERRORS
from .inventory import DeviceRecord
from .logging_setup import log
from .utils.files import config_filename, save_file


class StdoutSink:
    """Stream each configuration to standard output."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def write(self, device: DeviceRecord, text: str) -> None:
        buffer = getattr(self.stream, "buffer", None)
        if buffer is None:
            self.stream.write(text + "\n")
            self.stream.flush()
            return
        self.stream.flush()
        buffer.write(text.encode(CONFIG_ENCODING, CONFIG_ERRORS) + b"\n")
        buffer.flush()


class FileSink:
    """Write each configuration to ``<output_dir>/<node name>.ncm``."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def path_for(self, device: DeviceRecord) -> Path:
        return self.output_dir / config_filename(device.name, fallback=device.node_id)

    def write(self, device: DeviceRecord, text: str) -> None:
        path = self.path_for(device)
        log.info("Writing contents to %s", path)
        save_file(path, text.encode(CONFIG_ENCODING, CONFIG_ERRORS))
