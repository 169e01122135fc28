"""File naming and saving helpers."""

from pathlib import Path

from ..config import OUTPUT_EXTENSION
from ..logging_setup import log
from ..metadata import clean


def config_filename(name: str, fallback: str = "") -> str:
    """
    Return ``<name>.ncm`` for a node caption.

    The caption is cleaned like any other console value and path separators
    are replaced so every node lands directly in the output directory.
    """
    stem = clean(name).replace("/", "_").replace("\\", "_").strip()
    if not stem:
        stem = clean(fallback) or "node"
    return stem + OUTPUT_EXTENSION


def save_file(local_path: Path, content: bytes) -> None:
    """Write *content* to *local_path*, creating all parent directories."""
    local_path.parent.mkdir(parents=True, exist_ok=True)
    local_path.write_bytes(content)
    log.debug("Saved → %s (%d bytes)", local_path, len(content))
