"""Utility subpackage for the Orion NCM configuration dumper."""

from .files import config_filename, save_file

__all__ = [
    "config_filename",
    "save_file",
]
