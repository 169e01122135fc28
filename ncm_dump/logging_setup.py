"""Logging configuration for the Orion NCM configuration dumper."""

import logging

import colorlog

log = logging.getLogger("ncm-dump")


def setup_logging(debug: bool = False) -> None:
    """
    Configure the ``ncm-dump`` logger with colored console output.

    Args:
        debug: Enable debug-level logging (also turns on urllib3 wire logs)
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
        datefmt="%H:%M:%S",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
    ))
    log.addHandler(handler)

    if debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
