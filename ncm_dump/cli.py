"""
Command-line interface for the Orion NCM configuration dumper.

Provides argument parsing and main execution flow.
"""

import argparse
import getpass
import sys
from pathlib import Path

from ncm_dump.config import DEFAULT_HOST, DEFAULT_OUTPUT, DEFAULT_PASSWORD, DEFAULT_USER
from ncm_dump.dumper import ConfigDumper
from ncm_dump.errors import NcmDumpError
from ncm_dump.extract import ExtractionMode
from ncm_dump.logging_setup import log, setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="ncm-dump",
        description="Dump the latest stored configuration of every node "
                    "managed by a SolarWinds Orion NCM server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials can also be provided via the ORION_USER and\n"
            "ORION_PASSWORD env vars, the server via ORION_HOST.\n"
            "If the password is not supplied and not in the environment, "
            "you will be prompted for it."
        ),
    )
    parser.add_argument(
        "--ip", default=DEFAULT_HOST,
        help="Orion server IP address or hostname",
    )
    parser.add_argument(
        "-u", "--user", default=DEFAULT_USER,
        help=f"Orion username (default: {DEFAULT_USER})",
    )
    parser.add_argument(
        "-p", "--password", default=DEFAULT_PASSWORD,
        help="Orion password (overrides ORION_PASSWORD env var)",
    )
    parser.add_argument(
        "-m", "--export-method", dest="export_method", action="store_true",
        help="Read configs through the export handler instead of the edit page",
    )
    parser.add_argument(
        "--tls", action="store_true",
        help="Connect using https",
    )
    parser.add_argument(
        "--port", default=None,
        help="TCP port of the web console",
    )
    parser.add_argument(
        "-e", "--export", action="store_true",
        help="Write each config to <node name>.ncm instead of stdout",
    )
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT,
        help=f"Directory for exported .ncm files (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--verify-ssl", dest="verify_ssl", action="store_true", default=False,
        help="Verify the server's TLS certificate",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the ncm-dump CLI.
    """
    args = parse_args(argv)

    setup_logging(debug=args.debug)

    if not args.ip:
        log.error("Please enter a valid IP Address (--ip or ORION_HOST)")
        sys.exit(1)

    if args.tls and not args.verify_ssl:
        log.warning("TLS certificate verification is DISABLED (use --verify-ssl)")

    if not args.password:
        args.password = getpass.getpass("Orion password: ")

    dumper = ConfigDumper(
        host=args.ip,
        username=args.user,
        password=args.password,
        port=args.port,
        use_tls=args.tls,
        mode=ExtractionMode.EXPORT if args.export_method else ExtractionMode.EDIT,
        output_dir=Path(args.output) if args.export else None,
        verify_ssl=args.verify_ssl,
    )
    try:
        dumper.run()
    except NcmDumpError as exc:
        log.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
