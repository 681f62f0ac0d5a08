"""Argparse-based command-line interface for confmux.

Invoked via the console script ``confmux`` or as a module with
``python -m confmux``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from confmux import __version__
from confmux.codecs import registry
from confmux.errors import ConfmuxError
from confmux.infra.file_io import load_file, save_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create and return the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="confmux",
        description="Convert configuration files between formats.",
    )
    p.add_argument(
        "-V", "--version", action="version", version=f"confmux {__version__}"
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = p.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert SRC into DST")
    convert.add_argument("src", help="Input configuration file")
    convert.add_argument("dst", help="Output configuration file")
    convert.add_argument(
        "-f", "--from", dest="src_format", help="Input format (default: from suffix)"
    )
    convert.add_argument(
        "-t", "--to", dest="dst_format", help="Output format (default: from suffix)"
    )

    sub.add_parser("formats", help="List registered format names")
    return p


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "formats":
        for name in registry.names():
            print(name)
        return 0

    try:
        store = load_file(args.src, args.src_format)
        save_file(store, args.dst, args.dst_format)
    except (ConfmuxError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
