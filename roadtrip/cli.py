"""
Command line interface for roadtrip.

Exposes the ``playlist-csv`` subcommand, which converts newline‑delimited
model output (one analysed video chunk per line) into the playlist CSV.
Input and output default to standard input and standard output; pass
``-`` to select them explicitly.
"""

from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import List

from .config import load_config
from .errors import RoadtripError
from .export.write_csv import ExportManager, read_source

logger = logging.getLogger("roadtrip.cli")


def cmd_playlist_csv(args: argparse.Namespace) -> None:
    """Convert model output into the playlist CSV."""
    config = args.config_obj
    # Standard streams are read and written as bytes so the configured
    # encodings apply to them too.
    source = getattr(sys.stdin, "buffer", sys.stdin) if args.input == "-" else args.input
    # Read before opening the output so a bad source leaves no file behind.
    text = read_source(source, config.input_encoding)
    if args.out == "-":
        sys.stdout.flush()
        out = io.TextIOWrapper(sys.stdout.buffer, encoding=config.output_encoding, newline="")
        try:
            report = ExportManager(out).export_from_string(text)
        finally:
            out.detach()
    else:
        with open(args.out, "w", newline="", encoding=config.output_encoding) as f:
            report = ExportManager(f).export_from_string(text)
        logger.info("Playlist written to %s", args.out)
    if report.skipped:
        logger.info(
            "Skipped blobs at positions: %s",
            ", ".join(str(s.position) for s in report.skipped),
        )


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="roadtrip", description="Roadtrip playlist tools")
    parser.add_argument("--config", help="YAML config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    csv_cmd = subparsers.add_parser("playlist-csv", help="Convert model output to playlist CSV")
    csv_cmd.add_argument("--in", dest="input", default="-", help="Input file, or - for stdin")
    csv_cmd.add_argument("--out", default="-", help="Output CSV path, or - for stdout")
    csv_cmd.set_defaults(func=cmd_playlist_csv)

    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except RoadtripError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(level=config.log_level, format=config.log_format)
    args.config_obj = config
    try:
        args.func(args)
    except RoadtripError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
