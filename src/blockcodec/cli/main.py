"""Main CLI entry point for blockcodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file, decode_hex
from ..exceptions import BlockCodecError
from ..schema import load_block


def main() -> int:
    """Main entry point for the blockcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="blockcodec: Schema-Driven Binary Record Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  blockcodec --analyze block.json                    Show the wire layout of a block
  blockcodec --decode "0a 03 010203" --schema block.json
                                                     Decode a hex record
  blockcodec --version                               Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze a block definition file and show field sizes",
    )

    parser.add_argument(
        "--decode",
        metavar="HEX",
        type=str,
        help="Decode a hex-encoded record (requires --schema)",
    )

    parser.add_argument(
        "--schema",
        metavar="FILE",
        type=str,
        help="Block definition file used by --decode",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"blockcodec {__version__}",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except BlockCodecError as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # Handle --decode
    if args.decode is not None:
        if not args.schema:
            print("Error: --decode requires --schema FILE", file=sys.stderr)
            return 2

        schema_path = Path(args.schema)
        if not schema_path.exists():
            print(f"Error: File not found: {schema_path}", file=sys.stderr)
            return 1

        try:
            decode_hex(load_block(schema_path), args.decode)
            return 0
        except (BlockCodecError, ValueError) as e:
            print(f"Error decoding record: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
