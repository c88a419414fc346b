#!/usr/bin/env python3
"""
UniPen CLI
Command-line interface for checking UniPen files
"""

import argparse
import logging
from collections import Counter
from pathlib import Path

from . import ParseError, UniPenParser, UniPenWriter, load_settings
from .utils.logging import UniPenLogger

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def main(argv=None):
    """Parse a UniPen file and report what it contains"""
    parser = argparse.ArgumentParser(
        prog="unipen",
        description="Parse and validate a UniPen file\n"
        "Prints a summary of the statements on success, the first error otherwise.",
    )
    parser.add_argument("input", help="UniPen file to parse")
    parser.add_argument(
        "include_dir", nargs="?", help="Base directory for .INCLUDE statements (optional)"
    )
    parser.add_argument("--settings", help="Parser settings file (.yaml or .json)")
    parser.add_argument(
        "--echo",
        action="store_true",
        help="Print the parsed statements as normalized UniPen text",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="INFO",
        help="Log file level (default: INFO)",
    )

    args = parser.parse_args(argv)

    input_path = Path(args.input)

    if not input_path.exists():
        print(f"Error: input file {input_path} does not exist")
        return 1

    # Setup logging for this run
    UniPenLogger.setup_logger(str(input_path), getattr(logging, args.log_level))

    try:
        settings = load_settings(args.settings)
        UniPenLogger.info(f"Parsing {input_path}")
        unipen_parser = UniPenParser(include_dir=args.include_dir, settings=settings)
        document = unipen_parser.parse_file(input_path)

        if args.echo:
            print(UniPenWriter().write(document), end="")
        else:
            print_summary(document)
        UniPenLogger.success(f"Parsed {input_path.name}: {len(document)} statements")

    except (ParseError, ValueError, OSError) as e:
        # Format error message with proper line breaks
        error_msg = str(e)
        print(f"Error: {error_msg}")
        lines = error_msg.split('\n')
        UniPenLogger.error("Error while parsing:")
        for line in lines:
            if line.strip():  # Skip empty lines
                UniPenLogger.error(f"  {line}")
        return 1
    finally:
        # Always print log file path for easy IDE access
        log_path = UniPenLogger.get_log_file_path()
        if log_path:
            print(f"\nLog file: {log_path}")
        UniPenLogger.cleanup()

    return 0


def print_summary(document):
    """Statement counts per keyword, contributing files and warnings"""
    counts = Counter(statement.literal for statement in document)
    print(f"Statements: {len(document)}")
    for literal, count in sorted(counts.items()):
        print(f"  {literal:<22} {count}")

    if document.files:
        print(f"Files ({len(document.files)}):")
        for path in document.files:
            print(f"  • {path}")

    if document.warnings:
        print(f"Warnings ({len(document.warnings)}):")
        for warning in document.warnings:
            print(f"  • {warning}")


if __name__ == "__main__":
    exit(main())
