# chess_reporter/cli.py
"""
The command-line entry point for generating a game report.

Reads a JSON list of evaluated positions, runs the report pipeline and writes
the report as JSON (to a file or stdout), optionally with a CSV summary.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from chess_reporter.config.settings import settings
from chess_reporter.core.opening_book import load_opening_book
from chess_reporter.core.serialization import decode_positions, encode_report
from chess_reporter.exceptions import ChessReporterError
from chess_reporter.orchestration.report_processor import generate_report
from chess_reporter.output.report_generator import ReportGenerator
from chess_reporter.utils.logging_config import setup_logging

logger = structlog.get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classify the moves of an evaluated chess game.")
    parser.add_argument("positions", type=Path, help="JSON file with the evaluated positions.")
    parser.add_argument("-o", "--output", type=Path, help="Write the report JSON here instead of stdout.")
    parser.add_argument("--csv", type=Path, help="Also write a per-side CSV summary.")
    parser.add_argument("--openings", type=Path, help="Opening book JSON replacing the bundled one.")
    parser.add_argument("--log-level", default=settings.default_log_level)
    parser.add_argument("--log-file", type=Path)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to parse arguments and generate a report."""
    args = _build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file=args.log_file)

    try:
        with args.positions.open("r", encoding="utf-8") as f:
            positions = decode_positions(json.load(f))
        opening_book = load_opening_book(args.openings) if args.openings else None
        report = generate_report(positions, settings.analysis_settings, opening_book)

        generator = ReportGenerator()
        if args.output:
            generator.write_json_report(report, args.output)
        else:
            json.dump(encode_report(report), sys.stdout, indent=2)
            sys.stdout.write("\n")
        if args.csv:
            generator.generate_csv_summary(report, args.csv)
    except (OSError, json.JSONDecodeError, ChessReporterError):
        logger.exception("Failed to generate report.")
        return 1
    return 0
