# chess_reporter/output/report_generator.py
"""
Provides a service for writing finished reports to disk.

This module contains the `ReportGenerator`, a "dumb" I/O service that is
responsible only for formatting and writing data. It contains no business
logic and relies on the core to provide it with a finished `Report`.
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List

import structlog

from chess_reporter.core.classification import FAVOURABILITY_ORDER
from chess_reporter.core.serialization import encode_report
from chess_reporter.exceptions import ReportGenerationError
from chess_reporter.types import Report

logger = structlog.get_logger(__name__)

class ReportGenerator:
    """A stateless service that writes reports as JSON and as a per-side CSV summary."""

    _STATIC_HEADERS: List[str] = ["Side", "Accuracy", "Moves"]
    _CLASSIFICATION_HEADERS: List[str] = [c.value.capitalize() for c in FAVOURABILITY_ORDER]

    _CSV_HEADERS: List[str] = _STATIC_HEADERS + _CLASSIFICATION_HEADERS

    def write_json_report(self, report: Report, output_path: Path) -> None:
        """
        Writes the encoded report as JSON.

        Raises:
            ReportGenerationError: If the file cannot be written.
        """
        logger.info("Writing JSON report.", path=str(output_path), positions=len(report.positions))
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", encoding="utf-8") as f:
                json.dump(encode_report(report), f, indent=2)
        except OSError as e:
            raise ReportGenerationError(f"Failed to write JSON report to {output_path}") from e

    def generate_csv_summary(self, report: Report, output_path: Path) -> None:
        """
        Writes one CSV row per side with its accuracy and classification counts.

        Args:
            report: A finished `Report`.
            output_path: The `pathlib.Path` to write the CSV summary to.

        Raises:
            ReportGenerationError: If the CSV file cannot be written.
        """
        rows: List[Dict[str, Any]] = []
        for side, counts in (("White", report.classifications.white), ("Black", report.classifications.black)):
            accuracy = report.accuracies.white if side == "White" else report.accuracies.black
            count_map = counts.as_dict()
            row: Dict[str, Any] = {
                "Side": side,
                "Accuracy": f"{accuracy:.1f}",
                "Moves": sum(count_map.values()),
            }
            row.update({c.value.capitalize(): count_map[c.value] for c in FAVOURABILITY_ORDER})
            rows.append(row)

        logger.info("Writing CSV summary.", path=str(output_path))
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", newline="", encoding="utf-8") as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=self._CSV_HEADERS, extrasaction='ignore')
                writer.writeheader()
                writer.writerows(rows)
        except OSError as e:
            raise ReportGenerationError(f"Failed to write CSV summary to {output_path}") from e
