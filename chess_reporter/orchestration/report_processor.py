# chess_reporter/orchestration/report_processor.py
"""
Defines the `ReportProcessor`, responsible for executing the report
pipeline over one game's evaluated positions, and `generate_report`, the
entry point most callers use.
"""

import time
from typing import List, Optional, TYPE_CHECKING

import structlog

from chess_reporter.exceptions import InvalidPositionsError
from chess_reporter.orchestration.pipeline_stages import run_report_pipeline
from chess_reporter.tracing import CorrelationID
from chess_reporter.types import Position, Report, ReportContext, ProcessingStage
from chess_reporter.utils import metrics

if TYPE_CHECKING:
    from chess_reporter.config.settings import AnalysisSettings
    from chess_reporter.types import OpeningEntry

logger = structlog.get_logger(__name__)


class ReportProcessor:
    """Orchestrates the sequential report pipeline for a single game."""

    def __init__(
        self,
        settings: "AnalysisSettings",
        opening_book: List["OpeningEntry"],
        pipeline: List[ProcessingStage]
    ):
        """
        Initializes the ReportProcessor.

        Args:
            settings: The analysis settings shared by all stages.
            opening_book: The opening reference data, in priority order.
            pipeline: A pre-constructed list of `ProcessingStage` objects.
        """
        self._settings = settings
        self._opening_book = opening_book
        self._pipeline = pipeline

    def process(self, positions: List[Position]) -> Report:
        """
        Executes the full report pipeline.

        Positions are annotated in place and must not carry classifications,
        openings or line SAN from a previous run.

        Raises:
            InvalidPositionsError: If `positions` is not a non-empty list.
        """
        if not isinstance(positions, list) or not positions:
            metrics.REPORTS_FAILED_TOTAL.labels(error_type=InvalidPositionsError.__name__).inc()
            raise InvalidPositionsError("Positions must be a non-empty list.")

        correlation_id = CorrelationID.new()
        log = logger.bind(run_id=correlation_id.short_id)
        log.info("Generating report.", positions=len(positions))

        started = time.perf_counter()
        context = ReportContext(
            positions=positions,
            settings=self._settings,
            opening_book=self._opening_book,
        )
        final_context = run_report_pipeline(context, self._pipeline)
        metrics.REPORT_GENERATION_DURATION_SECONDS.observe(time.perf_counter() - started)

        if final_context.report is None:
            # Only reachable with a pipeline that lacks a SummaryStage.
            metrics.REPORTS_FAILED_TOTAL.labels(error_type="NoSummary").inc()
            raise InvalidPositionsError("Report pipeline produced no summary.")

        metrics.REPORTS_GENERATED_TOTAL.inc()
        log.info("Report generated.")
        return final_context.report


def generate_report(
    positions: List[Position],
    settings: Optional["AnalysisSettings"] = None,
    opening_book: Optional[List["OpeningEntry"]] = None,
) -> Report:
    """
    Classifies, tags and aggregates a game's evaluated positions.

    Args:
        positions: Evaluated positions, the start position first.
        settings: Analysis settings; defaults to the environment-loaded ones.
        opening_book: Opening reference data; defaults to the configured or
            bundled book.

    Returns:
        The finished `Report`.
    """
    from chess_reporter.containers import get_container

    container = get_container(settings, opening_book)
    return container.resolve(ReportProcessor).process(positions)
