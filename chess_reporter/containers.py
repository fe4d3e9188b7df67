# chess_reporter/containers.py
"""
Defines the Dependency Injection (DI) container for the application.

This module uses the `punq` library to manage the creation and wiring of the
classifier, the pipeline stages and the report processor. This centralizes
the dependency graph so callers and tests can swap settings or the opening
book without touching the pipeline.
"""

from typing import List, Optional

import punq

from chess_reporter.config.settings import AnalysisSettings, settings as app_settings
from chess_reporter.core.move_classifier import MoveClassifier
from chess_reporter.core.opening_book import load_opening_book
from chess_reporter.orchestration.pipeline_factory import create_pipeline
from chess_reporter.orchestration.report_processor import ReportProcessor
from chess_reporter.types import OpeningEntry


def get_container(
    analysis_settings: Optional[AnalysisSettings] = None,
    opening_book: Optional[List[OpeningEntry]] = None,
) -> punq.Container:
    """
    Initializes and returns a DI container configured for a report run.

    Args:
        analysis_settings: Overrides the environment-loaded analysis settings.
        opening_book: Overrides the opening book; when omitted it is loaded
            from `book.openings_path`, or the bundled book.
    """
    container = punq.Container()

    resolved_settings = analysis_settings or app_settings.analysis_settings
    if opening_book is None:
        opening_book = load_opening_book(resolved_settings.book.openings_path)

    # Register instances that are created outside the container's control.
    container.register(AnalysisSettings, instance=resolved_settings)

    container.register(
        MoveClassifier, factory=lambda: MoveClassifier(resolved_settings), scope=punq.Scope.singleton
    )
    container.register(
        ReportProcessor,
        factory=lambda: ReportProcessor(
            resolved_settings, opening_book, create_pipeline(container.resolve(MoveClassifier))
        ),
    )

    return container
