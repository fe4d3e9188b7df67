# chess_reporter/orchestration/pipeline_stages.py
"""
Defines the individual, sequential stages of the report pipeline.

Each stage is a class that conforms to the `ProcessingStage` protocol. It
performs a specific, well-defined part of the overall workflow: classifying
moves, naming openings, annotating engine lines, or aggregating the report.
The pipeline is executed by passing a mutable `ReportContext` object from one
stage to the next, with each stage reading from and writing to it.
"""

from typing import List, TYPE_CHECKING

import structlog

from chess_reporter.core import board_analyzer, opening_tagger, summary_aggregator
from chess_reporter.tracing import trace_stage
from chess_reporter.types import ProcessingStage, ReportContext
from chess_reporter.utils import metrics

if TYPE_CHECKING:
    from chess_reporter.core.move_classifier import MoveClassifier

logger = structlog.get_logger(__name__)

# --- Pipeline Stage Implementations ---

class ClassificationStage(ProcessingStage):
    """Classifies each move in order, writing classifications onto the positions."""
    def __init__(self, classifier: "MoveClassifier"):
        self._classifier = classifier

    @trace_stage
    def execute(self, context: ReportContext) -> ReportContext:
        positions = context.positions
        for index in range(1, len(positions)):
            result = self._classifier.classify_move(positions[index - 1], positions[index])
            if result is None:
                metrics.POSITIONS_SKIPPED_TOTAL.labels(reason="malformed").inc()
                continue
            positions[index].classification = result.classification
            metrics.MOVES_CLASSIFIED_TOTAL.labels(classification=result.classification.value).inc()
        return context

class OpeningStage(ProcessingStage):
    """Names opening positions and promotes the leading book moves."""
    @trace_stage
    def execute(self, context: ReportContext) -> ReportContext:
        opening_tagger.tag_openings(context.positions, context.opening_book)
        opening_tagger.apply_book_moves(context.positions, context.settings)
        return context

class LineAnnotationStage(ProcessingStage):
    """Adds SAN to every engine line for display."""
    @trace_stage
    def execute(self, context: ReportContext) -> ReportContext:
        board_analyzer.annotate_lines_with_san(context.positions)
        return context

class SummaryStage(ProcessingStage):
    """Aggregates the classified positions into the final report."""
    @trace_stage
    def execute(self, context: ReportContext) -> ReportContext:
        context.report = summary_aggregator.aggregate_report(context.positions, context.settings)
        logger.info(
            "Report aggregated.",
            white_accuracy=round(context.report.accuracies.white, 1),
            black_accuracy=round(context.report.accuracies.black, 1),
        )
        return context

def run_report_pipeline(context: ReportContext, stages: List[ProcessingStage]) -> ReportContext:
    """Executes a list of processing stages sequentially on a ReportContext."""
    current_context = context
    for stage in stages:
        current_context = stage.execute(current_context)
    return current_context
