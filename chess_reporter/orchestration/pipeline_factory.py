# chess_reporter/orchestration/pipeline_factory.py
"""
A factory for creating the report pipeline.

This module's sole responsibility is to construct and return the list of
`ProcessingStage` objects in the correct sequential order. Classification
must finish before openings are tagged, because book promotion overrides
classifications, and the summary must run last.
"""

from typing import List, TYPE_CHECKING

from chess_reporter.orchestration.pipeline_stages import (
    ClassificationStage, LineAnnotationStage, OpeningStage, SummaryStage
)
from chess_reporter.types import ProcessingStage

if TYPE_CHECKING:
    from chess_reporter.core.move_classifier import MoveClassifier

def create_pipeline(classifier: "MoveClassifier") -> List[ProcessingStage]:
    """
    Builds and returns the list of processing stages in their correct execution order.
    """
    return [
        ClassificationStage(classifier),
        OpeningStage(),
        LineAnnotationStage(),
        SummaryStage(),
    ]
