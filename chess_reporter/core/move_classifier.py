# chess_reporter/core/move_classifier.py
"""
Contains the central classification engine of the application.

This module provides the `MoveClassifier`, a pure component that runs a
classification pipeline by executing a chain of composable `Heuristic` objects.
This "Chain of Responsibility" pattern keeps each rule (engine agreement,
evaluation transitions, brilliancy, great moves, blunder softening) isolated
while the order of the chain encodes their priority.
"""
from dataclasses import replace
from typing import List, Optional, TYPE_CHECKING

import structlog

from chess_reporter.core.chess_utils import (calculate_evaluation_deltas,
                                             get_move_colour,
                                             synthesize_terminal_line)
from chess_reporter.core.heuristics import (BlunderSofteningHeuristic,
                                            BrilliantMoveHeuristic,
                                            EvaluationTransitionHeuristic,
                                            GreatMoveHeuristic,
                                            TopLineHeuristic)
from chess_reporter.types import (Classification, ClassificationResult,
                                  MoveAnalysisContext)

if TYPE_CHECKING:
    from chess_reporter.config.settings import AnalysisSettings
    from chess_reporter.types import Heuristic, Position

logger = structlog.get_logger(__name__)


class MoveClassifier:
    """
    A stateless classifier that runs a chain of heuristics to classify a single move.

    Moves with no second engine line are Forced and bypass the chain. Every
    other move gets a baseline from engine agreement or the evaluation
    transition, may then be upgraded to Brilliant or Great, and finally may
    have a Blunder softened. A move no rule classified is Book.
    """

    def __init__(self, settings: "AnalysisSettings"):
        """Initializes the classifier and defines the ordered heuristic chain."""
        self._settings = settings
        self._heuristic_chain: List["Heuristic"] = [
            TopLineHeuristic(),               # 1. Baseline: the engine's own first choice
            EvaluationTransitionHeuristic(),  # 2. Baseline: cp/mate transition matrix
            BrilliantMoveHeuristic(),         # 3. Override: unrefutable sacrifices (!!)
            GreatMoveHeuristic(),             # 4. Override: only move after a blunder (!)
            BlunderSofteningHeuristic(),      # 5. Softening: blunders that changed nothing
        ]

    def classify_move(self, last_position: "Position", position: "Position") -> Optional[ClassificationResult]:
        """
        Classifies the move that led from `last_position` to `position`.

        If `position` has no best line (no legal replies), a terminal line is
        synthesised and appended to it.

        Args:
            last_position: The position the move was played from. Its
                classification must already be final.
            position: The position reached by the move.

        Returns:
            A `ClassificationResult`, or None if the input is too malformed to
            classify.
        """
        top_line = last_position.line(1)
        if top_line is None:
            logger.warning("Previous position has no best line, skipping move.", fen=position.fen)
            return None
        if position.move is None:
            logger.warning("Position has no move, skipping.", fen=position.fen)
            return None

        move_colour = get_move_colour(position.fen)
        current_line = position.line(1)
        if current_line is None:
            try:
                current_line = synthesize_terminal_line(position)
            except ValueError:
                logger.warning("Unreadable FEN for terminal position, skipping move.", fen=position.fen)
                return None
        second_line = last_position.line(2)

        deltas = calculate_evaluation_deltas(
            last_position, position, top_line, current_line, second_line, move_colour
        )

        if second_line is None:
            return ClassificationResult(classification=Classification.FORCED)

        context = MoveAnalysisContext(
            last_position=last_position, position=position, move_colour=move_colour,
            top_line=top_line, second_line=second_line, deltas=deltas,
            settings=self._settings
        )

        current_result = ClassificationResult(classification=None)
        for heuristic in self._heuristic_chain:
            current_result = heuristic.apply(context, current_result)

        if current_result.classification is None:
            current_result = replace(current_result, classification=Classification.BOOK)
        return current_result
