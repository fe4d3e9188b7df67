# chess_reporter/core/heuristics.py
"""
Contains a collection of concrete `Heuristic` implementations.

Each heuristic is a single, composable rule in the move classification
pipeline, adhering to the `Heuristic` protocol defined in `types.py`. Each
heuristic performs a specific check (engine agreement, evaluation transitions,
sacrifices, punishing blunders, softening) and returns an updated
`ClassificationResult`.
"""

from dataclasses import replace
from typing import TYPE_CHECKING

import chess
import structlog

from chess_reporter.core.board_analyzer import is_piece_hanging
from chess_reporter.core.chess_utils import is_promotion
from chess_reporter.core.classification import (CENTIPAWN_CLASSIFICATIONS,
                                                get_evaluation_loss_threshold)
from chess_reporter.core.sacrifice_detector import is_brilliant_sacrifice
from chess_reporter.types import Classification, Heuristic

if TYPE_CHECKING:
    from chess_reporter.types import ClassificationResult, MoveAnalysisContext

logger = structlog.get_logger(__name__)


class TopLineHeuristic(Heuristic):
    """Assigns 'Best' when the played move is the engine's first choice."""
    def apply(
        self, context: "MoveAnalysisContext", result: "ClassificationResult"
    ) -> "ClassificationResult":
        if context.top_line.move_uci == context.position.move.uci:
            return replace(result, classification=Classification.BEST)
        return result


class EvaluationTransitionHeuristic(Heuristic):
    """
    The baseline heuristic for moves that are not the engine's first choice.

    It dispatches on the evaluation types before and after the move
    (centipawn or mate) and maps the evaluation loss, or the absolute
    evaluation, onto a classification.
    """
    def apply(
        self, context: "MoveAnalysisContext", result: "ClassificationResult"
    ) -> "ClassificationResult":
        """
        Applies the evaluation-type transition matrix.

        Args:
            context: The context of the move being analyzed.
            result: The current classification result to be modified.

        Returns:
            An updated ClassificationResult, unchanged if a classification was
            already assigned.
        """
        if result.classification is not None:
            return result

        deltas = context.deltas
        transition = (deltas.previous.type, deltas.current.type)

        if transition == ("cp", "cp"):
            classification = self._centipawn_classification(context)
        elif transition == ("cp", "mate"):
            classification = self._mate_appeared(deltas.current_absolute)
        elif transition == ("mate", "cp"):
            classification = self._mate_lost(deltas.previous_absolute, deltas.current_absolute)
        else:
            classification = self._mate_kept(deltas.previous_absolute, deltas.current_absolute)

        return replace(result, classification=classification)

    @staticmethod
    def _centipawn_classification(context: "MoveAnalysisContext") -> Classification:
        for classification in CENTIPAWN_CLASSIFICATIONS:
            threshold = get_evaluation_loss_threshold(
                classification, context.deltas.previous.value, context.settings
            )
            if context.deltas.eval_loss <= threshold:
                return classification
        return Classification.BLUNDER

    @staticmethod
    def _mate_appeared(absolute: int) -> Classification:
        # A quicker mate against the mover is the worse mistake.
        if absolute > 0:
            return Classification.BEST
        if absolute >= -2:
            return Classification.BLUNDER
        if absolute >= -5:
            return Classification.MISTAKE
        return Classification.INACCURACY

    @staticmethod
    def _mate_lost(previous_absolute: int, absolute: int) -> Classification:
        if previous_absolute < 0 and absolute < 0:
            return Classification.BEST
        if absolute >= 400:
            return Classification.GOOD
        if absolute >= 150:
            return Classification.INACCURACY
        if absolute >= -100:
            return Classification.MISTAKE
        return Classification.BLUNDER

    @staticmethod
    def _mate_kept(previous_absolute: int, absolute: int) -> Classification:
        if previous_absolute > 0:
            if absolute <= -4:
                return Classification.MISTAKE
            if absolute < 0:
                return Classification.BLUNDER
            if absolute < previous_absolute:
                return Classification.BEST
            if absolute <= previous_absolute + 2:
                return Classification.EXCELLENT
            return Classification.GOOD
        if absolute == previous_absolute:
            return Classification.BEST
        return Classification.GOOD


class BrilliantMoveHeuristic(Heuristic):
    """
    An override heuristic that upgrades Best moves to 'Brilliant'.

    The move must keep the mover at or above the configured evaluation, must
    not be a promotion, and must not come from a position that was winning
    regardless of the move. The sacrifice itself is judged by
    `sacrifice_detector.is_brilliant_sacrifice`.
    """
    def apply(
        self, context: "MoveAnalysisContext", result: "ClassificationResult"
    ) -> "ClassificationResult":
        if result.classification != Classification.BEST or context.second_line is None:
            return result

        s = context.settings.brilliant_move
        deltas = context.deltas
        winning_anyway = (
            (deltas.second_absolute >= s.winning_anyway_cp and context.top_line.evaluation.type == "cp")
            or (context.top_line.evaluation.is_mate and context.second_line.evaluation.is_mate)
        )
        if winning_anyway or deltas.current_absolute < s.minimum_absolute_evaluation:
            return result

        move = context.position.move
        if is_promotion(move.uci, move.san):
            return result

        try:
            brilliant = is_brilliant_sacrifice(
                context.last_position.fen, context.position.fen, move.uci,
                context.move_colour, s.mate_in_one_exempt_value
            )
        except ValueError:
            logger.warning("Could not test move for a sacrifice.", move_uci=move.uci, fen=context.position.fen)
            return result

        if brilliant:
            return replace(result, is_brilliant=True, classification=Classification.BRILLIANT)
        return result


class GreatMoveHeuristic(Heuristic):
    """
    An override heuristic that upgrades Best moves to 'Great'.

    A great move is the only good answer to an opponent's blunder: the
    previous move was a Blunder, the engine's top two lines are far apart,
    and the moved piece is not simply hanging on its new square.
    """
    def apply(
        self, context: "MoveAnalysisContext", result: "ClassificationResult"
    ) -> "ClassificationResult":
        if result.classification != Classification.BEST or context.second_line is None:
            return result
        if not context.deltas.no_mate:
            return result
        if context.last_position.classification != Classification.BLUNDER:
            return result

        gap = abs(context.top_line.evaluation.value - context.second_line.evaluation.value)
        if gap < context.settings.great_move.only_move_gap_cp:
            return result

        try:
            destination = chess.parse_square(context.position.move.uci[2:4])
            if is_piece_hanging(context.last_position.fen, context.position.fen, destination):
                return result
        except ValueError:
            logger.warning("Could not test destination square.", move_uci=context.position.move.uci)
            return result

        return replace(result, is_great_move=True, classification=Classification.GREAT)


class BlunderSofteningHeuristic(Heuristic):
    """A final-pass heuristic that relabels Blunders that changed nothing as 'Good'."""
    def apply(
        self, context: "MoveAnalysisContext", result: "ClassificationResult"
    ) -> "ClassificationResult":
        if result.classification != Classification.BLUNDER:
            return result

        s = context.settings.blunder_softening
        deltas = context.deltas
        still_winning = deltas.current_absolute >= s.still_winning_cp
        already_lost = deltas.previous_absolute <= s.already_lost_cp and deltas.no_mate

        if still_winning or already_lost:
            return replace(result, is_softened=True, classification=Classification.GOOD)
        return result
