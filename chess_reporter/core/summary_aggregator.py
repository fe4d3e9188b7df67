# chess_reporter/core/summary_aggregator.py
"""
Provides a pure function to create the final, game-level report.

This module contains the business logic for the per-side aggregations. It
takes the fully classified positions and reduces them into accuracy
percentages and classification counts, making the data ready for output.
"""

from typing import Dict, List, TYPE_CHECKING

from chess_reporter.core.chess_utils import get_move_colour
from chess_reporter.core.classification import get_classification_values
from chess_reporter.types import (Accuracies, ClassificationCounts, Report,
                                  SideCounts)

if TYPE_CHECKING:
    from chess_reporter.config.settings import AnalysisSettings
    from chess_reporter.types import Colour, Position


def _calculate_accuracy(total_value: float, move_count: int) -> float:
    """
    Converts summed classification values into a percentage.

    Args:
        total_value: The sum of the accuracy values of a side's moves.
        move_count: The number of moves that side made.

    Returns:
        The mean value scaled to 0-100, or 0 for a side with no moves.
    """
    if move_count == 0:
        return 0.0
    return total_value / move_count * 100


def aggregate_report(positions: List["Position"], settings: "AnalysisSettings") -> Report:
    """
    Aggregates classified positions into a `Report`.

    Each move is credited to the side that played it. Positions left
    unclassified (skipped as malformed) do not count as moves.

    Args:
        positions: The classified positions, position 0 first.
        settings: The application's analysis settings.

    Returns:
        A `Report` with accuracies, per-side counts and the positions.
    """
    values = get_classification_values(settings)
    totals: Dict["Colour", float] = {"white": 0.0, "black": 0.0}
    move_counts: Dict["Colour", int] = {"white": 0, "black": 0}
    counts: Dict["Colour", ClassificationCounts] = {
        "white": ClassificationCounts(), "black": ClassificationCounts()
    }

    for position in positions[1:]:
        if position.classification is None:
            continue
        colour = get_move_colour(position.fen)
        totals[colour] += values[position.classification]
        move_counts[colour] += 1
        counts[colour].increment(position.classification)

    return Report(
        accuracies=Accuracies(
            white=_calculate_accuracy(totals["white"], move_counts["white"]),
            black=_calculate_accuracy(totals["black"], move_counts["black"]),
        ),
        classifications=SideCounts(white=counts["white"], black=counts["black"]),
        positions=positions,
    )
