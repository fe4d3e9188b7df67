# chess_reporter/core/chess_utils.py
"""
Provides a collection of pure, stateless functions for chess-related calculations.

This module acts as the "math library" for the reporter. It has no
dependencies on other parts of this application except for the data contracts
defined in `types.py`. Its functions are deterministic and form the building
blocks for the classifier, the opening tagger and the aggregator.
"""

from typing import Dict, Final, Optional

import chess

from chess_reporter.types import (Colour, EngineLine, Evaluation,
                                  EvaluationDeltas, Position)

# Material values used by the sacrifice and hanging-piece logic. `None` stands
# for "no piece", e.g. a move that captured nothing.
PIECE_VALUES: Final[Dict[Optional[chess.PieceType], float]] = {
    None: 0.0,
    chess.PAWN: 1.0,
    chess.KNIGHT: 3.0,
    chess.BISHOP: 3.0,
    chess.ROOK: 5.0,
    chess.QUEEN: 9.0,
    chess.KING: float("inf"),
}


def piece_value(piece_type: Optional[chess.PieceType]) -> float:
    """Returns the material value of a piece type; `None` (no piece) is worth 0."""
    return PIECE_VALUES[piece_type]


def get_move_colour(fen: str) -> Colour:
    """
    Returns the colour that played the move leading to `fen`.

    If the resulting position has Black to move, White just moved.
    """
    return "white" if " b " in fen else "black"


def get_placement(fen: str) -> str:
    """Returns the piece-placement field of a FEN string."""
    return fen.split(" ")[0]


def to_absolute(value: int, move_colour: Colour) -> int:
    """Restates a raw evaluation value from White's perspective."""
    return value * (1 if move_colour == "white" else -1)


def calculate_eval_loss(origin: int, target: int, move_colour: Colour) -> int:
    """
    Calculates how much evaluation the mover gave up going from `origin` to `target`.

    Negative results mean the move improved on the origin estimate.
    """
    if move_colour == "white":
        return origin - target
    return target - origin


def is_promotion(uci: str, san: str = "") -> bool:
    """Detects a promotion from the UCI promotion suffix or the SAN `=` marker."""
    return len(uci) > 4 or "=" in san


def synthesize_terminal_line(position: Position) -> EngineLine:
    """
    Appends and returns a best line for a position with no legal replies.

    Checkmate is recorded as `mate 0`; any other terminal position is `cp 0`.
    """
    board = chess.Board(position.fen)
    evaluation = Evaluation(type="mate" if board.is_checkmate() else "cp", value=0)
    line = EngineLine(id=1, depth=0, evaluation=evaluation, move_uci="")
    position.top_lines.append(line)
    return line


def calculate_evaluation_deltas(
    last_position: Position,
    position: Position,
    top_line: EngineLine,
    current_line: EngineLine,
    second_line: Optional[EngineLine],
    move_colour: Colour,
) -> EvaluationDeltas:
    """
    Computes the normalised evaluations and the evaluation loss of a move.

    The loss is the smallest of three independent estimates: best line before
    vs. best line after, the cutoff evaluation vs. best line after, and best
    line before vs. the engine's own line for the move that was played. Any
    estimate that cannot be computed is treated as infinite.
    """
    previous = top_line.evaluation
    current = current_line.evaluation

    last_line_eval_loss = float("inf")
    cutoff_eval_loss = float("inf")

    played_uci = position.move.uci if position.move else None
    matching_line = next(
        (line for line in last_position.top_lines if line.move_uci == played_uci), None
    )
    if matching_line:
        last_line_eval_loss = calculate_eval_loss(
            previous.value, matching_line.evaluation.value, move_colour
        )

    if last_position.cutoff_evaluation:
        cutoff_eval_loss = calculate_eval_loss(
            last_position.cutoff_evaluation.value, current.value, move_colour
        )

    eval_loss = calculate_eval_loss(previous.value, current.value, move_colour)

    return EvaluationDeltas(
        previous=previous,
        current=current,
        previous_absolute=to_absolute(previous.value, move_colour),
        current_absolute=to_absolute(current.value, move_colour),
        second_absolute=to_absolute(second_line.evaluation.value if second_line else 0, move_colour),
        eval_loss=min(eval_loss, cutoff_eval_loss, last_line_eval_loss),
    )
