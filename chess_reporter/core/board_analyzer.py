# chess_reporter/core/board_analyzer.py
"""
Provides pure, stateless functions for interpretive board analysis.

This module is part of the functional core and serves a dual purpose:

1.  **Data Enrichment:** It converts the engine's UCI (Universal Chess
    Interface) move notation on every engine line into human-readable SAN
    (Standard Algebraic Notation), which requires the context of the board.

2.  **Tactical Interpretation:** It answers "who attacks this square", "who
    defends it" and "is the piece on it hanging", the questions the sacrifice
    detector and the great-move heuristic are built on.
"""

from typing import List, Optional, TYPE_CHECKING

import chess
import structlog

from chess_reporter.core.chess_utils import piece_value
from chess_reporter.types import InfluencingPiece

if TYPE_CHECKING:
    from chess_reporter.types import EngineLine, Position

logger = structlog.get_logger(__name__)

# Order in which promotion choices are tried when simulating a capture.
PROMOTION_ORDER: List[Optional[chess.PieceType]] = [
    None, chess.BISHOP, chess.KNIGHT, chess.ROOK, chess.QUEEN
]


def _board_with_turn(fen: str, turn: chess.Color) -> chess.Board:
    """Loads `fen` with the side to move forced to `turn` and no en-passant target."""
    board = chess.Board(fen)
    board.turn = turn
    board.ep_square = None
    return board


def _ordered_captures(board: chess.Board, from_square: int, to_square: int) -> List[chess.Move]:
    """Returns the legal moves from one square to another, in promotion-choice order."""
    moves = [
        move for move in board.legal_moves
        if move.from_square == from_square and move.to_square == to_square
    ]
    return sorted(moves, key=lambda m: PROMOTION_ORDER.index(m.promotion))


def get_attackers(fen: str, square: chess.Square) -> List[InfluencingPiece]:
    """
    Finds every enemy piece that can capture the piece standing on `square`.

    Attackers are the legal captures onto the square by the colour opposing
    the piece, as if that colour were to move. An adjacent enemy king is added
    when it can legally take, or when other attackers already exist and it
    could join the exchange later.

    Args:
        fen: The position to inspect.
        square: The square of the attacked piece.

    Returns:
        A list of `InfluencingPiece`, one per attacking piece. Empty if the
        square is vacant.
    """
    board = chess.Board(fen)
    piece = board.piece_at(square)
    if piece is None:
        return []

    attacking_colour = not piece.color
    board = _board_with_turn(fen, attacking_colour)

    attackers: List[InfluencingPiece] = []
    seen_squares = set()
    for move in board.legal_moves:
        if move.to_square != square or move.from_square in seen_squares:
            continue
        seen_squares.add(move.from_square)
        attackers.append(InfluencingPiece(
            square=move.from_square,
            color=attacking_colour,
            piece_type=board.piece_type_at(move.from_square),
        ))

    king_square = board.king(attacking_colour)
    if king_square is None or chess.square_distance(king_square, square) != 1:
        return attackers
    if king_square in seen_squares:
        return attackers

    king_capture_legal = chess.Move(king_square, square) in board.legal_moves
    if attackers or king_capture_legal:
        attackers.append(InfluencingPiece(square=king_square, color=attacking_colour, piece_type=chess.KING))

    return attackers


def get_defenders(fen: str, square: chess.Square) -> List[InfluencingPiece]:
    """
    Finds the pieces defending the piece standing on `square`.

    If the piece is attacked, the first attacker captures it and the pieces
    able to recapture are the defenders. Otherwise an enemy queen is placed on
    the square and the pieces able to take it are the defenders.
    """
    board = chess.Board(fen)
    piece = board.piece_at(square)
    if piece is None:
        return []

    attackers = get_attackers(fen, square)
    if attackers:
        test_attacker = attackers[0]
        board = _board_with_turn(fen, test_attacker.color)
        captures = _ordered_captures(board, test_attacker.square, square)
        if not captures:
            return []
        board.push(captures[0])
        return get_attackers(board.fen(), square)

    board = _board_with_turn(fen, piece.color)
    board.set_piece_at(square, chess.Piece(chess.QUEEN, not piece.color))
    return get_attackers(board.fen(), square)


def is_piece_hanging(fen_before: str, fen_after: str, square: chess.Square) -> bool:
    """
    Determines whether the piece on `square` can be won by the opponent.

    The test is a static-exchange style comparison of the attackers and
    defenders of the square in `fen_after`; `fen_before` tells whether the
    piece just arrived there by capturing something.

    Args:
        fen_before: The position before the last move.
        fen_after: The position to test.
        square: The square of the piece to test.

    Returns:
        True if the opponent can capture the piece for a material gain.
    """
    last_piece = chess.Board(fen_before).piece_at(square)
    piece = chess.Board(fen_after).piece_at(square)
    if piece is None:
        return False

    last_value = piece_value(last_piece.piece_type if last_piece else None)
    value = piece_value(piece.piece_type)

    attackers = get_attackers(fen_after, square)
    defenders = get_defenders(fen_after, square)

    # Just traded for something of equal or greater value.
    if last_piece and last_piece.color != piece.color and last_value >= value:
        return False

    # A rook that took a minor piece defended once by another minor piece won the exchange.
    if (
        piece.piece_type == chess.ROOK
        and last_value == 3
        and len(attackers) == 1
        and all(piece_value(a.piece_type) == 3 for a in attackers)
    ):
        return False

    if any(piece_value(a.piece_type) < value for a in attackers):
        return True

    if len(attackers) > len(defenders):
        min_attacker_value = min(piece_value(a.piece_type) for a in attackers)

        # Taking the piece would itself be a sacrifice.
        if value < min_attacker_value and any(
            piece_value(d.piece_type) < min_attacker_value for d in defenders
        ):
            return False

        # A pawn defender means the pawn is what actually gets sacrificed.
        if any(piece_value(d.piece_type) == 1 for d in defenders):
            return False

        return True

    return False


def _line_san(board: chess.Board, line: "EngineLine") -> str:
    """Converts a line's UCI move to SAN, returning "" if the move cannot be played."""
    try:
        move = chess.Move.from_uci(line.move_uci)
    except (TypeError, ValueError):
        return ""
    if move not in board.legal_moves:
        return ""
    return board.san(move)


def annotate_lines_with_san(positions: List["Position"]) -> None:
    """
    Records the SAN of every engine line's move on each position, in place.

    Lines evaluated as `mate 0` carry no move and are left untouched. Lines
    whose move cannot be applied get an empty string rather than failing the
    whole report.
    """
    for position in positions:
        try:
            board = chess.Board(position.fen)
        except (TypeError, ValueError):
            logger.warning("Unreadable FEN, clearing line SAN.", fen=position.fen)
            board = None

        for line in position.top_lines:
            if line.evaluation.type == "mate" and line.evaluation.value == 0:
                continue
            line.move_san = _line_san(board, line) if board is not None else ""
            if not line.move_san:
                logger.debug("Engine line move could not be applied.", fen=position.fen, move_uci=line.move_uci)
