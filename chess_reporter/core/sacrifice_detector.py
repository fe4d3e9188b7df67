# chess_reporter/core/sacrifice_detector.py
"""
Decides whether a Best move is a genuine, unrefutable piece sacrifice.

A move is a sacrifice when, after it is played, at least one of the mover's
pieces (other than king and pawns) is left hanging and the piece just
captured, if any, is worth less than it. The sacrifice stands only if the
opponent has no viable way to take any of the hanging pieces: every capture
must either leave one of the capturer's own pieces of at least the same value
hanging, or, for pieces worth less than a rook, allow mate in one.
"""

from typing import List

import chess
import structlog

from chess_reporter.core.board_analyzer import get_attackers, is_piece_hanging
from chess_reporter.core.chess_utils import piece_value
from chess_reporter.types import Colour, InfluencingPiece

logger = structlog.get_logger(__name__)


def find_sacrificed_pieces(fen_before: str, fen_after: str, move_uci: str, move_colour: Colour) -> List[InfluencingPiece]:
    """
    Lists the mover's pieces left hanging by the move.

    Args:
        fen_before: The position the move was played from.
        fen_after: The position after the move.
        move_uci: The played move in UCI notation.
        move_colour: The colour that played the move.

    Returns:
        The hanging non-king, non-pawn pieces worth more than whatever the
        move captured.
    """
    last_board = chess.Board(fen_before)
    board = chess.Board(fen_after)
    colour = chess.WHITE if move_colour == "white" else chess.BLACK

    captured = last_board.piece_at(chess.parse_square(move_uci[2:4]))
    captured_value = piece_value(captured.piece_type if captured else None)

    sacrificed: List[InfluencingPiece] = []
    for square, piece in board.piece_map().items():
        if piece.color != colour or piece.piece_type in (chess.KING, chess.PAWN):
            continue
        # A better trade elsewhere explains the exposure.
        if captured_value >= piece_value(piece.piece_type):
            continue
        if is_piece_hanging(fen_before, fen_after, square):
            sacrificed.append(InfluencingPiece(square=square, color=piece.color, piece_type=piece.piece_type))
    return sacrificed


def _capturer_left_hanging(fen_after: str, board: chess.Board, threshold: float) -> bool:
    """Checks whether the capture leaves any of the capturer's pieces worth `threshold` or more hanging."""
    capturer = not board.turn
    for square, piece in board.piece_map().items():
        if piece.color != capturer or piece.piece_type in (chess.KING, chess.PAWN):
            continue
        if piece_value(piece.piece_type) >= threshold and is_piece_hanging(fen_after, board.fen(), square):
            return True
    return False


def _allows_mate_in_one(board: chess.Board) -> bool:
    for move in board.legal_moves:
        board.push(move)
        is_mate = board.is_checkmate()
        board.pop()
        if is_mate:
            return True
    return False


def is_viably_capturable(fen_after: str, piece: InfluencingPiece, sacrificed: List[InfluencingPiece], exempt_value: float) -> bool:
    """
    Checks whether the opponent can take a sacrificed piece without punishment.

    Every attacker of the piece is tried with every promotion choice. A
    capture is refuted when it leaves one of the capturer's pieces, worth at
    least as much as the most valuable sacrificed piece, hanging. Pieces worth
    less than `exempt_value` are also defended by a mate in one after their
    capture.
    """
    board = chess.Board(fen_after)
    max_sacrificed_value = max(piece_value(p.piece_type) for p in sacrificed)

    for attacker in get_attackers(fen_after, piece.square):
        captures = [
            move for move in board.legal_moves
            if move.from_square == attacker.square and move.to_square == piece.square
        ]
        if not captures:
            logger.debug("Attacker cannot legally capture.", square=chess.square_name(attacker.square))
            continue

        for capture in captures:
            board.push(capture)
            attacker_pinned = _capturer_left_hanging(fen_after, board, max_sacrificed_value)
            if piece_value(piece.piece_type) >= exempt_value:
                viable = not attacker_pinned
            else:
                viable = not attacker_pinned and not _allows_mate_in_one(board)
            board.pop()
            if viable:
                return True

    return False


def is_brilliant_sacrifice(fen_before: str, fen_after: str, move_uci: str, move_colour: Colour, exempt_value: float) -> bool:
    """
    Determines whether a move sacrifices material in a way that cannot be refuted.

    Moves played while in check never qualify. At least one piece must be
    left hanging, and no hanging piece may be viably capturable.
    """
    if chess.Board(fen_before).is_check():
        return False

    sacrificed = find_sacrificed_pieces(fen_before, fen_after, move_uci, move_colour)
    if not sacrificed:
        return False

    for piece in sacrificed:
        if is_viably_capturable(fen_after, piece, sacrificed, exempt_value):
            logger.debug("Sacrifice can be taken safely.", square=chess.square_name(piece.square))
            return False

    return True
