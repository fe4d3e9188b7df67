import chess
import pytest

from chess_reporter.config.settings import AnalysisSettings
from chess_reporter.types import EngineLine, Evaluation, MoveRecord, Position


@pytest.fixture
def settings():
    return AnalysisSettings()


@pytest.fixture
def make_line():
    """Builds an engine line; values are from White's point of view."""
    def _make_line(line_id, move_uci, value, eval_type="cp", depth=18):
        return EngineLine(
            id=line_id, depth=depth,
            evaluation=Evaluation(type=eval_type, value=value),
            move_uci=move_uci,
        )
    return _make_line


@pytest.fixture
def play():
    """Plays `uci` from `fen` and returns the resulting Position."""
    def _play(fen, uci, top_lines=None, **kwargs):
        board = chess.Board(fen)
        move = chess.Move.from_uci(uci)
        san = board.san(move)
        board.push(move)
        return Position(
            fen=board.fen(),
            move=MoveRecord(san=san, uci=uci),
            top_lines=list(top_lines or []),
            **kwargs,
        )
    return _play
