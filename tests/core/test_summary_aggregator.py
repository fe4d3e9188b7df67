# tests/core/test_summary_aggregator.py
import chess
import pytest

from chess_reporter.core.summary_aggregator import aggregate_report
from chess_reporter.types import Classification, Position

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
AFTER_E4_E5 = "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2"
AFTER_NF3 = "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"
AFTER_NC6 = "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"


def test_accuracy_is_mean_value_per_side(settings):
    positions = [
        Position(fen=chess.STARTING_FEN),
        Position(fen=AFTER_E4, classification=Classification.BEST),
        Position(fen=AFTER_E4_E5, classification=Classification.MISTAKE),
        Position(fen=AFTER_NF3, classification=Classification.GOOD),
        Position(fen=AFTER_NC6, classification=Classification.BLUNDER),
    ]

    report = aggregate_report(positions, settings)

    assert report.accuracies.white == pytest.approx(82.5)
    assert report.accuracies.black == pytest.approx(10.0)
    assert report.classifications.white.best == 1
    assert report.classifications.white.good == 1
    assert report.classifications.black.mistake == 1
    assert report.classifications.black.blunder == 1
    assert report.positions is positions


def test_side_without_moves_scores_zero(settings):
    positions = [
        Position(fen=chess.STARTING_FEN),
        Position(fen=AFTER_E4, classification=Classification.EXCELLENT),
    ]

    report = aggregate_report(positions, settings)

    assert report.accuracies.white == pytest.approx(90.0)
    assert report.accuracies.black == 0.0
    assert sum(report.classifications.black.as_dict().values()) == 0


def test_unclassified_positions_do_not_count(settings):
    positions = [
        Position(fen=chess.STARTING_FEN),
        Position(fen=AFTER_E4, classification=Classification.BOOK),
        Position(fen=AFTER_E4_E5),
    ]

    report = aggregate_report(positions, settings)

    assert report.accuracies.white == pytest.approx(100.0)
    assert report.accuracies.black == 0.0
