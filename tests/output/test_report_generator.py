# tests/output/test_report_generator.py
import csv
import json

import chess
import pytest

from chess_reporter.core.summary_aggregator import aggregate_report
from chess_reporter.exceptions import ReportGenerationError
from chess_reporter.output.report_generator import ReportGenerator
from chess_reporter.types import Classification, Position

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
AFTER_E4_E5 = "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2"


@pytest.fixture
def report(settings):
    positions = [
        Position(fen=chess.STARTING_FEN),
        Position(fen=AFTER_E4, classification=Classification.BOOK, opening="King's Pawn Opening"),
        Position(fen=AFTER_E4_E5, classification=Classification.INACCURACY),
    ]
    return aggregate_report(positions, settings)


def test_write_json_report(report, tmp_path):
    output_path = tmp_path / "reports" / "game.json"

    ReportGenerator().write_json_report(report, output_path)

    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["accuracies"] == {"white": 100.0, "black": 40.0}
    assert data["positions"][1]["classification"] == "book"
    assert data["positions"][1]["opening"] == "King's Pawn Opening"


def test_generate_csv_summary(report, tmp_path):
    output_path = tmp_path / "summary.csv"

    ReportGenerator().generate_csv_summary(report, output_path)

    with output_path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert list(rows[0])[:4] == ["Side", "Accuracy", "Moves", "Brilliant"]
    assert list(rows[0])[-3:] == ["Inaccuracy", "Mistake", "Blunder"]
    assert [row["Side"] for row in rows] == ["White", "Black"]
    assert rows[0]["Accuracy"] == "100.0"
    assert rows[0]["Book"] == "1"
    assert rows[1]["Moves"] == "1"
    assert rows[1]["Inaccuracy"] == "1"


def test_unwritable_path_raises(report, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ReportGenerationError):
        ReportGenerator().write_json_report(report, blocker / "game.json")
