# tests/core/test_opening_tagger.py
import json

import chess
import pytest

from chess_reporter.core.opening_book import (load_opening_book,
                                              parse_opening_book)
from chess_reporter.core.opening_tagger import (apply_book_moves,
                                                build_opening_index,
                                                tag_openings)
from chess_reporter.exceptions import OpeningBookError
from chess_reporter.types import Classification, OpeningEntry, Position

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
AFTER_E4_E5 = "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2"
AFTER_NF3 = "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"


def test_first_entry_for_a_placement_wins():
    index = build_opening_index([
        OpeningEntry(fen="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR", name="King's Pawn"),
        OpeningEntry(fen=AFTER_E4, name="Duplicate"),
    ])
    assert index == {"rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR": "King's Pawn"}


def test_tag_openings_matches_placement_only():
    # Move counters differ from the book entry.
    positions = [Position(fen="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 5 9")]
    tag_openings(positions, [OpeningEntry(fen=AFTER_E4, name="King's Pawn")])
    assert positions[0].opening == "King's Pawn"


def test_tag_openings_includes_first_position():
    positions = [Position(fen=chess.STARTING_FEN)]
    tag_openings(positions, [OpeningEntry(fen=chess.STARTING_FEN, name="Starting Position")])
    assert positions[0].opening == "Starting Position"


def test_book_moves_stop_at_first_ineligible_move(settings):
    positions = [
        Position(fen=chess.STARTING_FEN),
        Position(fen=AFTER_E4, opening="King's Pawn", classification=Classification.BEST),
        Position(fen=AFTER_E4_E5, classification=Classification.GOOD),
        Position(fen=AFTER_NF3, opening="King's Knight", classification=Classification.BEST),
    ]

    apply_book_moves(positions, settings)

    assert positions[0].classification is None
    assert positions[1].classification == Classification.BOOK
    assert positions[2].classification == Classification.GOOD
    assert positions[3].classification == Classification.BEST


@pytest.mark.parametrize("classification, promoted", [
    (Classification.EXCELLENT, True),
    (Classification.BEST, True),
    (Classification.BRILLIANT, True),
    (Classification.GOOD, False),
    (Classification.FORCED, False),
])
def test_cloud_positions_with_positive_classification_are_book(settings, classification, promoted):
    positions = [
        Position(fen=chess.STARTING_FEN),
        Position(fen=AFTER_E4, worker="cloud", classification=classification),
    ]

    apply_book_moves(positions, settings)

    assert (positions[1].classification == Classification.BOOK) is promoted


def test_local_positions_need_an_opening(settings):
    positions = [
        Position(fen=chess.STARTING_FEN),
        Position(fen=AFTER_E4, worker="local", classification=Classification.BEST),
    ]
    apply_book_moves(positions, settings)
    assert positions[1].classification == Classification.BEST


def test_bundled_book_loads():
    entries = load_opening_book()
    index = build_opening_index(entries)
    assert index["rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"] == "King's Pawn Opening"


def test_load_custom_book(tmp_path):
    path = tmp_path / "book.json"
    path.write_text(json.dumps([{"fen": AFTER_E4, "name": "Custom"}]), encoding="utf-8")
    assert load_opening_book(path) == [OpeningEntry(fen=AFTER_E4, name="Custom")]


def test_missing_book_file_raises(tmp_path):
    with pytest.raises(OpeningBookError):
        load_opening_book(tmp_path / "missing.json")


@pytest.mark.parametrize("raw", [{"fen": "x"}, [{"fen": "x"}], [{"fen": 1, "name": "x"}]])
def test_malformed_book_raises(raw):
    with pytest.raises(OpeningBookError):
        parse_opening_book(raw)
