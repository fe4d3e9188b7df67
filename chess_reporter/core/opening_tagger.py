# chess_reporter/core/opening_tagger.py
"""
Provides pure functions to name openings and promote early moves to Book.

Positions are matched on the piece-placement field of their FEN only, so
transpositions with different move counters or castling rights still match.
"""

from typing import Dict, Iterable, List, TYPE_CHECKING

from chess_reporter.core.chess_utils import get_placement
from chess_reporter.core.classification import get_positive_classifications
from chess_reporter.types import Classification

if TYPE_CHECKING:
    from chess_reporter.config.settings import AnalysisSettings
    from chess_reporter.types import OpeningEntry, Position


def build_opening_index(entries: Iterable["OpeningEntry"]) -> Dict[str, str]:
    """Maps each placement to its opening name. The first entry for a placement wins."""
    index: Dict[str, str] = {}
    for entry in entries:
        placement = get_placement(entry.fen)
        if placement and entry.name and placement not in index:
            index[placement] = entry.name
    return index


def tag_openings(positions: List["Position"], entries: Iterable["OpeningEntry"]) -> None:
    """Sets `opening` on every position whose placement is in the book, including position 0."""
    index = build_opening_index(entries)
    for position in positions:
        position.opening = index.get(get_placement(position.fen))


def apply_book_moves(positions: List["Position"], settings: "AnalysisSettings") -> None:
    """
    Promotes the leading run of book-eligible moves to Book.

    A move is eligible when its position has an opening name, or when it was
    evaluated by the cloud worker and holds a positive classification. The
    scan stops at the first ineligible move; later moves are never promoted.
    """
    positive = get_positive_classifications(settings)
    cloud_tag = settings.book.cloud_worker_tag

    for position in positions[1:]:
        cloud_positive = position.worker == cloud_tag and position.classification in positive
        if not (cloud_positive or position.opening):
            break
        position.classification = Classification.BOOK
