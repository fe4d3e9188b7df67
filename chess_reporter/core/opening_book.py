# chess_reporter/core/opening_book.py
"""
Loads opening reference data from JSON.

The book is an ordered list of `{"fen": ..., "name": ...}` objects. `fen` may
be a full FEN or just its placement field. The bundled book ships in
`chess_reporter/resources/openings.json`; a different file can be configured
through `BookSettingsModel.openings_path`.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

import structlog

from chess_reporter.exceptions import OpeningBookError
from chess_reporter.types import OpeningEntry

logger = structlog.get_logger(__name__)

BUNDLED_OPENINGS_PATH = Path(__file__).resolve().parent.parent / "resources" / "openings.json"


def parse_opening_book(raw_entries: object) -> List[OpeningEntry]:
    """
    Converts decoded JSON into `OpeningEntry` objects, preserving order.

    Raises:
        OpeningBookError: If the data is not a list of objects with string
            `fen` and `name` fields.
    """
    if not isinstance(raw_entries, list):
        raise OpeningBookError("Opening book must be a JSON list.")

    entries: List[OpeningEntry] = []
    for i, raw in enumerate(raw_entries):
        try:
            fen, name = raw["fen"], raw["name"]
        except (KeyError, TypeError) as e:
            raise OpeningBookError(f"Opening book entry {i} is missing 'fen' or 'name'.") from e
        if not isinstance(fen, str) or not isinstance(name, str):
            raise OpeningBookError(f"Opening book entry {i} has non-string fields.")
        entries.append(OpeningEntry(fen=fen, name=name))
    return entries


def load_opening_book(path: Optional[Union[str, Path]] = None) -> List[OpeningEntry]:
    """
    Reads an opening book from disk.

    Args:
        path: The JSON file to read. Defaults to the bundled book.

    Returns:
        The entries in file order.

    Raises:
        OpeningBookError: If the file cannot be read or parsed.
    """
    book_path = Path(path) if path else BUNDLED_OPENINGS_PATH
    try:
        with book_path.open("r", encoding="utf-8") as f:
            raw_entries = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise OpeningBookError(f"Failed to read opening book from {book_path}") from e

    entries = parse_opening_book(raw_entries)
    logger.debug("Loaded opening book.", path=str(book_path), entries=len(entries))
    return entries
