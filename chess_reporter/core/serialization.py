# chess_reporter/core/serialization.py
"""
Converts between the camelCase JSON wire format and the internal data contracts.

Positions arrive as a list of objects shaped like::

    {"fen": "...", "move": {"san": "e4", "uci": "e2e4"},
     "topLines": [{"id": 1, "depth": 18, "evaluation": {"type": "cp", "value": 20},
                   "moveUCI": "e7e5"}],
     "cutoffEvaluation": {"type": "cp", "value": 25}, "worker": "cloud"}

and reports leave in the same shape, with `classification`, `opening` and
line `moveSAN` filled in.
"""

from typing import Any, Dict, List, Optional

from chess_reporter.exceptions import PositionDecodeError
from chess_reporter.types import (Classification, EngineLine, Evaluation,
                                  MoveRecord, Position, Report)

_EVALUATION_TYPES = ("cp", "mate")

# Longest game a single report accepts.
MAX_POSITIONS = 600


def _string(value: Any, field_name: str, required: bool = False) -> str:
    """Returns `value` if it is a string, non-blank when `required`."""
    if not isinstance(value, str) or (required and not value.strip()):
        raise ValueError(f"'{field_name}' must be a {'non-empty ' if required else ''}string.")
    return value


def _optional_string(value: Any, field_name: str) -> Optional[str]:
    return None if value is None else _string(value, field_name)


def decode_evaluation(raw: Dict[str, Any]) -> Evaluation:
    eval_type = raw["type"]
    if eval_type not in _EVALUATION_TYPES:
        raise ValueError(f"Unknown evaluation type: {eval_type!r}")
    return Evaluation(type=eval_type, value=int(raw["value"]))


def decode_engine_line(raw: Dict[str, Any]) -> EngineLine:
    return EngineLine(
        id=int(raw["id"]),
        depth=int(raw.get("depth", 0)),
        evaluation=decode_evaluation(raw["evaluation"]),
        move_uci=_string(raw.get("moveUCI", ""), "moveUCI"),
        move_san=_optional_string(raw.get("moveSAN"), "moveSAN"),
    )


def decode_position(raw: Dict[str, Any], require_move: bool = False) -> Position:
    """
    Decodes one wire position. Lines are sorted by id.

    Every position after the first must carry a move and a `topLines` list;
    `require_move` enforces that.
    """
    if not isinstance(raw, dict):
        raise ValueError("Position must be an object.")

    move = raw.get("move")
    if move is not None or require_move:
        if not isinstance(move, dict):
            raise ValueError("'move' must be an object.")
        move = MoveRecord(
            san=_string(move.get("san", ""), "move.san"),
            uci=_string(move.get("uci"), "move.uci", required=True),
        )

    top_lines = raw.get("topLines")
    if top_lines is None and not require_move:
        top_lines = []
    if not isinstance(top_lines, list):
        raise ValueError("'topLines' must be a list.")

    cutoff = raw.get("cutoffEvaluation")
    classification = raw.get("classification")
    return Position(
        fen=_string(raw.get("fen"), "fen", required=True),
        move=move,
        top_lines=sorted((decode_engine_line(line) for line in top_lines), key=lambda l: l.id),
        cutoff_evaluation=decode_evaluation(cutoff) if cutoff else None,
        worker=_optional_string(raw.get("worker"), "worker"),
        classification=Classification(classification) if classification else None,
        opening=_optional_string(raw.get("opening"), "opening"),
    )


def decode_positions(payload: Any) -> List[Position]:
    """
    Decodes a list of wire positions.

    Raises:
        PositionDecodeError: If the payload is not a list, holds more than
            `MAX_POSITIONS` entries, or any position is missing required
            fields or holds values of the wrong type.
    """
    if not isinstance(payload, list):
        raise PositionDecodeError("Positions payload must be a list.")
    if len(payload) > MAX_POSITIONS:
        raise PositionDecodeError(f"Too many positions ({len(payload)}, max {MAX_POSITIONS}).")
    positions: List[Position] = []
    for i, raw in enumerate(payload):
        try:
            positions.append(decode_position(raw, require_move=i > 0))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PositionDecodeError(f"Position {i} could not be decoded: {e}") from e
    return positions


def _encode_evaluation(evaluation: Optional[Evaluation]) -> Optional[Dict[str, Any]]:
    if evaluation is None:
        return None
    return {"type": evaluation.type, "value": evaluation.value}


def encode_position(position: Position) -> Dict[str, Any]:
    encoded: Dict[str, Any] = {
        "fen": position.fen,
        "topLines": [
            {
                "id": line.id,
                "depth": line.depth,
                "evaluation": _encode_evaluation(line.evaluation),
                "moveUCI": line.move_uci,
                **({"moveSAN": line.move_san} if line.move_san is not None else {}),
            }
            for line in position.top_lines
        ],
    }
    if position.move:
        encoded["move"] = {"san": position.move.san, "uci": position.move.uci}
    if position.cutoff_evaluation:
        encoded["cutoffEvaluation"] = _encode_evaluation(position.cutoff_evaluation)
    if position.worker is not None:
        encoded["worker"] = position.worker
    if position.classification is not None:
        encoded["classification"] = position.classification.value
    if position.opening is not None:
        encoded["opening"] = position.opening
    return encoded


def encode_report(report: Report) -> Dict[str, Any]:
    """Encodes a `Report` into the wire format."""
    return {
        "accuracies": {
            "white": report.accuracies.white,
            "black": report.accuracies.black,
        },
        "classifications": {
            "white": report.classifications.white.as_dict(),
            "black": report.classifications.black.as_dict(),
        },
        "positions": [encode_position(p) for p in report.positions],
    }
