# chess_reporter/types.py
"""
A central module for shared data structures and stage interfaces (Protocols).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional, Protocol, TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from chess_reporter.config.settings import AnalysisSettings

FEN: TypeAlias = str
Colour: TypeAlias = Literal["white", "black"]
EvaluationType: TypeAlias = Literal["cp", "mate"]

class Classification(str, Enum):
    BRILLIANT = "brilliant"; GREAT = "great"; BEST = "best"; EXCELLENT = "excellent"
    GOOD = "good"; INACCURACY = "inaccuracy"; MISTAKE = "mistake"; BLUNDER = "blunder"
    BOOK = "book"; FORCED = "forced"

# --- POSITION DATA CONTRACTS ---

@dataclass(frozen=True, slots=True)
class Evaluation:
    type: EvaluationType; value: int

    @property
    def is_mate(self) -> bool:
        return self.type == "mate"

@dataclass(slots=True)
class EngineLine:
    id: int; depth: int; evaluation: Evaluation; move_uci: str
    move_san: Optional[str] = None

@dataclass(frozen=True, slots=True)
class MoveRecord:
    san: str; uci: str

@dataclass(slots=True)
class Position:
    """A board state plus the engine lines and annotations attached to it."""
    fen: FEN
    move: Optional[MoveRecord] = None
    top_lines: List[EngineLine] = field(default_factory=list)
    cutoff_evaluation: Optional[Evaluation] = None
    worker: Optional[str] = None
    classification: Optional[Classification] = None
    opening: Optional[str] = None

    def line(self, line_id: int) -> Optional[EngineLine]:
        """Returns the engine line with the given id, or None."""
        return next((line for line in self.top_lines if line.id == line_id), None)

@dataclass(frozen=True, slots=True)
class OpeningEntry:
    fen: str; name: str

# --- CLASSIFICATION CONTRACTS ---

@dataclass(frozen=True, slots=True)
class EvaluationDeltas:
    previous: Evaluation; current: Evaluation
    previous_absolute: int; current_absolute: int
    second_absolute: int; eval_loss: float

    @property
    def no_mate(self) -> bool:
        return self.previous.type == "cp" and self.current.type == "cp"

@dataclass(frozen=True)
class MoveAnalysisContext:
    last_position: Position; position: Position; move_colour: Colour
    top_line: EngineLine; second_line: Optional[EngineLine]
    deltas: EvaluationDeltas; settings: "AnalysisSettings"

@dataclass(frozen=True, slots=True)
class ClassificationResult:
    classification: Optional[Classification]
    is_brilliant: bool = False; is_great_move: bool = False
    is_softened: bool = False

# --- REPORT CONTRACTS ---

@dataclass(frozen=True, slots=True)
class InfluencingPiece:
    square: int; color: bool; piece_type: int

@dataclass(frozen=True, slots=True)
class Accuracies:
    white: float; black: float

@dataclass
class ClassificationCounts:
    brilliant: int = 0; great: int = 0; best: int = 0; excellent: int = 0; good: int = 0
    inaccuracy: int = 0; mistake: int = 0; blunder: int = 0; book: int = 0; forced: int = 0

    def increment(self, classification: Classification) -> None:
        setattr(self, classification.value, getattr(self, classification.value) + 1)

    def as_dict(self) -> Dict[str, int]:
        return {c.value: getattr(self, c.value) for c in Classification}

@dataclass(frozen=True)
class SideCounts:
    white: ClassificationCounts; black: ClassificationCounts

@dataclass
class Report:
    accuracies: Accuracies; classifications: SideCounts; positions: List[Position]

@dataclass
class ReportContext:
    positions: List[Position]; settings: "AnalysisSettings"
    opening_book: List[OpeningEntry] = field(default_factory=list)
    report: Optional[Report] = None


# --- PROTOCOLS: Abstract Interfaces for Pipeline Components ---

class Heuristic(Protocol):
    """Protocol defining the interface for a single, composable classification heuristic."""
    def apply(self, context: "MoveAnalysisContext", result: "ClassificationResult") -> "ClassificationResult": ...

class ProcessingStage(Protocol):
    """Protocol for a single, named stage in the report pipeline."""
    def execute(self, context: "ReportContext") -> "ReportContext": ...
