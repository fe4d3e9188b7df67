# chess_reporter/core/classification.py
"""
Static tables describing the classification kinds.

This module holds the orderings the rest of the core relies on: the
favourability order used for presentation, the centipawn threshold walk used
by the classifier, and the accuracy-value table whose key order decides which
classifications count as "positive" for book promotion.
"""

from typing import Dict, Final, List, TYPE_CHECKING

from chess_reporter.types import Classification

if TYPE_CHECKING:
    from chess_reporter.config.settings import AnalysisSettings

# Most to least favourable. Book and Forced are neutral.
FAVOURABILITY_ORDER: Final[List[Classification]] = [
    Classification.BRILLIANT,
    Classification.GREAT,
    Classification.BEST,
    Classification.EXCELLENT,
    Classification.GOOD,
    Classification.BOOK,
    Classification.FORCED,
    Classification.INACCURACY,
    Classification.MISTAKE,
    Classification.BLUNDER,
]

# Classifications reachable through the cp -> cp threshold walk, most lenient last.
CENTIPAWN_CLASSIFICATIONS: Final[List[Classification]] = [
    Classification.EXCELLENT,
    Classification.GOOD,
    Classification.INACCURACY,
    Classification.MISTAKE,
    Classification.BLUNDER,
]

# Slice of the accuracy-value table (in key order) whose members may be promoted to Book.
POSITIVE_CLASSIFICATION_SLICE: Final[slice] = slice(4, 8)


def get_evaluation_loss_threshold(
    classification: Classification, previous_cp: float, settings: "AnalysisSettings"
) -> float:
    """
    Returns the maximum evaluation loss for `classification` to apply.

    Thresholds widen as the absolute previous evaluation grows, so losing a
    little when already far ahead is punished less than near equality.
    Classifications without a configured threshold (Blunder) accept any loss.
    """
    coefficients = getattr(settings.classification_thresholds, classification.value, None)
    if coefficients is None:
        return float("inf")
    return coefficients.threshold(previous_cp)


def get_classification_values(settings: "AnalysisSettings") -> Dict[Classification, float]:
    """
    Returns the accuracy credit of each classification.

    The dictionary preserves the declaration order of `AccuracyValuesModel`,
    from Blunder up to Forced.
    """
    return {
        Classification(name): value
        for name, value in settings.accuracy.model_dump().items()
    }


def get_positive_classifications(settings: "AnalysisSettings") -> List[Classification]:
    """Returns the classifications eligible for promotion to Book on cloud-evaluated moves."""
    return list(get_classification_values(settings))[POSITIVE_CLASSIFICATION_SLICE]
