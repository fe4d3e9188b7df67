# tests/core/test_classification.py
import pytest
from pydantic import ValidationError

from chess_reporter.config.settings import (AnalysisSettings,
                                            ClassificationThresholdsModel,
                                            Settings,
                                            ThresholdCoefficientsModel)
from chess_reporter.core.classification import (CENTIPAWN_CLASSIFICATIONS,
                                                get_classification_values,
                                                get_evaluation_loss_threshold,
                                                get_positive_classifications)
from chess_reporter.types import Classification

@pytest.mark.parametrize("previous_cp", [0, 150, 300, 1000, 2500])
def test_thresholds_are_ordered_by_leniency(settings, previous_cp):
    thresholds = [
        get_evaluation_loss_threshold(c, previous_cp, settings) for c in CENTIPAWN_CLASSIFICATIONS
    ]
    assert thresholds == sorted(thresholds)
    assert thresholds[-1] == float("inf")

def test_thresholds_widen_when_far_ahead(settings):
    near_equal = get_evaluation_loss_threshold(Classification.EXCELLENT, 0, settings)
    winning = get_evaluation_loss_threshold(Classification.EXCELLENT, 800, settings)
    assert near_equal == pytest.approx(27.5455)
    assert winning > near_equal

def test_threshold_ignores_sign_of_previous_evaluation(settings):
    assert get_evaluation_loss_threshold(Classification.GOOD, -300, settings) == \
        get_evaluation_loss_threshold(Classification.GOOD, 300, settings)

def test_unsorted_thresholds_are_rejected():
    with pytest.raises(ValidationError):
        ClassificationThresholdsModel(
            excellent=ThresholdCoefficientsModel(quadratic=0, linear=0, constant=500)
        )

def test_classification_values_follow_accuracy_table_order(settings):
    values = get_classification_values(settings)
    assert list(values)[0] == Classification.BLUNDER
    assert values[Classification.BLUNDER] == 0.0
    assert values[Classification.GOOD] == 0.65
    assert all(values[c] == 1.0 for c in (Classification.BEST, Classification.BOOK, Classification.FORCED))

def test_positive_classifications_are_value_table_slice(settings):
    assert get_positive_classifications(settings) == [
        Classification.EXCELLENT, Classification.BEST,
        Classification.GREAT, Classification.BRILLIANT,
    ]

def test_settings_load_nested_values_from_environment(monkeypatch):
    monkeypatch.setenv("CHESS_REPORTER_ANALYSIS_SETTINGS__GREAT_MOVE__ONLY_MOVE_GAP_CP", "200")
    assert Settings().analysis_settings.great_move.only_move_gap_cp == 200
    assert AnalysisSettings().great_move.only_move_gap_cp == 150
