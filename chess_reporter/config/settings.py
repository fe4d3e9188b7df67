# chess_reporter/config/settings.py
"""
Configuration settings for the Chess Reporter application, powered by Pydantic.

This module centralizes all tunable parameters, default values, and configuration
schemas. Using Pydantic allows for type-safe, self-documenting configuration
that can be loaded from environment variables, providing a clear separation of
configuration from code.
"""
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Nested Models for Configuration Schemas ---

class ThresholdCoefficientsModel(BaseModel):
    """
    Coefficients of a quadratic evaluation-loss threshold.

    The threshold for a previous evaluation `p` (in centipawns, sign ignored)
    is `quadratic * p**2 + linear * p + constant`, clamped at zero.
    """
    quadratic: float
    linear: float
    constant: float

    def threshold(self, previous_cp: float) -> float:
        p = abs(previous_cp)
        return max(self.quadratic * p ** 2 + self.linear * p + self.constant, 0.0)

class ClassificationThresholdsModel(BaseModel):
    """
    Defines the evaluation-loss thresholds for the centipawn classifications.

    A move whose evaluation loss is at or below a classification's threshold
    receives that classification. Anything worse than `mistake` is a Blunder.
    """
    excellent: ThresholdCoefficientsModel = Field(
        default_factory=lambda: ThresholdCoefficientsModel(quadratic=0.0002, linear=0.1231, constant=27.5455))
    good: ThresholdCoefficientsModel = Field(
        default_factory=lambda: ThresholdCoefficientsModel(quadratic=0.0002, linear=0.2643, constant=60.5455))
    inaccuracy: ThresholdCoefficientsModel = Field(
        default_factory=lambda: ThresholdCoefficientsModel(quadratic=0.0002, linear=0.3624, constant=108.0909))
    mistake: ThresholdCoefficientsModel = Field(
        default_factory=lambda: ThresholdCoefficientsModel(quadratic=0.0003, linear=0.4027, constant=225.8182))

    @model_validator(mode='after')
    def validate_thresholds_are_sorted(self) -> 'ClassificationThresholdsModel':
        """Ensures that thresholds grow more lenient from Excellent to Mistake."""
        values = [c.threshold(0) for c in (self.excellent, self.good, self.inaccuracy, self.mistake)]
        if not all(values[i] <= values[i + 1] for i in range(len(values) - 1)):
            raise ValueError("Configuration error: Classification loss thresholds must be sorted.")
        return self

class BrilliantMoveCriteriaModel(BaseModel):
    """Defines the criteria for a Best move to be upgraded to 'Brilliant'."""
    winning_anyway_cp: int = Field(700, description="If the second-best line is already at least this good, no move is brilliant.")
    minimum_absolute_evaluation: int = Field(0, description="The evaluation after the move must be at least this good for the mover.")
    mate_in_one_exempt_value: int = Field(5, description="Sacrificed pieces worth at least this are not excused by a mate-in-one after their capture.")

class GreatMoveCriteriaModel(BaseModel):
    """Defines the criteria for a Best move to be upgraded to 'Great'."""
    only_move_gap_cp: int = Field(150, description="Minimum gap between the top two engine lines for the move to be an 'only move'.")

class BlunderSofteningModel(BaseModel):
    """Thresholds under which a Blunder is relabelled as Good."""
    still_winning_cp: int = Field(600, description="A blunder leaving the mover at least this far ahead is only Good.")
    already_lost_cp: int = Field(-600, description="A blunder from a position at or below this evaluation is only Good.")

class AccuracyValuesModel(BaseModel):
    """Per-classification accuracy credit, in the order used to pick book-eligible moves."""
    blunder: float = Field(0.0, ge=0.0, le=1.0)
    mistake: float = Field(0.2, ge=0.0, le=1.0)
    inaccuracy: float = Field(0.4, ge=0.0, le=1.0)
    good: float = Field(0.65, ge=0.0, le=1.0)
    excellent: float = Field(0.9, ge=0.0, le=1.0)
    best: float = Field(1.0, ge=0.0, le=1.0)
    great: float = Field(1.0, ge=0.0, le=1.0)
    brilliant: float = Field(1.0, ge=0.0, le=1.0)
    book: float = Field(1.0, ge=0.0, le=1.0)
    forced: float = Field(1.0, ge=0.0, le=1.0)

class BookSettingsModel(BaseModel):
    """Encapsulates settings for opening detection and book promotion."""
    cloud_worker_tag: str = Field("cloud", description="Worker tag marking positions evaluated by a cloud source.")
    openings_path: Optional[str] = Field(None, description="Optional path to a JSON opening book replacing the bundled one.")

class AnalysisSettings(BaseModel):
    """Groups all settings related to the core classification logic."""
    classification_thresholds: ClassificationThresholdsModel = Field(default_factory=ClassificationThresholdsModel)
    brilliant_move: BrilliantMoveCriteriaModel = Field(default_factory=BrilliantMoveCriteriaModel)
    great_move: GreatMoveCriteriaModel = Field(default_factory=GreatMoveCriteriaModel)
    blunder_softening: BlunderSofteningModel = Field(default_factory=BlunderSofteningModel)
    accuracy: AccuracyValuesModel = Field(default_factory=AccuracyValuesModel)
    book: BookSettingsModel = Field(default_factory=BookSettingsModel)

# --- Main Application Settings Class ---

class Settings(BaseSettings):
    """
    Main configuration class for the application.

    It loads settings from environment variables with the prefix 'CHESS_REPORTER_'.
    Nested models can be configured using a double underscore delimiter, e.g.,
    `CHESS_REPORTER_ANALYSIS_SETTINGS__GREAT_MOVE__ONLY_MOVE_GAP_CP=200`.
    """
    model_config = SettingsConfigDict(env_prefix='CHESS_REPORTER_', env_nested_delimiter='__')

    analysis_settings: AnalysisSettings = Field(default_factory=AnalysisSettings)
    default_log_level: str = "INFO"

# A singleton instance of the settings, accessible throughout the application.
settings = Settings()
