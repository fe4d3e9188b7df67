# chess_reporter/exceptions.py
"""
Defines custom exceptions for the Chess Reporter application.

Centralizing exceptions in this module prevents circular dependencies that can
arise when different components need to catch errors defined in others. A clear
exception hierarchy, with a common `ChessReporterError` base, lets callers
treat any failure as "failed to generate report" while still being able to
inspect the specific cause.
"""


class ChessReporterError(Exception):
    """Base class for all application-specific, catchable errors."""
    pass


class InvalidPositionsError(ChessReporterError):
    """
    Raised when the position list handed to the report pipeline is structurally
    invalid, i.e. it is not a list or it is empty.

    Individual malformed positions never raise; they are skipped instead.
    """
    pass


class PositionDecodeError(ChessReporterError):
    """
    Raised when a wire payload cannot be decoded into `Position` objects.

    This wraps lower-level `KeyError`, `TypeError` and `ValueError` exceptions
    raised while reading the camelCase JSON shape.
    """
    pass


class OpeningBookError(ChessReporterError):
    """Raised when the opening reference data cannot be read or is malformed."""
    pass


class ReportGenerationError(ChessReporterError):
    """Raised for errors encountered while writing a finished report to disk."""
    pass
