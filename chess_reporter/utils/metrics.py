"""
Centralized Prometheus metrics definitions for the Chess Reporter application.

This module uses the prometheus-client library to define all metrics that will
be exposed by the application for monitoring and alerting. Grouping them here
provides a single, clear overview of the application's instrumentation points.
"""
from prometheus_client import Counter, Histogram

# A common prefix for all application-specific metrics.
PREFIX = "chess_reporter"

# --- Report Metrics ---

REPORTS_GENERATED_TOTAL = Counter(
    f"{PREFIX}_reports_generated_total",
    "Total number of reports successfully generated.",
)

REPORTS_FAILED_TOTAL = Counter(
    f"{PREFIX}_reports_failed_total",
    "Total number of report runs rejected or aborted by an error.",
    ["error_type"],  # e.g., error_type="InvalidPositionsError"
)

REPORT_GENERATION_DURATION_SECONDS = Histogram(
    f"{PREFIX}_report_generation_duration_seconds",
    "Histogram of the time taken to generate a single report.",
    buckets=(0.01, 0.05, 0.1, 0.5, 1, 2, 5, 10, float("inf"))
)

# --- Classification Metrics ---

MOVES_CLASSIFIED_TOTAL = Counter(
    f"{PREFIX}_moves_classified_total",
    "Total number of moves classified.",
    ["classification"],  # e.g., classification="blunder"
)

POSITIONS_SKIPPED_TOTAL = Counter(
    f"{PREFIX}_positions_skipped_total",
    "Total number of positions left unclassified.",
    ["reason"],  # e.g., reason="malformed"
)
