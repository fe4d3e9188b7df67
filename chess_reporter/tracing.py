# chess_reporter/tracing.py

"""
tracing
~~~~~~~

This module provides components for report-wide traceability and
context-aware logging.
"""

import functools
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable

import structlog

logger = structlog.get_logger(__name__)

@dataclass(frozen=True, slots=True)
class CorrelationID:
    """A unique identifier for a single report run."""
    run_id: str

    @classmethod
    def new(cls) -> "CorrelationID":
        return cls(run_id=uuid.uuid4().hex)

    @property
    def short_id(self) -> str:
        """A short, human-readable version of the full ID."""
        return self.run_id[:8]


def trace_stage(func: Callable) -> Callable:
    """A decorator to add structured tracing to a processing stage."""
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        stage_name = args[0].__class__.__name__
        logger.debug("Entering processing stage.", stage=stage_name)
        started = time.perf_counter()
        result = func(*args, **kwargs)
        logger.debug("Exiting processing stage.", stage=stage_name,
                     elapsed_ms=round((time.perf_counter() - started) * 1000, 2))
        return result
    return wrapper
