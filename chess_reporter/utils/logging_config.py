# chess_reporter/utils/logging_config.py
"""
Configures structured logging for the reporter using structlog.

Library code only ever calls `structlog.get_logger(__name__)`; nothing is
rendered until an application (the CLI, or an embedding service) calls
`setup_logging`. Records from the standard `logging` module are routed
through the same processors, so third-party output looks like ours.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from structlog.types import Processor


def _shared_processors() -> List[Processor]:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _with_renderer(handler: logging.Handler, renderer: Processor, shared: List[Processor]) -> logging.Handler:
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(foreign_pre_chain=shared, processor=renderer))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_to_console: bool = True,
    log_file: Optional[Path] = None,
    force_json_console: bool = False,
    extra_processors: Optional[List[Processor]] = None,
) -> None:
    """
    Routes structlog and stdlib logging to stderr and, optionally, a file.

    Args:
        log_level: The minimum level for the root logger.
        log_to_console: Whether to log to stderr. Stdout is left free for the
            report itself.
        log_file: Optional path of a JSON-lines log file to append to.
        force_json_console: Render console output as JSON instead of the
            human-readable development renderer.
        extra_processors: Processors inserted before rendering.
    """
    shared = _shared_processors()

    structlog.configure(
        processors=shared + list(extra_processors or []) + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: List[logging.Handler] = []
    if log_to_console:
        console_renderer: Processor = (
            structlog.processors.JSONRenderer() if force_json_console
            else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
        handlers.append(_with_renderer(logging.StreamHandler(sys.stderr), console_renderer, shared))

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        handlers.append(_with_renderer(file_handler, structlog.processors.JSONRenderer(), shared))

    logging.basicConfig(handlers=handlers, level=log_level.upper(), force=True)
