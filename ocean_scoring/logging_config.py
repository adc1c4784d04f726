"""
OCEAN Scoring Engine — structlog configuration.

Services obtain their loggers with ``structlog.get_logger("ocean.<name>")``
and emit event-name style messages.  ``configure_logging`` installs the
processor chain once at process start-up.
"""

from __future__ import annotations

import logging

import structlog

from ocean_scoring.config import get_settings


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Install the structlog processor chain.

    Parameters
    ----------
    level:
        Minimum level name (``"DEBUG"``, ``"INFO"`` ...).  Defaults to
        ``Settings.LOG_LEVEL``.
    json_output:
        Render JSON lines when true, a human-readable console format
        otherwise.  Defaults to ``Settings.LOG_JSON``.
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    min_level = logging.getLevelName(level_name)
    if not isinstance(min_level, int):
        min_level = logging.INFO

    if json_output is None:
        json_output = settings.LOG_JSON
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
