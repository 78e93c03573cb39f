"""structlog setup for applications embedding the risk engine."""

from __future__ import annotations

import logging

import structlog

from portfolio_risk.config import EngineSettings, get_settings


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Set up structlog with console output, or JSON lines when ``json_logs``.

    Args:
        level: Minimum level name ("DEBUG", "INFO", ...)
        json_logs: Render events as JSON instead of the coloured console format
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(settings: EngineSettings | None = None) -> None:
    """Configure logging from ``RISK_ENGINE_LOG_LEVEL`` / ``RISK_ENGINE_LOG_JSON``."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)
