"""structlog setup for applications embedding the client."""

import logging

import structlog

from zb_client.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog rendering and level filtering.

    Args:
        settings: Optional settings instance (defaults to global settings)
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)

    renderer: structlog.typing.Processor
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
