"""Structured logging setup for the moviecache layer.

``configure_logging`` is called once by the composition root
(:func:`moviecache.main.build_all`) with the application's
:class:`~moviecache.config.settings.Settings`:

- ``log_level`` sets the structlog filtering level and the level of the
  stdlib bridge handler.
- ``app_env == "production"`` selects the JSONRenderer; any other
  environment gets the coloured ConsoleRenderer.

The cache layer is embedded in a host application, so it never clears the
root logger.  It installs one named stdlib handler (so ``aiosqlite``
records come out in the same format) and replaces only that handler on
reconfiguration.  Importing a moviecache module configures nothing.
"""

import logging
import sys

import structlog

from moviecache.config.settings import Settings

HANDLER_NAME = "moviecache"


def configure_logging(app_settings: Settings) -> structlog.BoundLogger:
    """Configure structlog and the stdlib bridge from *app_settings*.

    Args:
        app_settings: Settings providing ``log_level`` and ``app_env``.

    Returns:
        A configured structlog BoundLogger.
    """
    level = logging.getLevelName(app_settings.log_level.upper())
    use_json = app_settings.app_env == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    return structlog.get_logger(logger_name="moviecache")
