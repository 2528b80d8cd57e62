"""structlog setup for processes embedding the driver.

The library itself only calls structlog.get_logger(); configuring output is
left to the host process.
"""

import logging

import structlog


def configure_logging(level: str = "INFO", *, json: bool = False) -> None:
    """Configure structlog with level filtering and a timestamped renderer.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ...)
        json: Render JSON lines instead of the console format
    """
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )
