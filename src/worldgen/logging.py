"""structlog setup shared by the CLI and embedding applications."""

import logging

import structlog


def configure_logging(level: str | int = "info") -> None:
    """Configure structlog with console output.

    Args:
        level: Minimum level, as a name ("debug", "info", ...) or a
            stdlib logging constant.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
