"""Structured logging configuration for ScholarQuest.

Two renderers are available:
- JSON renderer for machine-readable logs (scripts, piping)
- Console renderer for the interactive CLI, with Rich tracebacks
"""

import logging

import structlog
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    TimeStamper,
    add_log_level,
    format_exc_info,
)


def configure_logging(cli_mode: bool = False, log_level: str = "WARNING") -> None:
    """Configure structlog with appropriate renderer.
    
    Args:
        cli_mode: If True, use the colored console renderer with Rich
                  exception formatting.
                  If False, use JSON renderer for machine-readable logs.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    processors = [
        add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
    ]

    if cli_mode:
        # ConsoleRenderer formats exc_info itself; format_exc_info would pre-empt it
        from structlog.dev import ConsoleRenderer, rich_traceback
        renderer = ConsoleRenderer(colors=True, exception_formatter=rich_traceback)
    else:
        processors.append(format_exc_info)
        renderer = JSONRenderer()

    processors.append(renderer)

    level = getattr(logging, log_level.upper(), logging.WARNING)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.
    
    Args:
        name: Optional logger name (typically __name__ of the calling module)
        
    Returns:
        Configured structlog logger
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()
