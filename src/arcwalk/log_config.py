"""structlog setup for arcwalk.

Library modules only ask for loggers through get_logger; nothing is
configured on import. Applications call configure_logging (or
ArcwalkConfig.apply_logging) once at startup, and can scope extra fields
to a block of graph work with log_context.

Example:
    >>> from arcwalk.log_config import configure_logging, get_logger, log_context
    >>> configure_logging(level="DEBUG", json_logs=False)
    >>> with log_context(graph="build-deps"):
    ...     get_logger(__name__).debug("schedule_built", vertex_count=12)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog


def _processors(json_logs: bool) -> list[Any]:
    """Processor chain ending in the JSON or console renderer.

    Events below the stdlib level are dropped first so disabled DEBUG
    events from traversals are never rendered.
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        )

    return processors


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Route arcwalk events through the standard library at ``level``.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON lines when True, plain console lines otherwise

    Raises:
        ValueError: If an invalid log level is provided
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        msg = f"Invalid log level: {level}"
        raise ValueError(msg)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(numeric_level)

    structlog.configure(
        processors=_processors(json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return the structlog logger for a module, usually ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach ``fields`` to every event logged inside the block.

    Fields bound before the block are restored on exit, including when the
    block raises.

    Example:
        >>> with log_context(graph="build-deps"):
        ...     topological_sort(graph)  # topological_sort_complete carries graph
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield
