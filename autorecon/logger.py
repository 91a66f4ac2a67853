"""structlog setup shared by the API and the reconciliation services.

structlog events and plain ``logging`` records go through one stdout handler:
readable console lines when ``DEBUG`` is on, one JSON object per line otherwise.
Request-scoped fields bound with ``structlog.contextvars`` (``request_id``) are
merged into every event.
"""

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from autorecon.config import settings

SHARED_PROCESSORS: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.format_exc_info,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _select_renderer(debug: bool) -> Processor:
    if debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(debug: bool | None = None) -> None:
    """Install the stdout handler; ``debug`` defaults to ``settings.debug``."""
    if debug is None:
        debug = settings.debug

    structlog.configure(
        processors=[*SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_select_renderer(debug),
            foreign_pre_chain=SHARED_PROCESSORS,
        )
    )
    logging.basicConfig(handlers=[handler], level=logging.DEBUG if debug else logging.INFO)


def get_logger(name: str | None = None) -> BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def log_timing(
    operation: str,
    logger: BoundLogger | None = None,
    level: str = "info",
    **context: Any,
) -> Iterator[dict[str, Any]]:
    """Log ``"<operation> completed"`` with ``duration_ms`` when the block exits.

    Fields put into the yielded dict are logged too, which lets a caller report
    results known only at the end:

        with log_timing("reconcile", logger=logger, bank_records=len(bank)) as timing:
            outcomes = run(bank, book)
            timing["outcomes"] = len(outcomes)

    ``duration_ms`` is written back into the dict. The event is logged even when
    the block raises.
    """
    log = logger or get_logger(__name__)
    fields: dict[str, Any] = {}
    started = time.perf_counter()
    try:
        yield fields
    finally:
        fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        emit = getattr(log, level, log.info)
        emit(f"{operation} completed", operation=operation, **context, **fields)


def log_exception(
    logger: BoundLogger,
    exc: BaseException,
    message: str,
    *,
    level: str = "error",
    include_traceback: bool = True,
    **extra: Any,
) -> None:
    """Log ``exc`` under ``message`` with its type and defining module attached."""
    fields: dict[str, Any] = {
        "error": str(exc),
        "error_type": type(exc).__name__,
        "error_module": type(exc).__module__,
        **extra,
    }
    if include_traceback:
        fields["exc_info"] = exc
    emit = getattr(logger, level, logger.error)
    emit(message, **fields)
