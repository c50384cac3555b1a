"""Log setup for the fieldcheck CLI and engine.

Engine modules log through structlog; third-party libraries log through
the stdlib. Both end up on one stderr handler whose ProcessorFormatter
renders every event the same way, so stdout carries nothing but the
validated records.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter


def _drop_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # Keys ProcessorFormatter attaches for its own use
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Route fieldcheck and library logs to stderr.

    Args:
        json_output: One JSON object per event instead of console lines.
        level: Threshold name from LoggingSettings.level.
    """
    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    render_chain: list[Any] = [_drop_formatter_keys]
    if json_output:
        render_chain.append(structlog.processors.format_exc_info)
    render_chain.append(renderer)

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigured per CLI invocation
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=render_chain, foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module logger; pass ``__name__``."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
