import logging
import os
import sys

import structlog
from structlog.types import FilteringBoundLogger

# Library callers see nothing until configure_logging() installs a handler.
logging.getLogger("structconv").addHandler(logging.NullHandler())


def configure_logging(
    level: str = "WARNING", format_type: str = "human", structured: bool = False
) -> None:
    """Configure structured logging with structlog.

    Logs are written to stderr so converted documents on stdout can be
    piped without log lines mixed in.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_type: "json" for machine-readable logs, "human" for dev
        structured: Whether to add call-site processors
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        stream=sys.stderr,
        format="%(message)s",  # structlog will handle formatting
        force=True,
    )

    is_human = format_type == "human" or os.getenv(
        "STRUCTCONV_LOG_HUMAN", ""
    ).lower() in ("1", "true", "yes")

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if structured:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    if is_human:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "structconv") -> FilteringBoundLogger:
    """Get a structured logger instance.

    The logger always writes through the stdlib logger ``name``, so output
    follows the handlers and level of the ``logging`` tree instead of
    structlog's default print-to-stdout logger.

    Examples:
        log = get_logger(__name__)
        log.debug("Converted document", source="xml", target="json")
        log.warning("Conversion failed", error=str(e))
    """
    return structlog.wrap_logger(logging.getLogger(name))
