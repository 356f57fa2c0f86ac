"""
Logging Configuration for Retail Sales Analytics

structlog events are routed through the standard library so that polars,
pydantic and application messages share one handler. Report tables are
printed to stdout by the CLI, so log lines always go to stderr.
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.processors import JSONRenderer, TimeStamper
from structlog.stdlib import ProcessorFormatter
from structlog.typing import Processor

from retail_analytics.config.settings import get_settings

LOG_FORMATS = ("json", "text")


def _pre_chain() -> List[Processor]:
    """Processors applied to structlog and foreign stdlib records alike"""
    return [
        # report_run and other bound context
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structured logging for a CLI or library run.

    Args:
        log_level: Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
        log_format: Override LOG_FORMAT ("json" or "text")
    """
    settings = get_settings()
    monitoring = settings.monitoring
    level_name = (log_level or monitoring.log_level).upper()
    log_format = (log_format or monitoring.log_format).lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Log format must be one of: {list(LOG_FORMATS)}")

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    pre_chain = _pre_chain()
    structlog.configure(
        processors=pre_chain + [ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[ProcessorFormatter.remove_processors_meta, _renderer(log_format)],
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        app=settings.app_name,
        version=settings.version,
        environment=settings.app_env,
        level=level_name,
        format=log_format,
    )


def get_logger(name: str):
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)
