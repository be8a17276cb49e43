"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from vxsig.diff.models import AddressPair, Granularity

if TYPE_CHECKING:
    from vxsig.config.models import LoggingConfig


def render_diff_values(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Show AddressPairs as hex and Granularities by label."""
    for key, value in event_dict.items():
        if isinstance(value, AddressPair):
            event_dict[key] = str(value)
        elif isinstance(value, Granularity):
            event_dict[key] = value.label
    return event_dict


def bind_diff_path(path: str | Path) -> AbstractContextManager[object]:
    """Tag every event logged inside the block with ``diff_path``."""
    return structlog.contextvars.bound_contextvars(diff_path=str(path))


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog with console or JSON rendering on stderr."""
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        render_diff_values,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def setup_logging_from_config(config: LoggingConfig, verbose: bool = False) -> None:
    setup_logging(level="DEBUG" if verbose else config.level, json_output=config.json_output)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
