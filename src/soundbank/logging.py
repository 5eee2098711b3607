"""Structured logging setup for the sound bank."""
from __future__ import annotations

import logging
import sys
from typing import Literal, TextIO

import structlog

Renderer = Literal["json", "console"]

_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a lazy logger whose records carry ``component``."""
    return structlog.get_logger(f"soundbank.{component}", component=component)


def configure_logging(
    level: str | None = None,
    *,
    renderer: Renderer = "json",
    stream: TextIO | None = None,
) -> None:
    """Route structlog through stdlib logging onto ``stream`` (stderr by default).

    With the ``json`` renderer every record is one JSON object carrying
    ``level``, ``ts``, ``msg`` and ``component`` next to the bound context.
    ``console`` gives the same fields in a human-readable line. stdout stays
    reserved for command output.

    Loggers are not cached, so calling this again (once per CLI invocation)
    takes effect for module-level loggers created earlier.
    """

    numeric_level = _LEVELS.get((level or "info").lower(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
        format="%(message)s",
        force=True,
    )

    final: structlog.typing.Processor
    if renderer == "console":
        final = structlog.dev.ConsoleRenderer(colors=False, event_key="msg")
    else:
        final = structlog.processors.JSONRenderer(sort_keys=True)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            _default_component,
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            final,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def _default_component(
    logger: logging.Logger, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if "component" not in event_dict:
        name = getattr(logger, "name", "") or "soundbank"
        event_dict["component"] = name.removeprefix("soundbank.") or "soundbank"
    return event_dict


__all__ = ["Renderer", "configure_logging", "get_logger"]
