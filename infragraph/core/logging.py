"""
Logging setup for InfraGraph.

Every line carries an ``action`` (what the pipeline was doing) and a
``target`` (which upload or resource it concerned), for example::

    2026-10-18T12:00:00+0000 | INFO     | infragraph.engine.graph | action=assemble | target=prod.tfstate | Graph built: ...

Modules log through :func:`get_logger` and pass the two fields via
``extra``; the application factory calls :func:`configure_logging` once.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from infragraph.config import get_settings

_LOG_FORMAT: str = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "action=%(action)s | target=%(target)s | %(message)s"
)
_DATE_FORMAT: str = "%Y-%m-%dT%H:%M:%S%z"
_NAMESPACE: str = "infragraph"


class StructuredFormatter(logging.Formatter):
    """Fill in ``action`` and ``target`` with ``-`` when a record lacks them.

    Records from third-party loggers (uvicorn, starlette) never set these
    fields.
    """

    _FIELDS: tuple[str, ...] = ("action", "target")

    def format(self, record: logging.LogRecord) -> str:
        for name in self._FIELDS:
            if not hasattr(record, name):
                setattr(record, name, "-")
        return super().format(record)


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stdout handler to the ``infragraph`` logger and set its level.

    Args:
        level: Explicit level name.  Defaults to ``LOG_LEVEL`` from the
            settings, then ``DEBUG`` or ``INFO`` depending on ``DEBUG``.
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")).upper()

    logger = logging.getLogger(_NAMESPACE)
    logger.setLevel(level)

    # The app factory can run more than once per process in tests.
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(StructuredFormatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger.info(
        "Logging at %s",
        level,
        extra={"action": "logging_init", "target": settings.APP_NAME},
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``infragraph`` namespace.

    ``get_logger(__name__)`` from a package module is returned unchanged;
    any other name is nested under ``infragraph.``.
    """
    if name == _NAMESPACE or name.startswith(f"{_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_NAMESPACE}.{name}")
