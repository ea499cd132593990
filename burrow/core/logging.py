from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import IO, Any

LOG_DIR_ENV = "BURROW_LOG_DIR"

_FORMATS = {
    "json": "%(message)s",
    "text": "%(asctime)s %(levelname)-7s %(name)s %(message)s",
}


def get_logger(name: str = "burrow") -> logging.Logger:
    return logging.getLogger(name)


def _build_handler(
    stream: IO[str] | None, log_dir: Path | None, filename: str
) -> logging.Handler:
    if stream is not None:
        return logging.StreamHandler(stream)
    env_dir = os.environ.get(LOG_DIR_ENV)
    if env_dir:
        log_dir = Path(env_dir)
    if log_dir is None:
        # The terminal belongs to the UI; without a destination nothing is written.
        return logging.NullHandler()
    log_dir.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_dir / filename, encoding="utf-8")


def configure_logging(
    *,
    level: str = "info",
    format_name: str = "json",
    stream: IO[str] | None = None,
    log_dir: Path | None = None,
    filename: str = "burrow.log",
) -> logging.Handler:
    """Attach one handler to the ``burrow`` logger and return it.

    ``stream`` wins over files. Otherwise ``BURROW_LOG_DIR`` or ``log_dir``
    selects a file, and with neither set records are dropped.
    """
    handler = _build_handler(stream, log_dir, filename)
    handler.setFormatter(logging.Formatter(_FORMATS.get(format_name, _FORMATS["json"])))

    logger = get_logger()
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.strip().upper(), logging.INFO))
    logger.propagate = False
    return handler


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit ``event`` and ``fields`` as one JSON object."""
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, sort_keys=True, default=str))
