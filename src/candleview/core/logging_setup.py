"""Console and rotating-file logging for candleview applications.

Engine modules only call ``logging.getLogger(__name__)``, so every record
they emit lives under the ``candleview`` package logger.  An application
(for example ``scripts/render_preview.py``) calls :func:`setup_logger` once
with no name to route all of them, including the DEBUG lines for scale
recomputes and flat-range fallbacks, to ``stderr`` and ``logs/candleview.log``.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from candleview.core.exceptions import ConfigError

PACKAGE_LOGGER = "candleview"

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 10 MB max per file, keep 5 backups
_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

# handlers installed per logger name, so a second call only adjusts levels
_installed: dict[str, list[logging.Handler]] = {}


def resolve_level(level: int | str) -> int:
    """Numeric level for ``10``, ``"debug"`` or ``"WARNING"``.

    Raises
    ------
    ConfigError
        If *level* is a string that is not a registered level name.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ConfigError(f"Unknown log level {level!r}.")
    return value


def setup_logger(
    name: str = PACKAGE_LOGGER,
    log_dir: Path | None = None,
    level: int | str = logging.INFO,
) -> logging.Logger:
    """Attach console + rotating-file handlers to *name* and set its level.

    Parameters
    ----------
    name:
        Logger to configure, also the log file stem (``<name>.log``).
        The default covers every ``candleview.*`` module.
    log_dir:
        Directory for the log file.  Defaults to ``./logs``.
    level:
        Minimum level as a number or a name such as ``"DEBUG"``.  Calling
        again for the same *name* only changes the level.

    Raises
    ------
    ConfigError
        For an unknown level name.
    """
    numeric = resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric)

    handlers = _installed.get(name)
    if handlers is not None:
        for handler in handlers:
            handler.setLevel(numeric)
        return logger

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]

    log_dir = log_dir if log_dir is not None else Path("logs")
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_dir / f"{name}.log",
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    except OSError as exc:
        logger.warning("Logging to console only, cannot write to %s: %s", log_dir, exc)

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(numeric)
        logger.addHandler(handler)

    _installed[name] = handlers
    return logger


def teardown_logger(name: str = PACKAGE_LOGGER) -> None:
    """Detach and close the handlers :func:`setup_logger` added to *name*."""
    logger = logging.getLogger(name)
    for handler in _installed.pop(name, []):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
