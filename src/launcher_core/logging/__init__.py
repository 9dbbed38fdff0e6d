from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from launcher_core.config.models import LoggingSettings

LOG_FORMAT = "[%(asctime)s][%(levelname)s][%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(name: str) -> int:
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ValueError(f"Invalid logging level: {name}")
    return level


def _build_file_handler(settings: LoggingSettings, formatter: logging.Formatter) -> logging.Handler | None:
    raw_path = settings.file.path.strip()
    if not raw_path:
        return None
    path = Path(raw_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        interval=1,
        backupCount=settings.file.rotation.backup_count,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(formatter)
    return handler


def init_logging(settings: LoggingSettings) -> None:
    """
    Configure the root logger for an application embedding the launcher core.

    Existing root handlers are replaced. ``settings.loggers`` lowers or raises the
    level of individual loggers, e.g. ``{"aiohttp": "WARNING"}``.
    """
    level = _resolve_level(settings.level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    try:
        file_handler = _build_file_handler(settings, formatter)
    except OSError:
        root_logger.error("File logging handler failed to initialize path=%s", settings.file.path, exc_info=True)
        file_handler = None
    if file_handler is not None:
        root_logger.addHandler(file_handler)

    for name, level_name in settings.loggers.items():
        logging.getLogger(name).setLevel(_resolve_level(level_name))


__all__ = ["init_logging"]
