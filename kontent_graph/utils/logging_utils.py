"""
Kontent Graph — Logging

Every module logs through a named logger with a console handler and a
rotating file handler. Loggers are grouped by component, each with its
own log file:

- source   -> load stages, store, item factories   (source.log)
- delivery -> Delivery API client                  (delivery.log)
- export   -> Neo4j export                         (export.log)

Environment:
- KONTENT_GRAPH_LOG_DIR           directory for the log files (default: logs)
- KONTENT_GRAPH_LOG_FILE          single file for loggers without a component
- KONTENT_GRAPH_<COMPONENT>_LOG_FILE  per-component file override
- KONTENT_GRAPH_LOG_LEVEL         initial level name (default: INFO)
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

_LOG_DIR = Path(os.getenv("KONTENT_GRAPH_LOG_DIR", "logs"))
_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5

COMPONENTS = ("source", "delivery", "export")

# Loggers set up by get_logger, by name
_configured: Dict[str, logging.Logger] = {}


def _component_log_path(component: Optional[str]) -> Path:

    if component in COMPONENTS:
        override = os.getenv(f"KONTENT_GRAPH_{component.upper()}_LOG_FILE")
        if override:
            return Path(override)
        return _LOG_DIR / f"{component}.log"

    shared = os.getenv("KONTENT_GRAPH_LOG_FILE")
    if shared:
        return Path(shared)

    return _LOG_DIR / "kontent_graph.log"


def _default_level() -> int:
    name = os.getenv("KONTENT_GRAPH_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _file_handler(log_path: Path, formatter: logging.Formatter) -> Optional[logging.Handler]:
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8"
        )
    except OSError:
        return None

    handler.setFormatter(formatter)
    return handler


def get_logger(
    name: str,
    level: Optional[int] = None,
    log_file: Optional[str] = None
) -> logging.Logger:

    logger = _configured.get(name)

    if logger is not None:
        if level is not None:
            logger.setLevel(level)
        return logger

    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else _default_level())
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_path = Path(log_file) if log_file else _component_log_path(None)
    file_handler = _file_handler(log_path, formatter)

    if file_handler is None:
        logger.warning(f"File logging disabled: cannot open {log_path}")
    else:
        logger.addHandler(file_handler)

    _configured[name] = logger
    return logger


def get_component_logger(
    name: str,
    component: Optional[str] = None,
    level: Optional[int] = None,
    log_file: Optional[str] = None
) -> logging.Logger:

    if log_file is None:
        log_file = str(_component_log_path(component))

    return get_logger(name, level=level, log_file=log_file)


def set_log_level(level: int):
    """Change the level of every kontent_graph logger created so far."""

    for logger in _configured.values():
        logger.setLevel(level)
