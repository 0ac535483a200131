from __future__ import annotations

import logging
from typing import Any, Callable, Optional

LOGGER_NAME = "P2W"
LOG_TAG = "p2w"
DEFAULT_LOG_LEVEL = logging.INFO

_LEVEL_NAME_MAP = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "TRACE": logging.DEBUG,
}


def coerce_level(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        token = raw.strip().upper()
        if token.isdigit():
            return int(token)
        return _LEVEL_NAME_MAP.get(token)
    return None


class HostLogHandler(logging.Handler):
    """Logging bridge that hands plugin records to the host's logger.

    ``resolve_target`` returns the host's ``logging.Logger`` or a plain
    ``print``-style callable, or ``None`` when the host offers neither; the
    root logger is used in that case.
    """

    def __init__(self, resolve_target: Callable[[], Any]) -> None:
        super().__init__()
        self._resolve_target = resolve_target

    def emit(self, record: logging.LogRecord) -> None:
        message = self.format(record)
        target = None
        try:
            target = self._resolve_target()
        except Exception:
            target = None
        if isinstance(target, logging.Logger):
            try:
                if target.isEnabledFor(record.levelno):
                    target.log(record.levelno, message)
                return
            except Exception:
                pass
        elif callable(target):
            try:
                target(message)
                return
            except Exception:
                pass
        root_logger = logging.getLogger()
        if root_logger.isEnabledFor(record.levelno):
            root_logger.log(record.levelno, message)


def configure_logger(resolve_target: Callable[[], Any], level: Any = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(coerce_level(level) or DEFAULT_LOG_LEVEL)
    handler = next((h for h in logger.handlers if isinstance(h, HostLogHandler)), None)
    if handler is None:
        handler = HostLogHandler(resolve_target)
        handler.setFormatter(logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S"))
        logger.addHandler(handler)
    else:
        handler._resolve_target = resolve_target
    logger.propagate = False
    return logger
