"""Logging setup: stdlib logging routed into loguru."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from loguru import logger as loguru_logger


def setup_logging(enable_loguru: bool = True, level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Configure application-wide logging.

    Args:
        enable_loguru: Bridge stdlib records into loguru.
        level: Root level for stdlib logging.
        log_file: Optional rotating file sink, only used with loguru.
    """
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if enable_loguru:
        _bridge_standard_logging(level)
        if log_file is not None:
            loguru_logger.add(log_file, level=logging.getLevelName(level), rotation="5 MB", retention=3)


class _LoguruHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        loguru_logger.opt(depth=6, exception=record.exc_info).bind(name=record.name).log(level, record.getMessage())


def _bridge_standard_logging(level: int) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_LoguruHandler())
    root.setLevel(level)
