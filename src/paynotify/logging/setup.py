"""
Centralized logging configuration with run_id propagation.
"""

from __future__ import annotations

import os
import sys
from contextvars import ContextVar
from typing import Optional

from loguru import logger

RUN_ID_DEFAULT = "-"
_run_id_var: ContextVar[str] = ContextVar("run_id", default=RUN_ID_DEFAULT)
_is_configured = False

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | run_id={extra[run_id]} | "
    "{name}:{function}:{line} - {message}"
)


def _patch_record(record):
    """Inject the contextual run_id into every log record."""
    record["extra"]["run_id"] = _run_id_var.get(RUN_ID_DEFAULT)


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """Configure Loguru once with the standard format and patcher."""
    global _is_configured
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or os.getenv("LOG_FILE")

    if _is_configured:
        # Allow dynamic level updates by re-adding sinks when requested
        logger.remove()
    else:
        logger.remove()
        logger.configure(extra={"run_id": RUN_ID_DEFAULT}, patcher=_patch_record)

    logger.add(
        sys.stdout,
        level=log_level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )

    if log_file:
        logger.add(
            log_file,
            level=log_level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention=10,
            backtrace=True,
            diagnose=False,
        )

    _is_configured = True


def set_run_id(run_id: Optional[str]) -> None:
    """Set the contextual run_id for subsequent log statements."""
    _run_id_var.set(run_id or RUN_ID_DEFAULT)


def get_run_id() -> str:
    """Retrieve the current contextual run_id."""
    return _run_id_var.get(RUN_ID_DEFAULT)
