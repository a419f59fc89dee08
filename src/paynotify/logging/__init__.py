"""
Logging helpers for the paynotify package.
"""

from paynotify.logging.setup import (
    configure_logging,
    get_run_id,
    set_run_id,
)

configure_logging()

__all__ = [
    "configure_logging",
    "set_run_id",
    "get_run_id",
]
