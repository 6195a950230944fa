"""Debug logging helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import os

from ..constants import DEBUG_ENV_VAR

LOGGER = logging.getLogger(__name__)


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip() == "1"


def debug_log(message: str) -> None:
    """Emit debug logs to stderr in debug mode only."""
    if debug_enabled():
        LOGGER.debug("%s", message)


@contextmanager
def debug_mode(enabled: bool) -> Iterator[None]:
    """Turn the debug env flag on for the duration of the block, then restore it."""
    if not enabled:
        yield
        return
    previous = os.environ.get(DEBUG_ENV_VAR)
    os.environ[DEBUG_ENV_VAR] = "1"
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop(DEBUG_ENV_VAR, None)
        else:
            os.environ[DEBUG_ENV_VAR] = previous
