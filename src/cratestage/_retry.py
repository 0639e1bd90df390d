"""Bounded retry for operations that race with external cleanup."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from .exceptions import MirrorError, RetryExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")


def try_hard_limit(limit: int, operation: Callable[[], T]) -> T:
    """Call *operation* until it succeeds, at most *limit* times.

    Only ``MirrorError`` and ``OSError`` count as failed attempts;
    anything else propagates immediately.  There is no sleep between
    attempts.  Raises ``RetryExhausted`` (chained to the last failure)
    once *limit* attempts have failed, and ``ValueError`` if *limit* is
    not a positive integer.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"retry limit must be a positive integer, got {limit!r}")

    last_error: MirrorError | OSError | None = None
    for attempt in range(1, limit + 1):
        try:
            return operation()
        except (MirrorError, OSError) as exc:
            last_error = exc
            logger.debug("attempt %d/%d failed: %s", attempt, limit, exc)

    assert last_error is not None
    raise RetryExhausted(limit, last_error) from last_error
