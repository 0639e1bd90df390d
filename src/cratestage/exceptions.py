"""Exceptions for cratestage.

Every user-facing failure is a :class:`MirrorError`.  Phase information
("unable to remove test dir", "walk dir", ...) is attached with
:func:`chain_err` and never changes the class of the error, so callers
can still tell a flaky delete from a broken disk.
"""

from __future__ import annotations

import os
from contextlib import contextmanager


class MirrorError(Exception):
    """Base class for failures surfaced by copy/remove operations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        # Innermost first; rendered outermost first.
        self.contexts: list[str] = []

    def add_context(self, context: str) -> None:
        self.contexts.append(context)

    def __str__(self) -> str:
        return ": ".join([*reversed(self.contexts), self.message])


class IOFailure(MirrorError):
    """An underlying filesystem call failed."""

    def __init__(self, os_error: OSError) -> None:
        self.os_error = os_error
        self.path = os_error.filename
        detail = os_error.strerror or str(os_error)
        if self.path is not None:
            detail = f"{detail}: {os.fsdecode(self.path)}"
        super().__init__(detail)


class FailedRemoval(MirrorError):
    """Raised when a recursive delete returned cleanly but the path is still there.

    This is the condition :func:`~cratestage.fs.remove_dir_all` retries on.
    """

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"unable to remove directory: {os.fspath(path)}")


class RetryExhausted(MirrorError):
    """Every attempt of a retried operation failed.

    ``last_error`` holds the failure from the final attempt, unchanged.
    """

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"gave up after {attempts} attempt(s): {last_error}")


class UnclassifiableNameError(MirrorError):
    """A directory entry name cannot be classified as hidden or visible."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"cannot classify entry name: {os.fspath(path)!r}")


class TraversalInvariantError(RuntimeError):
    """The walker reported a depth that breaks ancestor nesting.

    This is a bug in the traversal, not a user error, so it is not a
    :class:`MirrorError`.
    """


@contextmanager
def chain_err(context: str):
    """Attach *context* to any :class:`MirrorError` escaping the block.

    A bare ``OSError`` is first wrapped in :class:`IOFailure`.
    """
    try:
        yield
    except MirrorError as exc:
        exc.add_context(context)
        raise
    except OSError as exc:
        err = IOFailure(exc)
        err.add_context(context)
        raise err from exc
