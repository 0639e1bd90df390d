"""Stage a source tree into a sandbox directory.

``copy_dir`` wipes the destination and re-copies the source in one
pre-order walk.  Only the wipe is retried: deletion can race with
asynchronous cleanup (open handles, delayed propagation), while
directory creation and file copies are expected to either work or fail
for real.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from ._exclude import ExcludeFilter
from ._retry import try_hard_limit
from .exceptions import FailedRemoval, IOFailure, TraversalInvariantError, chain_err
from .walk import Entry, walk_dir

logger = logging.getLogger(__name__)

REMOVE_ATTEMPTS = 10


def try_canonicalize(path: str | os.PathLike[str]) -> Path:
    """Return the resolved form of *path*, or *path* itself if that fails."""
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        return Path(path)


# ---------------------------------------------------------------------------
# Removal
# ---------------------------------------------------------------------------

def _remove_once(path: Path) -> None:
    error: OSError | None = None
    try:
        shutil.rmtree(path)
    except OSError as exc:
        error = exc
    # The delete call's own verdict is not trusted either way.
    if os.path.lexists(path):
        if error is not None:
            raise IOFailure(error) from error
        raise FailedRemoval(path)
    if error is not None:
        logger.debug("rmtree of %s raised %s but the path is gone", path, error)


def remove_dir_all(path: str | os.PathLike[str], *, attempts: int = REMOVE_ATTEMPTS) -> None:
    """Recursively delete *path* and make sure it is really gone.

    Retries up to *attempts* times.  Raises ``RetryExhausted`` whose
    ``last_error`` is an ``IOFailure`` or ``FailedRemoval``.
    """
    p = Path(path)
    try_hard_limit(attempts, lambda: _remove_once(p))


# ---------------------------------------------------------------------------
# Copy
# ---------------------------------------------------------------------------

class TraversalCursor:
    """Ancestor chain of the directory currently being filled.

    ``stack`` holds the destination-relative segments; ``depth`` always
    equals ``len(stack)``.
    """

    def __init__(self) -> None:
        self.stack: list[str] = []
        self.depth = 0

    def sync(self, depth: int) -> None:
        """Pop back up until the cursor sits at the parent of an entry at *depth*."""
        while self.depth >= depth and self.depth > 0:
            if not self.stack:
                raise TraversalInvariantError(
                    f"cursor stack empty at depth {self.depth}"
                )
            self.stack.pop()
            self.depth -= 1

    def descend(self, entry: Entry) -> None:
        self.stack.append(entry.name)
        self.depth += 1
        if entry.depth != self.depth:
            raise TraversalInvariantError(
                f"entry {entry.path} reported depth {entry.depth}, "
                f"cursor is at {self.depth}"
            )

    def dest_path(self, dest_dir: Path, name: str) -> Path:
        return dest_dir.joinpath(*self.stack, name)


def _make_pruner(src: Path, exclude: ExcludeFilter | None):
    def prune(entry: Entry) -> bool:
        if entry.hidden:
            return True
        if entry.depth > 0 and exclude is not None and exclude.active:
            rel = entry.path.relative_to(src).as_posix()
            return exclude.is_excluded(rel, is_dir=entry.is_dir)
        return False
    return prune


def copy_dir(
    src_dir: str | os.PathLike[str],
    dest_dir: str | os.PathLike[str],
    *,
    exclude: ExcludeFilter | None = None,
    remove_attempts: int = REMOVE_ATTEMPTS,
) -> None:
    """Replace *dest_dir* with a copy of *src_dir*.

    Hidden entries (names starting with ``.``) are skipped together with
    everything below them, as is anything matched by *exclude*.  That
    includes *src_dir* itself: a hidden source root leaves *dest_dir*
    empty.  Files keep their permission bits.  Symlinks are not followed
    and are not copied.

    Any failure aborts the copy and leaves *dest_dir* partially
    populated; the next call starts by wiping it.
    """
    src = Path(src_dir)
    dest = Path(dest_dir)
    logger.info("copying %s to %s", src, dest)

    if dest.exists():
        with chain_err("unable to remove test dir"):
            remove_dir_all(dest, attempts=remove_attempts)
    with chain_err("unable to create test dir"):
        dest.mkdir(parents=True, exist_ok=True)

    cursor = TraversalCursor()
    entries = walk_dir(src, prune=_make_pruner(src, exclude))
    while True:
        with chain_err("walk dir"):
            entry = next(entries, None)
        if entry is None:
            break

        cursor.sync(entry.depth)
        path = cursor.dest_path(dest, entry.name)
        if entry.is_dir and entry.depth > 0:
            with chain_err("unable to create directory"):
                path.mkdir(parents=True, exist_ok=True)
            cursor.descend(entry)
        elif entry.is_file:
            with chain_err("unable to copy file"):
                shutil.copy(entry.path, path)
        elif entry.is_symlink:
            logger.debug("skipping symlink %s", entry.path)
