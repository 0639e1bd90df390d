"""Flattened depth-first directory walk.

``walk_dir`` yields every entry of a tree as a single linear sequence in
pre-order: a directory comes before its children, and its children come
before any later sibling.  Each :class:`Entry` carries the depth at which
it was found (the root is depth 0), which is all a consumer needs to
rebuild ancestor paths without recursion of its own.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

from .exceptions import UnclassifiableNameError


def is_hidden(name: str, path=None) -> bool:
    """Return True if *name* starts with ``.``.

    Names holding undecodable bytes (surrogate escapes) raise
    ``UnclassifiableNameError`` instead of being guessed at.
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        raise UnclassifiableNameError(path if path is not None else name) from None
    return name.startswith(".")


@dataclass(frozen=True)
class Entry:
    path: Path
    name: str
    depth: int
    is_dir: bool = False
    is_file: bool = False
    is_symlink: bool = False

    @property
    def hidden(self) -> bool:
        return is_hidden(self.name, self.path)


def _root_entry(root: Path) -> Entry:
    # The root itself is always followed, even when it is a symlink.
    st = os.stat(root)
    name = root.name
    if name in ("", ".", ".."):
        # "." and ".." name a directory, they are not hidden entries.
        name = os.path.basename(os.path.abspath(root))
    return Entry(
        path=root,
        name=name,
        depth=0,
        is_dir=stat.S_ISDIR(st.st_mode),
        is_file=stat.S_ISREG(st.st_mode),
    )


def _scan(directory: Path, depth: int) -> list[Entry]:
    with os.scandir(directory) as it:
        found = [
            Entry(
                path=Path(de.path),
                name=de.name,
                depth=depth,
                is_dir=de.is_dir(follow_symlinks=False),
                is_file=de.is_file(follow_symlinks=False),
                is_symlink=de.is_symlink(),
            )
            for de in it
        ]
    # Reverse name order so the next sibling is popped off the end.
    found.sort(key=lambda e: e.name, reverse=True)
    return found


def walk_dir(
    root: str | os.PathLike[str],
    *,
    prune: Callable[[Entry], bool] | None = None,
) -> Iterator[Entry]:
    """Yield *root* and everything below it in depth-first pre-order.

    *prune* is called for every entry, the root included, before it is
    yielded; returning True drops the entry and, for a directory, its
    whole subtree (children are never listed).  A pruned root yields
    nothing at all.  Symlinks are not followed.  Siblings are visited in
    name order.

    ``OSError`` from listing a directory propagates out of the iterator.
    """
    top = _root_entry(Path(root))
    if prune is not None and prune(top):
        return
    yield top
    if not top.is_dir:
        return

    # Explicit stack of pending sibling lists keeps the walk iterative.
    pending: list[list[Entry]] = [_scan(top.path, 1)]
    while pending:
        siblings = pending[-1]
        if not siblings:
            pending.pop()
            continue
        entry = siblings.pop()
        if prune is not None and prune(entry):
            continue
        yield entry
        if entry.is_dir:
            pending.append(_scan(entry.path, entry.depth + 1))
