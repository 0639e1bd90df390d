"""Extra exclude patterns for staging a tree.

Hidden entries are always dropped by ``copy_dir``; an ``ExcludeFilter``
lets callers drop more (``target/``, ``*.orig``, ...).  Pattern syntax
follows gitignore rules, implemented by ``dulwich.ignore.IgnoreFilter``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from dulwich.ignore import IgnoreFilter


class ExcludeFilter:
    """Combines ``patterns`` and the lines of an ``exclude_from`` file."""

    def __init__(
        self,
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | os.PathLike[str] | None = None,
    ) -> None:
        lines: list[bytes] = [p.encode("utf-8") for p in patterns or ()]
        if exclude_from is not None:
            for raw in Path(exclude_from).read_bytes().splitlines():
                line = raw.strip()
                if line and not line.startswith(b"#"):
                    lines.append(line)
        self._filter: IgnoreFilter | None = IgnoreFilter(lines) if lines else None

    @property
    def active(self) -> bool:
        """True if any pattern is configured."""
        return self._filter is not None

    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check a ``/``-separated path relative to the tree root."""
        if self._filter is None:
            return False
        check = rel_path + "/" if is_dir else rel_path
        return self._filter.is_ignored(check) is True
