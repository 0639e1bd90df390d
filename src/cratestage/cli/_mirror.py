"""mirror and rm commands."""

from __future__ import annotations

import click

from .._exclude import ExcludeFilter
from ..fs import copy_dir, remove_dir_all, try_canonicalize
from ._helpers import main, _attempts_option, _reported, _status


# ---------------------------------------------------------------------------
# mirror
# ---------------------------------------------------------------------------

@main.command("mirror")
@click.argument("src", type=click.Path(exists=True, file_okay=False))
@click.argument("dest", type=click.Path())
@click.option("--exclude", "patterns", multiple=True,
              help="Exclude files matching PATTERN (gitignore syntax, repeatable).")
@click.option("--exclude-from", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Read exclude patterns from FILE.")
@_attempts_option
@click.pass_context
def mirror_cmd(ctx, src, dest, patterns, exclude_from, attempts):
    """Replace DEST with a copy of SRC.

    Anything already in DEST is deleted first. Hidden files and
    directories in SRC are skipped along with their contents.
    """
    exclude = None
    if patterns or exclude_from:
        exclude = ExcludeFilter(patterns=patterns, exclude_from=exclude_from)
    with _reported():
        copy_dir(src, dest, exclude=exclude, remove_attempts=attempts)
    _status(ctx, f"Staged {try_canonicalize(src)} -> {try_canonicalize(dest)}")


# ---------------------------------------------------------------------------
# rm
# ---------------------------------------------------------------------------

@main.command("rm")
@click.argument("path", type=click.Path())
@_attempts_option
@click.pass_context
def rm_cmd(ctx, path, attempts):
    """Delete directory PATH, retrying until it is really gone."""
    with _reported():
        remove_dir_all(path, attempts=attempts)
    _status(ctx, f"Removed {path}")
