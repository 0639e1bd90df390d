"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging
from contextlib import contextmanager

import click

from ..exceptions import MirrorError
from ..fs import REMOVE_ATTEMPTS


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _attempts_option(f):
    """Shared --attempts option for commands that delete a directory."""
    return click.option(
        "--attempts", type=click.IntRange(min=1), default=REMOVE_ATTEMPTS,
        envvar="CRATESTAGE_ATTEMPTS", show_default=True,
        help="Delete attempts before giving up (or set CRATESTAGE_ATTEMPTS).",
    )(f)


class _EchoHandler(logging.Handler):
    """Send log records through click.echo so they follow the current stderr."""

    def emit(self, record):
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _setup_logging(verbose: bool) -> None:
    """Attach a single stderr handler to the package logger."""
    logger = logging.getLogger("cratestage")
    for h in list(logger.handlers):
        if isinstance(h, _EchoHandler):
            logger.removeHandler(h)
    handler = _EchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@contextmanager
def _reported():
    """Turn a MirrorError into a ClickException with the full context chain."""
    try:
        yield
    except MirrorError as exc:
        raise click.ClickException(str(exc))


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """cratestage — stage a source tree into a sandbox directory.

    The destination is always wiped and re-copied in full. Hidden
    entries (names starting with '.') are never copied.

    \b
    Quick start:
      cratestage mirror path/to/crate /tmp/sandbox/crate
      cratestage rm /tmp/sandbox/crate
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _setup_logging(verbose)
