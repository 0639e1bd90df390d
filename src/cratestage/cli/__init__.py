"""cratestage CLI — stage source trees into sandbox directories."""

from ._helpers import main  # noqa: F401 — entry point

# Import command modules to register Click commands with the main group.
from . import _mirror  # noqa: F401
