"""Console script for ``cratestage``.

The library only needs dulwich; click comes with the ``cli`` extra.
"""

import sys


def main():
    try:
        from .cli import main as cli_main
    except ImportError as exc:
        sys.stderr.write(
            f"cratestage: command line tools unavailable ({exc}).\n"
            "Run 'pip install cratestage[cli]' to add them.\n"
        )
        raise SystemExit(1)
    cli_main()
