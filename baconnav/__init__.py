"""baconnav: navigate bacon's ``.bacon-locations`` and talk to its socket.

The engine is split by concern: ``resolver`` and ``socket_dir`` find the
files, ``parser`` and ``locations`` turn them into navigable entries, and
``session`` ties both to one working directory. ``main`` runs the CLI.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the CLI; imported lazily so engine imports stay free of argparse setup."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
