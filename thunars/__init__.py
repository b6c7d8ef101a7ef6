"""Public package surface for thunars.

Exports ``main`` for programmatic CLI invocation. The browser core lives
in ``thunars.controller``, ``thunars.entry_list`` and ``thunars.hints``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
