"""Compile a directory of markdown pages into a static HTML site.

This package exposes the CLI entry points behind the ``pushpin`` console
script: scaffold a project, generate it once, or serve it locally while
watching for edits.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pushpin import main
>>> main()  # doctest: +SKIP
>>> from pushpin import app
>>> app(["generate", "--root", "blog"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
