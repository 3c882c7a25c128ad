"""Cyclopts CLI entrypoint for scaffolding, generating, and serving sites.

The ``pushpin`` console script defined here compiles a project's ``pages/``
markdown into HTML under ``public/``. Typical usage is ``pushpin init`` once,
then ``pushpin serve --watch`` while writing and ``pushpin generate`` in CI.

Examples
--------
Generate the site for the project in the current directory:

>>> from pushpin.cli import main
>>> main()  # doctest: +SKIP

Serve a project elsewhere and rebuild on every edit:

>>> from pushpin.cli import app
>>> app(["serve", "--root", "blog", "--watch"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_project_layout
from .generator import generate_site
from .scaffold import DEFAULT_SITE_TITLE, scaffold_project
from .serve import DevServer

DEFAULT_ROOT = Path(".")

app = App(name="pushpin", config=cyclopts.config.Env("PUSHPIN_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    """Send log records to stderr at INFO, or DEBUG when ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Scaffold a starter project.")
def init(
    title: typ.Annotated[
        str, Parameter(help="Site title recorded in pushpin.yaml")
    ] = DEFAULT_SITE_TITLE,
    *,
    root: typ.Annotated[
        Path, Parameter(help="Directory to create the project in")
    ] = DEFAULT_ROOT,
) -> None:
    """Write a starter ``pushpin.yaml``, pages, and templates under ``root``.

    Raises
    ------
    FileExistsError
        If ``root`` already holds a ``pushpin.yaml``.
    """
    for path in scaffold_project(root, title):
        print(f"wrote {_format_path(path)}")


@app.command(help="Compile the pages directory into HTML.")
def generate(
    *,
    root: typ.Annotated[Path, Parameter(help="Project root")] = DEFAULT_ROOT,
    verbose: typ.Annotated[bool, Parameter(help="Log every page")] = False,
) -> None:
    """Run one full generation pass and report how many pages were written.

    Parameters
    ----------
    root : Path, optional
        Directory containing ``pushpin.yaml``; defaults to the current
        directory (overridable via ``PUSHPIN_ROOT``).
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes HTML under the output directory and prints the page count.
    """
    _configure_logging(verbose=verbose)
    layout = load_project_layout(root)
    written = generate_site(layout)
    print(f"wrote {written} pages to {_format_path(layout.output_dir)}")


@app.command(help="Generate, then serve the site locally.")
def serve(
    *,
    root: typ.Annotated[Path, Parameter(help="Project root")] = DEFAULT_ROOT,
    watch: typ.Annotated[
        bool, Parameter(help="Regenerate when pages or templates change")
    ] = False,
    port: typ.Annotated[
        int | None, Parameter(help="Port to listen on (default 7878)")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Serve the generated output until interrupted with Ctrl+C.

    Raises
    ------
    RuntimeError
        If the server, watcher, or regeneration thread dies unexpectedly.
    """
    _configure_logging(verbose=verbose)
    layout = load_project_layout(root, port=port)
    server = DevServer(layout, watch=watch)
    written = server.start()
    print(f"wrote {written} pages to {_format_path(layout.output_dir)}")
    print(f"local server available at {server.url}")
    if watch:
        print("watching for changes")
    print("\nType Ctrl+C to stop.")
    server.serve_forever()


def main() -> None:
    """Invoke the Cyclopts application behind the ``pushpin`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
