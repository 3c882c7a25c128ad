"""Serve the generated site locally, optionally rebuilding on change.

:class:`DevServer` ties three long-running pieces together: an HTTP server
thread reading from the output directory, watchdog observer threads producing
change batches, and one :class:`~pushpin.watcher.RegenerationWorker` that
consumes them. The serving loop raises if any of those threads dies.
"""

from __future__ import annotations

import functools
import logging
import queue
import threading
import time
import typing as typ
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from .generator import generate_site
from .watcher import ChangeQueueHandler, RegenerationWorker, start_observer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from watchdog.events import FileSystemEventHandler
    from watchdog.observers.api import BaseObserver

    from .config import ProjectLayout

logger = logging.getLogger(__name__)


class NoCacheRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that forbids client-side caching."""

    def end_headers(self) -> None:
        """Add ``Cache-Control: no-store`` before finishing the headers."""
        self.send_header("Cache-Control", "no-store")
        super().end_headers()

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        """Route request logs through the module logger."""
        logger.info("%s - %s", self.address_string(), format % args)


def create_server(directory: Path, host: str, port: int) -> ThreadingHTTPServer:
    """Return an HTTP server bound to ``host:port`` serving ``directory``."""
    handler = functools.partial(NoCacheRequestHandler, directory=str(directory))
    return ThreadingHTTPServer((host, port), handler)


class DevServer:
    """Generate a project, serve its output, and optionally watch for edits."""

    def __init__(self, layout: ProjectLayout, *, watch: bool = False) -> None:
        self.layout = layout
        self.watch = watch
        self.changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
        self.httpd: ThreadingHTTPServer | None = None
        self.server_thread: threading.Thread | None = None
        self.worker: RegenerationWorker | None = None
        self.observer: BaseObserver | None = None

    @property
    def url(self) -> str:
        """Return the base URL the server is reachable at."""
        if self.httpd is None:
            return f"http://{self.layout.host}:{self.layout.port}"
        host, port = self.httpd.server_address[:2]
        return f"http://{host}:{port}"

    def regenerate(self) -> int:
        """Run one full generation pass for the project."""
        return generate_site(self.layout)

    def start(self) -> int:
        """Generate once, then start the server and any watchers.

        Returns
        -------
        int
            Number of pages written by the initial generation.
        """
        written = self.regenerate()
        self.httpd = create_server(
            self.layout.output_dir, self.layout.host, self.layout.port
        )
        self.server_thread = threading.Thread(
            target=self.httpd.serve_forever, name="pushpin-http", daemon=True
        )
        self.server_thread.start()
        if self.watch:
            self.worker = RegenerationWorker(self.regenerate, self.changes)
            self.worker.start()
            self.observer = start_observer(
                self._event_handler(), self._watched_paths()
            )
        return written

    def _event_handler(self) -> FileSystemEventHandler:
        return ChangeQueueHandler(self.changes, ignored_dirs=[self.layout.output_dir])

    def _watched_paths(self) -> list[tuple[Path, bool]]:
        """Return the watched directories and whether to recurse into them."""
        return [
            (self.layout.pages_dir, True),
            (self.layout.templates_dir, True),
            (self.layout.config_path.parent, False),
        ]

    def check_health(self) -> None:
        """Raise ``RuntimeError`` if a background thread stopped unexpectedly."""
        threads: list[tuple[str, threading.Thread | None]] = [
            ("http server", self.server_thread)
        ]
        if self.watch:
            threads.extend(
                [("regeneration worker", self.worker), ("file watcher", self.observer)]
            )
        for label, thread in threads:
            if thread is None or not thread.is_alive():
                msg = f"internal error: the {label} thread stopped unexpectedly."
                raise RuntimeError(msg)

    def serve_forever(self, poll_interval: float = 0.5) -> None:
        """Block until interrupted, checking background threads as it waits."""
        try:
            while True:
                self.check_health()
                time.sleep(poll_interval)
        except KeyboardInterrupt:
            logger.info("stopping server")
        finally:
            self.stop()

    def stop(self) -> None:
        """Stop watchers, the worker, and the HTTP server."""
        if self.observer is not None:
            self.observer.stop()
            self.observer.join()
            self.observer = None
        if self.worker is not None:
            self.worker.stop()
            self.worker.join()
            self.worker = None
        if self.httpd is not None:
            self.httpd.shutdown()
            self.httpd.server_close()
            self.httpd = None
        if self.server_thread is not None:
            self.server_thread.join()
            self.server_thread = None


__all__ = ["DevServer", "NoCacheRequestHandler", "create_server"]
