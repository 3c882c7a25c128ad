"""Rebuild the site whenever watched source files change.

File-system events are produced by watchdog observer threads and pushed onto a
single queue. One :class:`RegenerationWorker` consumes that queue, so
regenerations never overlap: events that arrive while a build is running are
merged into the next build.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import os
import queue
import threading
import typing as typ
from pathlib import Path

from ruamel.yaml.error import YAMLError
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from pushpin.config import SiteConfigError
from pushpin.errors import GenerationError

if typ.TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

logger = logging.getLogger(__name__)

ChangeBatch = frozenset[Path]
IGNORED_EVENT_TYPES = frozenset({"opened", "closed", "closed_no_write"})
RECOVERABLE_ERRORS = (GenerationError, SiteConfigError, OSError, YAMLError)


class ChangeQueueHandler(FileSystemEventHandler):
    """Translate watchdog events into batches of changed paths."""

    def __init__(
        self,
        changes: queue.Queue[ChangeBatch | None],
        *,
        ignored_dirs: cabc.Iterable[Path] = (),
    ) -> None:
        super().__init__()
        self.changes = changes
        self.ignored_dirs = tuple(path.resolve() for path in ignored_dirs)

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Queue the paths touched by ``event`` unless they should be ignored."""
        if event.is_directory or event.event_type in IGNORED_EVENT_TYPES:
            return
        paths = {Path(os.fsdecode(event.src_path))}
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            paths.add(Path(os.fsdecode(dest_path)))
        relevant = frozenset(path for path in paths if not self._is_ignored(path))
        if relevant:
            self.changes.put(relevant)

    def _is_ignored(self, path: Path) -> bool:
        resolved = path.resolve()
        return any(resolved.is_relative_to(ignored) for ignored in self.ignored_dirs)


class RegenerationWorker(threading.Thread):
    """Serialize site rebuilds triggered by queued change batches."""

    def __init__(
        self,
        regenerate: cabc.Callable[[], int],
        changes: queue.Queue[ChangeBatch | None],
    ) -> None:
        super().__init__(name="pushpin-regenerate", daemon=True)
        self.regenerate = regenerate
        self.changes = changes
        self.completed = 0
        self.failed = 0

    def run(self) -> None:
        """Rebuild once per drained batch until a ``None`` sentinel arrives."""
        while True:
            batch = self.changes.get()
            if batch is None:
                return
            paths, stop = self._drain(set(batch))
            self._rebuild(paths)
            if stop:
                return

    def stop(self) -> None:
        """Ask the worker to exit after the build in progress."""
        self.changes.put(None)

    def _drain(self, paths: set[Path]) -> tuple[set[Path], bool]:
        """Merge already-queued batches into ``paths``; report a pending stop."""
        while True:
            try:
                batch = self.changes.get_nowait()
            except queue.Empty:
                return paths, False
            if batch is None:
                return paths, True
            paths.update(batch)

    def _rebuild(self, paths: set[Path]) -> None:
        for path in sorted(paths):
            logger.info("re-rendering site after update to %s", path)
        try:
            written = self.regenerate()
        except RECOVERABLE_ERRORS:
            self.failed += 1
            logger.exception("regeneration failed; still watching for changes")
            return
        self.completed += 1
        logger.info("regenerated %d pages", written)


def start_observer(
    handler: FileSystemEventHandler,
    watched: cabc.Iterable[tuple[Path, bool]],
) -> BaseObserver:
    """Start a watchdog observer for each existing ``(path, recursive)`` pair."""
    observer = Observer()
    for path, recursive in watched:
        if not path.exists():
            logger.warning("not watching %s: directory does not exist", path)
            continue
        observer.schedule(handler, str(path), recursive=recursive)
        logger.info("watching %s", path)
    observer.start()
    return observer


__all__ = [
    "ChangeQueueHandler",
    "RegenerationWorker",
    "start_observer",
]
