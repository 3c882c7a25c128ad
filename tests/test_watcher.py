"""Tests for change batching and serialized regeneration."""

from __future__ import annotations

import queue
import threading
import time
from pathlib import Path

from watchdog.events import (
    DirModifiedEvent,
    FileClosedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from pushpin.errors import GenerationError
from pushpin.generator import build_section_tree
from pushpin.watcher import ChangeQueueHandler, RegenerationWorker


def test_handler_queues_file_changes(tmp_path: Path) -> None:
    """File events become batches of paths; directory events are dropped."""
    changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
    handler = ChangeQueueHandler(changes)
    target = tmp_path / "pages" / "a.md"

    handler.dispatch(DirModifiedEvent(str(tmp_path / "pages")))
    handler.dispatch(FileClosedEvent(str(target)))
    handler.dispatch(FileModifiedEvent(str(target)))

    assert changes.get_nowait() == frozenset({target})
    assert changes.empty(), "only the file modification should be queued"


def test_handler_reports_both_sides_of_a_move(tmp_path: Path) -> None:
    """Moves contribute their source and destination paths."""
    changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
    handler = ChangeQueueHandler(changes)
    old, new = tmp_path / "old.md", tmp_path / "new.md"
    handler.dispatch(FileMovedEvent(str(old), str(new)))
    assert changes.get_nowait() == frozenset({old, new})


def test_handler_ignores_output_directory(tmp_path: Path) -> None:
    """Writes into the output tree never trigger another build."""
    changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
    output = tmp_path / "public"
    handler = ChangeQueueHandler(changes, ignored_dirs=[output])
    handler.dispatch(FileModifiedEvent(str(output / "index.html")))
    assert changes.empty()


def test_worker_merges_queued_batches() -> None:
    """Batches waiting in the queue are folded into a single rebuild."""
    changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
    calls: list[int] = []
    changes.put(frozenset({Path("a.md")}))
    changes.put(frozenset({Path("b.md")}))
    changes.put(None)

    worker = RegenerationWorker(lambda: calls.append(1) or 1, changes)
    worker.run()

    assert calls == [1], "two queued batches should produce one rebuild"
    assert worker.completed == 1


def test_worker_never_overlaps_regenerations() -> None:
    """A batch arriving mid-build waits for the build in progress."""
    changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
    started = threading.Event()
    release = threading.Event()
    active = 0
    peak = 0
    lock = threading.Lock()

    def regenerate() -> int:
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        started.set()
        release.wait(timeout=5)
        with lock:
            active -= 1
        return 0

    worker = RegenerationWorker(regenerate, changes)
    worker.start()
    changes.put(frozenset({Path("a.md")}))
    assert started.wait(timeout=5)
    changes.put(frozenset({Path("b.md")}))
    release.set()
    worker.stop()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert peak == 1, "regenerations must run one at a time"
    assert worker.completed == 2


def test_worker_survives_failed_regeneration() -> None:
    """A broken build is logged and the worker keeps consuming changes."""
    changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
    outcomes: list[str] = []

    def regenerate() -> int:
        if not outcomes:
            outcomes.append("fail")
            msg = "bad template"
            raise GenerationError(msg)
        outcomes.append("ok")
        return 3

    worker = RegenerationWorker(regenerate, changes)
    worker.start()
    changes.put(frozenset({Path("a.md")}))
    # Wait for the failing build before queueing the next change.
    for _ in range(500):
        if worker.failed:
            break
        time.sleep(0.01)
    changes.put(frozenset({Path("a.md")}))
    worker.stop()
    worker.join(timeout=5)

    assert outcomes == ["fail", "ok"]
    assert (worker.failed, worker.completed) == (1, 1)


def test_worker_survives_undecodable_page(tmp_path: Path) -> None:
    """A page saved in a non-UTF-8 encoding does not stop the worker."""
    changes: queue.Queue[frozenset[Path] | None] = queue.Queue()
    pages = tmp_path / "pages"
    pages.mkdir()
    bad = pages / "bad.md"
    bad.write_bytes(b"caf\xe9\n")

    def regenerate() -> int:
        return build_section_tree(pages).page_count

    worker = RegenerationWorker(regenerate, changes)
    worker.start()
    changes.put(frozenset({bad}))
    for _ in range(500):
        if worker.failed:
            break
        time.sleep(0.01)
    assert worker.is_alive(), "worker should keep running after a bad page"

    bad.write_text("café\n", encoding="utf-8")
    changes.put(frozenset({bad}))
    worker.stop()
    worker.join(timeout=5)

    assert (worker.failed, worker.completed) == (1, 1)
