"""File watcher — a real upstream producer for the event history.

Runs watchfiles in a background thread and pushes one ``FileEvent`` per
filesystem change into a sink, typically ``EventHistory.on_event``.  The
event classes form a small hierarchy so history queries can ask for
``FileEvent`` (everything) or a single kind of change.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change

from hindsight.config import HistoryConfig
from hindsight.events import Event

if TYPE_CHECKING:
    from hindsight.history.record import EventRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileEvent(Event):
    """A file changed under the watched root.

    Attributes:
        path: Absolute path to the changed file.

    """

    path: Path

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class FileAdded(FileEvent):
    """A file was created."""


@dataclass(frozen=True, slots=True)
class FileModified(FileEvent):
    """A file's contents changed."""


@dataclass(frozen=True, slots=True)
class FileDeleted(FileEvent):
    """A file was removed."""


# Mapping from watchfiles Change enum to our event classes.
_CHANGE_EVENT_MAP: dict[Change, type[FileEvent]] = {
    Change.added: FileAdded,
    Change.modified: FileModified,
    Change.deleted: FileDeleted,
}

# Names accepted by the CLI for type filters.
EVENT_TYPES_BY_NAME: dict[str, type[FileEvent]] = {
    "file": FileEvent,
    "added": FileAdded,
    "modified": FileModified,
    "deleted": FileDeleted,
}


def event_for_change(change: Change, path: str | Path) -> FileEvent:
    """Build the event for one raw watchfiles change."""
    event_cls = _CHANGE_EVENT_MAP.get(change, FileModified)
    return event_cls(path=Path(path))


type EventSink = Callable[[FileEvent], EventRecord | None]


class FileWatcher:
    """Watches a directory tree and pushes file events into a sink.

    The sink is called from the watcher thread, one event at a time, in
    the order watchfiles reports changes.

    Args:
        root: Directory to watch.
        sink: Callable receiving each ``FileEvent``.
        config: Supplies debounce and poll step timings.

    """

    def __init__(
        self,
        root: Path,
        sink: EventSink,
        *,
        config: HistoryConfig | None = None,
    ) -> None:
        self._root = Path(root).resolve()
        self._sink = sink
        self._config = config if config is not None else HistoryConfig()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def root(self) -> Path:
        return self._root

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching for file changes in a background thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="hindsight-watcher",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Watching %s", self._root)

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    def dispatch(self, raw_changes: set[tuple[Change, str]]) -> int:
        """Push one watchfiles batch into the sink; returns events pushed.

        Paths are sorted so a batch is delivered in a stable order.
        """
        count = 0
        for change, path_str in sorted(raw_changes, key=lambda c: (c[1], c[0])):
            self._sink(event_for_change(change, path_str))
            count += 1
        return count

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push events to the sink."""
        from watchfiles import watch

        for raw_changes in watch(
            self._root,
            stop_event=self._stop_event,
            debounce=self._config.watch_debounce_ms,
            step=self._config.watch_step_ms,
        ):
            self.dispatch(raw_changes)
