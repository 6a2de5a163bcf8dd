"""History log — append-only, thread-safe record store.

Stores ``EventRecord`` objects in arrival order.  Unbounded by default;
with ``max_events`` set it becomes a ring buffer and the oldest records
are discarded automatically.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Readers only ever
    see immutable snapshots, so a query never observes a half-applied
    append or clear.

"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator
from typing import Any

from hindsight.history.record import EventRecord


class HistoryLog:
    """Ordered store of recorded events.

    Args:
        max_events: Maximum number of records to retain, or ``None`` to
            retain everything.

    """

    __slots__ = ("_lock", "_max_events", "_records")

    def __init__(self, max_events: int | None = None) -> None:
        self._max_events = max_events
        self._records: deque[EventRecord] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    @property
    def max_events(self) -> int | None:
        """The retention cap, or None when unbounded."""
        return self._max_events

    def append(self, record: EventRecord) -> None:
        """Add a record to the end of the log."""
        with self._lock:
            self._records.append(record)

    def snapshot(self) -> tuple[EventRecord, ...]:
        """Return the current contents, oldest first, as an immutable copy."""
        with self._lock:
            return tuple(self._records)

    def clear(self) -> int:
        """Clear all records and return the count that was cleared."""
        with self._lock:
            count = len(self._records)
            self._records.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[EventRecord]:
        return iter(self.snapshot())

    def stats(self) -> dict[str, Any]:
        """Return summary statistics about stored records."""
        records = self.snapshot()

        type_counts: dict[str, int] = {}
        for record in records:
            name = record.event_type_name
            type_counts[name] = type_counts.get(name, 0) + 1

        return {
            "total": len(records),
            "max_events": self._max_events,
            "by_type": type_counts,
        }
