"""Event history — records events while someone is listening.

``EventHistory`` is the service facade.  An upstream dispatcher pushes
every event into ``on_event``; the history records it only while active,
and it is active exactly while listeners are registered unless an
administrative ``set_active`` call wrote the flag more recently.

Quick Start:
    >>> from hindsight import EventHistory
    >>> history = EventHistory()
    >>> history.add_listener(print)        # starts recording
    >>> history.on_event(some_event)       # recorded, printed
    >>> history.events(includes={BaseEvent}, excludes={NoisyEvent})

Thread Safety:
    One recorder lock guards the listener set and the activation flag and
    spans the whole recording path (activation check, record creation,
    append, delivery).  Arrival order therefore equals sequence order
    equals log order, and a removed listener is never notified again.
    The history log has its own lock, so ``events()``/``to_text()`` run
    concurrently with recording; a query racing an append may or may not
    see the new record.

    Listeners are called with the recorder lock held and must not add or
    remove listeners from inside the callback (deadlock).

"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Self

from hindsight.config import HistoryConfig
from hindsight.history.activation import ActivationController
from hindsight.history.encoders import encode_html, get_encoder
from hindsight.history.listeners import ListenerRegistry
from hindsight.history.log import HistoryLog
from hindsight.history.query import QueryEngine
from hindsight.history.record import EventRecord

if TYPE_CHECKING:
    from hindsight._types import Encoder, TypeFilter
    from hindsight.history.listeners import Listener

logger = logging.getLogger(__name__)


class EventHistory:
    """In-memory history of observed events with type-aware queries.

    Args:
        config: History configuration; defaults to ``HistoryConfig()``.
        base_type: Root class of the observed event family.  Events that
            are not instances of it are dropped unrecorded, and it is the
            include set used when ``events()`` is called without one.

    """

    __slots__ = (
        "_activation",
        "_config",
        "_listeners",
        "_lock",
        "_log",
        "_query",
        "_sequence",
    )

    def __init__(
        self,
        config: HistoryConfig | None = None,
        *,
        base_type: type = object,
    ) -> None:
        self._config = config if config is not None else HistoryConfig()
        self._lock = threading.Lock()
        self._activation = ActivationController()
        self._listeners = ListenerRegistry(self._lock, self._activation)
        self._log = HistoryLog(self._config.max_events)
        self._query = QueryEngine(base_type)
        self._sequence = 0

    @property
    def config(self) -> HistoryConfig:
        return self._config

    # ----- Activation -----

    def set_active(self, active: bool) -> None:
        """Force recording on or off until the next listener-set transition."""
        with self._lock:
            self._activation.set_active(active)

    def is_active(self) -> bool:
        """Whether incoming events are currently recorded."""
        with self._lock:
            return self._activation.active

    # ----- Recording -----

    def on_event(self, event: object) -> EventRecord | None:
        """Record an incoming event if active and notify listeners.

        Returns the new record, or None when the event was dropped because
        the history is dormant or the event is not an instance of the
        event family (``base_type``).  Exceptions raised by listeners
        propagate.

        """
        with self._lock:
            if not self._activation.active:
                return None  # only record events while active
            if not isinstance(event, self._query.base_type):
                return None  # outside the event family
            record = EventRecord.capture(event, self._sequence)
            self._sequence += 1
            self._log.append(record)
            self._listeners.notify_locked(record)
        return record

    def clear(self) -> int:
        """Discard all recorded events and return how many were discarded."""
        count = self._log.clear()
        logger.debug("Cleared %d recorded events", count)
        return count

    # ----- Queries -----

    def events(
        self,
        includes: TypeFilter = None,
        excludes: TypeFilter = None,
    ) -> list[EventRecord]:
        """Recorded events, oldest first, filtered by type.

        Args:
            includes: Keep only events whose type is one of these classes
                or a subclass of one.  ``None`` keeps every event.
            excludes: Drop events whose type is one of these classes or a
                subclass of one.  ``None`` drops nothing.

        """
        return self._query.select(self._log.snapshot(), includes, excludes)

    def to_text(
        self,
        filtered_out: TypeFilter = None,
        highlighted: TypeFilter = None,
        *,
        encoder: Encoder | None = None,
    ) -> str:
        """Render the history to a single string in arrival order.

        Events whose type is covered by ``filtered_out`` produce no output;
        events covered by ``highlighted`` are encoded with emphasis.  The
        encoder defaults to the configured ``encoding``.

        """
        if encoder is None:
            encoder = get_encoder(self._config.encoding)
        return self._query.render(
            self._log.snapshot(), filtered_out, highlighted, encoder
        )

    def to_html(
        self,
        filtered_out: TypeFilter = None,
        highlighted: TypeFilter = None,
    ) -> str:
        """Render the history as HTML blocks, highlighted entries in bold."""
        return self.to_text(filtered_out, highlighted, encoder=encode_html)

    def stats(self) -> dict[str, Any]:
        """Summary of recorded events plus activation and listener state."""
        stats = self._log.stats()
        with self._lock:
            stats["active"] = self._activation.active
        stats["listeners"] = len(self._listeners)
        return stats

    def __len__(self) -> int:
        return len(self._log)

    # ----- Listeners -----

    def add_listener(self, listener: Listener) -> None:
        """Register a listener; recording starts."""
        self._listeners.register(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a listener; recording stops when none remain."""
        self._listeners.unregister(listener)

    @property
    def listener_count(self) -> int:
        """Number of registered listeners."""
        return len(self._listeners)

    # ----- Lifecycle -----

    def close(self) -> None:
        """Shutdown hook: drop every listener and go dormant.

        Recorded history stays queryable until ``clear()``.
        """
        self._listeners.clear()
        logger.debug("Event history closed with %d recorded events", len(self._log))

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
