"""Listener registry — who hears about newly recorded events.

Registration, removal and delivery all run under one lock, the same lock
the recorder holds while it checks the activation flag and records an
event.  Once ``unregister`` returns, the listener receives nothing more,
even if an event was being delivered when removal was requested.

Usage constraint:
    A listener must not call ``register``/``unregister`` (or the
    recorder's ``add_listener``/``remove_listener``) from inside
    ``event_occurred``.  The lock is not reentrant and such a call
    deadlocks.  This is not detected.

"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hindsight.history.activation import ActivationController
    from hindsight.history.record import EventRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class EventHistoryListener(Protocol):
    """Protocol for observers of newly recorded events."""

    def event_occurred(self, record: EventRecord) -> None: ...


type Listener = EventHistoryListener | Callable[[EventRecord], object]


class ListenerRegistry:
    """Registration-ordered set of listeners guarded by the recorder lock.

    Args:
        lock: The recorder lock, shared with the recording path.
        activation: Controller notified of listener-set transitions.

    """

    __slots__ = ("_activation", "_listeners", "_lock")

    def __init__(self, lock: threading.Lock, activation: ActivationController) -> None:
        self._lock = lock
        self._activation = activation
        self._listeners: list[Listener] = []

    def register(self, listener: Listener) -> None:
        """Add a listener and start recording."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)
                logger.debug("Registered listener %r", listener)
            self._activation.listener_added()

    def unregister(self, listener: Listener) -> None:
        """Remove a listener; stop recording if none remain."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                logger.debug("Unregistered listener %r", listener)
            if not self._listeners:
                self._activation.listeners_emptied()

    def clear(self) -> None:
        """Drop every listener and stop recording."""
        with self._lock:
            self._listeners.clear()
            self._activation.listeners_emptied()

    def notify_locked(self, record: EventRecord) -> None:
        """Deliver ``record`` to every listener, in registration order.

        The caller must hold the registry lock; the recorder does so for
        the whole recording path.

        Listener exceptions propagate to the caller; delivery to the
        remaining listeners is abandoned.
        """
        for listener in self._listeners:
            if isinstance(listener, EventHistoryListener):
                listener.event_occurred(record)
            else:
                listener(record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        with self._lock:
            return listener in self._listeners
