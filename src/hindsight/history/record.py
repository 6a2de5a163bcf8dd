"""Event record — the immutable value stored in the history log.

A record captures one observed event: its concrete runtime type, the
text form derived from it at record time, and its position in arrival
order.  The original event object rides along for listeners that need
it, but takes no part in equality or hashing.

Thread Safety:
    Records are frozen and safe to share across threads.  The recorder
    hands the same record object to the history log and to listeners.

"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from hindsight.events import now_ns


@dataclass(frozen=True, slots=True)
class EventRecord:
    """One recorded event.

    Attributes:
        event_type: Concrete runtime class of the event.
        rendered: Text form of the event, captured when it was recorded.
        sequence: 0-based arrival position among recorded events.
        timestamp_ns: Monotonic nanosecond timestamp when recorded.
        thread_name: Name of the thread that delivered the event.
        event: The original event object.

    """

    event_type: type
    rendered: str
    sequence: int
    timestamp_ns: int = 0
    thread_name: str = ""
    event: Any = field(default=None, compare=False, hash=False, repr=False)

    @classmethod
    def capture(cls, event: object, sequence: int) -> EventRecord:
        """Build a record for ``event`` at arrival position ``sequence``."""
        return cls(
            event_type=type(event),
            rendered=render_event(event),
            sequence=sequence,
            timestamp_ns=now_ns(),
            thread_name=threading.current_thread().name,
            event=event,
        )

    @property
    def event_type_name(self) -> str:
        """Qualified name of the event type, e.g. ``FileAdded``."""
        return self.event_type.__qualname__


def render_event(event: object) -> str:
    """Text form of an event: its ``describe()`` if it has one, else ``str()``."""
    describe = getattr(event, "describe", None)
    if callable(describe):
        return str(describe())
    return str(event)
