"""Base event type for the hindsight event family.

Any object can be recorded; subclassing ``Event`` is only a convenience
for producers that want frozen, timestamped events and a readable
``describe()`` used as the recorded text form.

Thread Safety:
    Events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass, field, fields


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()


@dataclass(frozen=True, slots=True)
class Event:
    """Root of the hindsight event family.

    Attributes:
        timestamp_ns: Monotonic nanosecond timestamp of creation.

    """

    timestamp_ns: int = field(default_factory=now_ns, kw_only=True)

    def describe(self) -> str:
        """One-line text form of the event, used when it is recorded."""
        parts = [
            f"{f.name}={getattr(self, f.name)!r}"
            for f in fields(self)
            if f.name != "timestamp_ns"
        ]
        return f"{type(self).__name__}({', '.join(parts)})"
