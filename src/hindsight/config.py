"""Hindsight configuration.

HistoryConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass

from hindsight._errors import ConfigError
from hindsight._types import EncodingName

_ENCODINGS = frozenset({"html", "text"})


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Configuration for an EventHistory.

    Attributes:
        max_events: Maximum number of records kept in the history log.
            ``None`` keeps every record (the history grows without bound).
        encoding: Default per-entry encoder used by ``to_text()``.
        watch_debounce_ms: Debounce window for the file watcher.
        watch_step_ms: Poll step for the file watcher.

    """

    max_events: int | None = None
    encoding: EncodingName = "html"
    watch_debounce_ms: int = 300
    watch_step_ms: int = 100

    def __post_init__(self) -> None:
        if self.max_events is not None and (
            isinstance(self.max_events, bool) or not isinstance(self.max_events, int)
        ):
            msg = f"max_events must be an integer or None, got {self.max_events!r}"
            raise ConfigError(msg)
        if self.max_events is not None and self.max_events <= 0:
            msg = f"max_events must be positive, got {self.max_events}"
            raise ConfigError(msg)
        if not isinstance(self.encoding, str) or self.encoding not in _ENCODINGS:
            msg = (
                f"Unknown encoding {self.encoding!r}; "
                f"expected one of {sorted(_ENCODINGS)}"
            )
            raise ConfigError(msg)
        for name in ("watch_debounce_ms", "watch_step_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer, got {value!r}"
                raise ConfigError(msg)
        if self.watch_debounce_ms < 0 or self.watch_step_ms <= 0:
            msg = "watch_debounce_ms must be >= 0 and watch_step_ms must be > 0"
            raise ConfigError(msg)
