"""Shared test fixtures for hindsight."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from hindsight.events import Event
from hindsight.history.record import EventRecord
from hindsight.history.recorder import EventHistory


# ---------------------------------------------------------------------------
# Sample event family
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DocumentEvent(Event):
    """Base for the document events used across the suite."""

    name: str


@dataclass(frozen=True, slots=True)
class Open(DocumentEvent):
    pass


@dataclass(frozen=True, slots=True)
class Close(DocumentEvent):
    pass


@dataclass(frozen=True, slots=True)
class Save(DocumentEvent):
    pass


@dataclass(frozen=True, slots=True)
class AutoSave(Save):
    """A subclass of Save, for hierarchy coverage."""


@dataclass(frozen=True, slots=True)
class Heartbeat(Event):
    """Outside the DocumentEvent branch."""


class RecordingListener:
    """Listener that keeps every record it is handed."""

    def __init__(self) -> None:
        self.records: list[EventRecord] = []

    def event_occurred(self, record: EventRecord) -> None:
        self.records.append(record)


def make_record(event_type: type, sequence: int = 0, rendered: str = "") -> EventRecord:
    """Build a bare record without going through a recorder."""
    return EventRecord(
        event_type=event_type,
        rendered=rendered or event_type.__name__,
        sequence=sequence,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def history() -> EventHistory:
    """A fresh, dormant history for the Event family."""
    return EventHistory(base_type=Event)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def recording(history: EventHistory, listener: RecordingListener) -> EventHistory:
    """A history that is recording because a listener is registered."""
    history.add_listener(listener)
    return history
