"""Shared type definitions for hindsight."""

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from hindsight.history.record import EventRecord

# Include/exclude/filter/highlight sets; None means "not supplied"
type TypeFilter = Iterable[type] | None

# Name of a built-in per-entry encoder
type EncodingName = Literal["html", "text"]

# Per-entry encode function: (record, emphasized) -> text
type Encoder = Callable[[EventRecord, bool], str]
