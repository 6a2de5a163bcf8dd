"""Query engine — type-filtered views over a history snapshot.

Both entry points apply the defaults for absent filter sets and then defer
to ``covers`` for every record:

- ``select``: ``includes=None`` means every type of the event family,
  ``excludes=None`` means nothing is excluded.
- ``render``: ``filtered_out=None`` hides nothing, ``highlighted=None``
  emphasizes nothing.

An empty set is not absent: ``includes=set()`` covers nothing and selects
no records.  Neither entry point mutates anything or reorders records.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from hindsight.history.encoders import encode_html
from hindsight.history.matcher import covers

if TYPE_CHECKING:
    from hindsight._types import Encoder, TypeFilter
    from hindsight.history.record import EventRecord


class QueryEngine:
    """Filters records by runtime type with subclass coverage.

    Args:
        base_type: Root of the event family; the default include set.

    """

    __slots__ = ("_base_type",)

    def __init__(self, base_type: type = object) -> None:
        self._base_type = base_type

    @property
    def base_type(self) -> type:
        return self._base_type

    def select(
        self,
        records: Iterable[EventRecord],
        includes: TypeFilter = None,
        excludes: TypeFilter = None,
    ) -> list[EventRecord]:
        """Return records covered by ``includes`` and not by ``excludes``, in order."""
        include_set = (self._base_type,) if includes is None else tuple(includes)
        exclude_set = () if excludes is None else tuple(excludes)

        matches: list[EventRecord] = []
        for record in records:
            if not covers(include_set, record.event_type):
                continue  # not included
            if covers(exclude_set, record.event_type):
                continue  # excluded
            matches.append(record)
        return matches

    def render(
        self,
        records: Iterable[EventRecord],
        filtered_out: TypeFilter = None,
        highlighted: TypeFilter = None,
        encoder: Encoder = encode_html,
    ) -> str:
        """Concatenate encoded records, skipping filtered types and emphasizing highlighted ones."""
        filtered_set = () if filtered_out is None else tuple(filtered_out)
        highlighted_set = () if highlighted is None else tuple(highlighted)

        parts: list[str] = []
        for record in records:
            if covers(filtered_set, record.event_type):
                continue
            parts.append(encoder(record, covers(highlighted_set, record.event_type)))
        return "".join(parts)
