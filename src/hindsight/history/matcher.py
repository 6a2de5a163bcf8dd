"""Type coverage — does a filter set match a concrete event type?

A filter type covers itself and every subclass of itself.  ``issubclass``
does the ancestor query, so abstract base classes and virtual subclasses
registered through ``ABC.register`` take part as well.

``covers`` is pure and total.  It has no notion of an absent filter: an
empty set covers nothing.  Callers decide what ``None`` means.
"""

from __future__ import annotations

from collections.abc import Iterable


def covers(filter_set: Iterable[type], candidate: type) -> bool:
    """Return True if some member of ``filter_set`` is ``candidate`` or an ancestor of it.

    Members that are not classes are ignored.
    """
    for type_ in filter_set:
        if isinstance(type_, type) and issubclass(candidate, type_):
            return True
    return False
