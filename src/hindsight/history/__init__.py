"""Event history — record, filter and render observed events.

Leaf to root:

- ``record``: the immutable ``EventRecord`` value
- ``matcher``: subclass-aware type coverage
- ``log``: the append-only ``HistoryLog``
- ``activation``: the dormant/recording switch
- ``listeners``: the ``ListenerRegistry``
- ``query``: include/exclude selection and rendering
- ``recorder``: the ``EventHistory`` facade tying them together

"""

from hindsight.history.activation import ActivationController
from hindsight.history.encoders import encode_html, encode_text, get_encoder
from hindsight.history.listeners import EventHistoryListener, ListenerRegistry
from hindsight.history.log import HistoryLog
from hindsight.history.matcher import covers
from hindsight.history.query import QueryEngine
from hindsight.history.record import EventRecord
from hindsight.history.recorder import EventHistory

__all__ = [
    "ActivationController",
    "EventHistory",
    "EventHistoryListener",
    "EventRecord",
    "HistoryLog",
    "ListenerRegistry",
    "QueryEngine",
    "covers",
    "encode_html",
    "encode_text",
    "get_encoder",
]
