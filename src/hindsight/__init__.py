"""Hindsight — an in-memory history of typed events.

Records events only while someone is listening, notifies listeners of
each new record, and answers queries that filter the history by runtime
type, where a filter on a base class matches every subclass.

Quick start::

    from hindsight import EventHistory

    history = EventHistory()
    history.add_listener(lambda record: print(record.rendered))
    history.on_event(event)                 # recorded while a listener exists
    history.events(includes={BaseEvent})    # BaseEvent and its subclasses
    history.to_text(filtered_out={Noise}, highlighted={Important})

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0.dev0"
__all__ = [
    "Event",
    "EventHistory",
    "EventHistoryListener",
    "EventRecord",
    "HistoryConfig",
    "__version__",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import hindsight`` fast while providing a clean top-level API.
    """
    if name == "EventHistory":
        from hindsight.history.recorder import EventHistory

        return EventHistory

    if name == "EventRecord":
        from hindsight.history.record import EventRecord

        return EventRecord

    if name == "EventHistoryListener":
        from hindsight.history.listeners import EventHistoryListener

        return EventHistoryListener

    if name == "Event":
        from hindsight.events import Event

        return Event

    if name == "HistoryConfig":
        from hindsight.config import HistoryConfig

        return HistoryConfig

    if name == "load_config":
        from hindsight.config_loader import load_config

        return load_config

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
