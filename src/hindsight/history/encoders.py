"""Per-entry encoders used when rendering history to a display string.

An encoder turns one record into a fragment of text and is told whether
the record should be emphasized.  Rendering concatenates the fragments in
arrival order; encoders never see more than one record at a time.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from hindsight._errors import ConfigError

if TYPE_CHECKING:
    from hindsight._types import Encoder
    from hindsight.history.record import EventRecord


def encode_html(record: EventRecord, emphasized: bool) -> str:
    """Encode a record as an HTML block; emphasis wraps the body in ``<b>``."""
    body = (
        f'<span class="type">{html.escape(record.event_type_name)}</span> '
        f'<span class="detail">{html.escape(record.rendered)}</span>'
    )
    if emphasized:
        body = f"<b>{body}</b>"
    return (
        f'<div class="event" data-seq="{record.sequence}" '
        f'data-thread="{html.escape(record.thread_name)}">{body}</div>\n'
    )


def encode_text(record: EventRecord, emphasized: bool) -> str:
    """Encode a record as one line; emphasized lines start with ``* ``."""
    marker = "* " if emphasized else "  "
    return f"{marker}[{record.sequence}] {record.event_type_name}: {record.rendered}\n"


_ENCODERS: dict[str, Encoder] = {
    "html": encode_html,
    "text": encode_text,
}


def get_encoder(name: str) -> Encoder:
    """Look up a built-in encoder by name."""
    try:
        return _ENCODERS[name]
    except KeyError:
        msg = f"Unknown encoding {name!r}; expected one of {sorted(_ENCODERS)}"
        raise ConfigError(msg) from None
