"""Activation — whether incoming events are recorded at all.

The state is one flat boolean.  Administrative calls and listener-set
transitions are equal writers and the last write wins; there is no memory
of why the flag holds its current value.

Callers serialize access with the recorder lock.  The controller itself
does no locking.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ActivationController:
    """Two-state switch between dormant (initial) and recording."""

    __slots__ = ("_active",)

    def __init__(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        """True while incoming events are recorded."""
        return self._active

    def set_active(self, active: bool) -> None:
        """Administrative write."""
        self._write(bool(active), "administrative")

    def listener_added(self) -> None:
        """Someone is listening; start recording."""
        self._write(True, "listener added")

    def listeners_emptied(self) -> None:
        """No one is listening; stop recording."""
        self._write(False, "no listeners")

    def _write(self, active: bool, reason: str) -> None:
        if active != self._active:
            logger.debug(
                "History %s (%s)", "recording" if active else "dormant", reason
            )
        self._active = active
