"""Define a class holding the active body description, which can be swapped at runtime."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable

from robot_frames.io.logging import log_error, log_info

if TYPE_CHECKING:
    from robot_frames.kinematics.body_description import BodyDescription

DescriptionCallback = Callable[[str], None]
"""Called with the name of the affected frame whenever the body description changes."""


class BodyDescriptionSource:
    """Provides snapshots of the current body description and announces when it is replaced."""

    def __init__(self, description: BodyDescription | None = None) -> None:
        """Initialize the source with an optional initial body description."""
        self._lock = threading.Lock()
        self._description = description
        self._callbacks: list[DescriptionCallback] = []

    def current(self) -> BodyDescription | None:
        """Retrieve the active body description (None if it is currently unavailable)."""
        with self._lock:
            return self._description

    def subscribe(self, callback: DescriptionCallback) -> None:
        """Register a function called after each change to the body description."""
        with self._lock:
            self._callbacks.append(callback)

    def swap(self, description: BodyDescription, affected_frame: str = "") -> None:
        """Replace the active body description and notify all subscribers.

        :param description: New body description
        :param affected_frame: Name of the frame whose description changed ("" if unspecified)
        """
        with self._lock:
            self._description = description
            callbacks = list(self._callbacks)

        log_info(f"Body description of '{description.name}' was replaced.")
        self._notify(callbacks, affected_frame)

    def clear(self, affected_frame: str = "") -> None:
        """Make the body description unavailable and notify all subscribers."""
        with self._lock:
            self._description = None
            callbacks = list(self._callbacks)

        self._notify(callbacks, affected_frame)

    @staticmethod
    def _notify(callbacks: list[DescriptionCallback], affected_frame: str) -> None:
        for callback in callbacks:
            try:
                callback(affected_frame)
            except Exception as exc:  # Remaining subscribers are still notified
                log_error(f"[BodyDescriptionSource] Subscriber {callback} raised: {exc!r}")
