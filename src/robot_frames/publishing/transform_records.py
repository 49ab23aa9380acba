"""Define time-stamped transform records and the sinks that receive them."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from robot_frames.kinematics.pose3d import Pose3D


def strip_leading_slash(frame_name: str) -> str:
    """Remove one leading '/' from a frame name, as frame names in /tf must not begin with one."""
    return frame_name[1:] if frame_name.startswith("/") else frame_name


@dataclass(frozen=True)
class TransformRecord:
    """The pose of a child frame relative to its parent frame at a point in time."""

    parent_frame: str
    child_frame: str
    stamp: float
    """Time (seconds) at which the transform is valid."""

    pose: Pose3D

    @classmethod
    def create(cls, parent_frame: str, child_frame: str, stamp: float, pose: Pose3D) -> TransformRecord:
        """Construct a record with normalized frame names from a pose relative to the parent."""
        parent = strip_leading_slash(parent_frame)
        return cls(parent, strip_leading_slash(child_frame), stamp, pose.with_ref_frame(parent))


class TransformSink(Protocol):
    """A channel that accepts a batch of transform records in a single write."""

    def send(self, records: Sequence[TransformRecord]) -> None:
        """Send the given batch of transform records."""
        ...


class RecordingSink:
    """A transform sink that keeps every batch it receives in memory."""

    def __init__(self) -> None:
        """Initialize the sink with no received batches."""
        self._lock = threading.Lock()
        self._batches: list[list[TransformRecord]] = []

    def send(self, records: Sequence[TransformRecord]) -> None:
        """Store the given batch of transform records."""
        with self._lock:
            self._batches.append(list(records))

    @property
    def batches(self) -> list[list[TransformRecord]]:
        """Retrieve a copy of all batches received so far, oldest first."""
        with self._lock:
            return [list(batch) for batch in self._batches]

    @property
    def last_batch(self) -> list[TransformRecord] | None:
        """Retrieve the most recently received batch (None if nothing was received)."""
        with self._lock:
            return list(self._batches[-1]) if self._batches else None

    def clear(self) -> None:
        """Discard all received batches."""
        with self._lock:
            self._batches.clear()
