"""Define transform sinks that broadcast transform records into /tf and /tf_static."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tf2_ros import StaticTransformBroadcaster, TransformBroadcaster

from robot_frames.ros.msg_conversion import record_to_tf_stamped_msg

if TYPE_CHECKING:
    from collections.abc import Sequence

    from robot_frames.publishing.transform_records import TransformRecord


class TfBroadcasterSink:
    """Sends each batch of transforms to /tf as a single message."""

    def __init__(self) -> None:
        """Initialize the transform broadcaster (requires an initialized ROS node)."""
        self._broadcaster = TransformBroadcaster()

    def send(self, records: Sequence[TransformRecord]) -> None:
        """Broadcast the given batch of transform records."""
        self._broadcaster.sendTransform([record_to_tf_stamped_msg(r) for r in records])


class StaticTfBroadcasterSink:
    """Sends each batch of transforms to the latched /tf_static topic."""

    def __init__(self) -> None:
        """Initialize the static transform broadcaster (requires an initialized ROS node)."""
        self._broadcaster = StaticTransformBroadcaster()

    def send(self, records: Sequence[TransformRecord]) -> None:
        """Broadcast the given batch of transform records, retained for late subscribers."""
        self._broadcaster.sendTransform([record_to_tf_stamped_msg(r) for r in records])
