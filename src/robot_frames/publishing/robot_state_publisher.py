"""Define a class to publish a robot's joint positions as transforms between its frames."""

from __future__ import annotations

import threading
import time
from collections import Counter
from enum import Enum
from typing import TYPE_CHECKING, Callable

from robot_frames.io.logging import ThrottledWarning, log_debug, log_error
from robot_frames.kinematics.mimic import MimicResolver
from robot_frames.kinematics.segments import SegmentTable, build_segment_table
from robot_frames.parallelism import SharedLock
from robot_frames.publishing.transform_records import TransformRecord

if TYPE_CHECKING:
    from collections.abc import Mapping

    from robot_frames.kinematics.body_description import TreeElement
    from robot_frames.kinematics.joints import JointType
    from robot_frames.kinematics.kinematics_core import JointPositions
    from robot_frames.publishing.description_source import BodyDescriptionSource
    from robot_frames.publishing.transform_records import TransformSink

FIXED_TRANSFORM_STAMP_OFFSET_S = 0.5
"""Fixed transforms sent on the dynamic channel are stamped this far (seconds) into the future,
    so that consumers keep using them until the next periodic republish."""


class PublishStatus(Enum):
    """Outcome of an attempt to publish transforms."""

    PUBLISHED = "published"
    SKIPPED = "skipped"  # The segment tables were being rebuilt; nothing was sent
    DEGRADED = "degraded"  # Sent without mimic joints, as the mimic map was being rebuilt


class RobotStatePublisher:
    """Converts joint positions into transforms between the frames of a robot's kinematic tree.

    The segment tables are guarded by a structure lock. Publishing only ever attempts the lock
        once and skips the cycle if a rebuild holds it; a rebuild waits for in-flight publishes.
    """

    def __init__(
        self,
        source: BodyDescriptionSource,
        tf_sink: TransformSink,
        static_sink: TransformSink,
        clock: Callable[[], float] = time.time,
        missing_joint_warn_period_s: float = 10.0,
    ) -> None:
        """Initialize the publisher with its body description source and output sinks.

        :param source: Provides the active body description and announces changes to it
        :param tf_sink: Dynamic channel, receiving a batch of transforms every cycle
        :param static_sink: Latched channel, whose last batch is retained for late consumers
        :param clock: Time source (seconds) used to stamp fixed transforms
        :param missing_joint_warn_period_s: Minimum duration between warnings about a joint
        """
        self._source = source
        self._tf_sink = tf_sink
        self._static_sink = static_sink
        self._clock = clock

        self._structure_lock = SharedLock()
        self._segments = SegmentTable()
        self._tree: TreeElement | None = None
        self._joint_types: Mapping[str, JointType] = {}

        self._mimic = MimicResolver()
        self._missing_joint_warning = ThrottledWarning(missing_joint_warn_period_s)

        self._initialized = False
        self._flag_lock = threading.Lock()
        self._description_changed = False
        self.status_counts: Counter[PublishStatus] = Counter()
        """Counts how often each publish outcome occurred."""

        source.subscribe(self.on_description_changed)

    @property
    def initialized(self) -> bool:
        """Check whether init() has successfully built the segment tables."""
        return self._initialized

    @property
    def segments(self) -> SegmentTable:
        """Retrieve the active segment tables (replaced as a whole whenever they're rebuilt)."""
        return self._segments

    @property
    def structure_lock(self) -> SharedLock:
        """Retrieve the lock guarding the segment tables."""
        return self._structure_lock

    @property
    def mimic_resolver(self) -> MimicResolver:
        """Retrieve the resolver deriving mimic joint positions."""
        return self._mimic

    def init(self) -> bool:
        """Build the segment tables and mimic map from the current body description.

        :return: True if initialization succeeded, False if no body description was available
        """
        description = self._source.current()
        if description is None:
            log_error("robot_state_publisher: failed to initialize! No body description available.")
            return False

        table = build_segment_table(description.root, description.joint_types)
        with self._structure_lock.exclusive():
            self._tree = description.root
            self._joint_types = description.joint_types
            self._segments = table
        self._mimic.update(description)

        self._initialized = True
        return True

    def expand_mimic_positions(self, positions: Mapping[str, float]) -> tuple[JointPositions, bool]:
        """Add positions of mimic joints, unless the mimic map is being rebuilt.

        A failed expansion is counted as DEGRADED in status_counts.

        :return: Tuple of joint positions and whether the mimic positions could be added
        """
        expanded, success = self._mimic.try_expand(positions)
        if not success:
            self._count(PublishStatus.DEGRADED)
        return expanded, success

    def publish_moving(self, positions: Mapping[str, float], stamp: float) -> PublishStatus:
        """Publish the transforms of all moving joints with given positions as one batch.

        :param positions: Maps joint names to their positions (rad or m)
        :param stamp: Time (seconds) at which the joint positions were measured
        :return: PUBLISHED, or SKIPPED if the segment tables were being rebuilt
        """
        with self._structure_lock.shared_attempt() as acquired:
            if not acquired:
                log_debug("Publishing transforms for moving joints -- could not get lock")
                return self._count(PublishStatus.SKIPPED)

            log_debug("Publishing transforms for moving joints")
            moving = self._segments.moving
            records: list[TransformRecord] = []
            for joint_name, position in positions.items():
                segment = moving.get(joint_name)
                if segment is None:
                    self._missing_joint_warning.warn(
                        joint_name,
                        f'Joint state with name: "{joint_name}" was received '
                        "but not found in the body description",
                    )
                    continue

                pose = segment.pose(position)
                records.append(
                    TransformRecord.create(segment.parent_frame, segment.child_frame, stamp, pose),
                )

            self._tf_sink.send(records)
        return self._count(PublishStatus.PUBLISHED)

    def publish_fixed(self, use_static_channel: bool) -> PublishStatus:
        """Publish the transforms of all fixed joints as one batch.

        :param use_static_channel: If True, send to the latched channel; otherwise send to the
            dynamic channel, stamped slightly in the future
        :return: PUBLISHED, or SKIPPED if the segment tables were being rebuilt
        """
        with self._structure_lock.shared_attempt() as acquired:
            if not acquired:
                log_debug("Publishing transforms for fixed joints -- could not get lock")
                return self._count(PublishStatus.SKIPPED)

            log_debug("Publishing transforms for fixed joints")
            stamp = self._clock()
            if not use_static_channel:
                stamp += FIXED_TRANSFORM_STAMP_OFFSET_S

            records = [
                TransformRecord.create(s.parent_frame, s.child_frame, stamp, s.pose(0.0))
                for s in self._segments.fixed.values()
            ]

            sink = self._static_sink if use_static_channel else self._tf_sink
            sink.send(records)
        return self._count(PublishStatus.PUBLISHED)

    def on_description_changed(self, affected_frame: str) -> None:
        """Rebuild the segment tables and mimic map after the body description has changed.

        Every segment is rebuilt, regardless of which frame changed, because body descriptions
            rarely change at runtime.

        :param affected_frame: Name of the frame whose description changed
        """
        if not self._initialized:
            return

        log_debug(f"Body description changed (affected frame: '{affected_frame}')")
        with self._structure_lock.exclusive():
            description = self._source.current()
            if description is not None:
                self._tree = description.root
                self._joint_types = description.joint_types

            if self._tree is None:
                self._segments = SegmentTable()
            else:
                self._segments = build_segment_table(self._tree, self._joint_types)

            if description is not None:
                self._mimic.update(description)
            else:
                log_error(
                    "robot_state_publisher: failed to retrieve the body description "
                    "for updating the mimic map!",
                )

        with self._flag_lock:
            self._description_changed = True

    def publish_if_description_changed(self) -> bool:
        """Republish all fixed transforms on the latched channel if the body description changed.

        :return: True if fixed transforms were republished, else False
        """
        with self._flag_lock:
            if not self._description_changed:
                return False
            self._description_changed = False

        if self.publish_fixed(use_static_channel=True) == PublishStatus.SKIPPED:
            with self._flag_lock:  # Try again on the next cycle
                self._description_changed = True
            return False

        return True

    def _count(self, status: PublishStatus) -> PublishStatus:
        with self._flag_lock:
            self.status_counts[status] += 1
        return status
