"""Define a class that turns incoming joint states into published transforms."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from robot_frames.io.logging import log_error, log_warn
from robot_frames.publishing.robot_state_publisher import PublishStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from robot_frames.io.config import PublisherConfig
    from robot_frames.publishing.robot_state_publisher import RobotStatePublisher


@dataclass(frozen=True)
class JointStateSample:
    """Positions of a set of named joints, measured at one point in time."""

    names: Sequence[str]
    positions: Sequence[float]
    stamp: float
    """Time (seconds) at which the positions were measured."""


class JointStateListener:
    """Forwards joint states to a robot state publisher, limiting how often each joint publishes."""

    def __init__(
        self,
        publisher: RobotStatePublisher,
        config: PublisherConfig,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the listener for an initialized robot state publisher.

        :param publisher: Robot state publisher sending the resulting transforms
        :param config: Publish rate and channel parameters
        :param clock: Time source (seconds), compared across callbacks to detect clock resets
        """
        self._publisher = publisher
        self._config = config
        self._clock = clock

        self._lock = threading.Lock()
        self._last_callback_time_s: float | None = None
        self._last_publish_time_s: dict[str, float] = {}
        """Maps each joint name to the stamp of its most recently published state."""

    @property
    def config(self) -> PublisherConfig:
        """Retrieve the listener's publisher parameters."""
        return self._config

    def start(self) -> None:
        """Send the fixed transforms once on the latched channel, if it is in use."""
        if self._config.use_tf_static:
            self._publisher.publish_fixed(use_static_channel=True)

    def on_fixed_timer(self) -> PublishStatus:
        """Periodically resend the fixed transforms on the dynamic channel."""
        return self._publisher.publish_fixed(use_static_channel=False)

    def on_joint_state(self, sample: JointStateSample) -> PublishStatus | None:
        """Publish transforms for the given joint state, unless it arrives too soon.

        :param sample: Joint names, their positions, and the time they were measured
        :return: Outcome of publishing (DEGRADED if sent without mimic joints),
            or None if the joint state was ignored
        """
        if len(sample.names) != len(sample.positions):
            log_error(
                "Robot state publisher ignored an invalid joint state with "
                f"{len(sample.names)} names but {len(sample.positions)} positions.",
            )
            return None

        previous_times = self._reserve_publish(sample)
        if previous_times is None:
            return None

        positions = dict(zip(sample.names, sample.positions))
        positions, mimic_expanded = self._publisher.expand_mimic_positions(positions)

        status = self._publisher.publish_moving(positions, sample.stamp)
        if status == PublishStatus.SKIPPED:
            self._release_publish(sample, previous_times)
        elif not mimic_expanded:
            status = PublishStatus.DEGRADED

        self._publisher.publish_if_description_changed()
        return status

    def _reserve_publish(self, sample: JointStateSample) -> dict[str, float | None] | None:
        """Check whether the sample is due and, if so, record its stamp for each of its joints.

        :return: Each joint's previous publish time (None if never published), or None if not due
        """
        now_s = self._clock()
        with self._lock:
            if self._last_callback_time_s is not None and now_s < self._last_callback_time_s:
                log_warn(
                    "Moved backwards in time (probably because the clock was reset), "
                    "re-publishing joint transforms!",
                )
                self._last_publish_time_s.clear()
            self._last_callback_time_s = now_s

            if not self._config.ignore_timestamp:
                last_published_s = now_s
                for name in sample.names:
                    last_published_s = min(last_published_s, self._last_publish_time_s.get(name, 0.0))

                if sample.stamp <= last_published_s + self._config.publish_interval_s:
                    return None

            previous_times = {name: self._last_publish_time_s.get(name) for name in sample.names}
            for name in sample.names:
                self._last_publish_time_s[name] = sample.stamp
            return previous_times

    def _release_publish(
        self,
        sample: JointStateSample,
        previous_times: dict[str, float | None],
    ) -> None:
        """Restore the publish times reserved for a sample that was never sent."""
        with self._lock:
            for name, previous_s in previous_times.items():
                if self._last_publish_time_s.get(name) != sample.stamp:
                    continue  # A later sample has since been published
                if previous_s is None:
                    del self._last_publish_time_s[name]
                else:
                    self._last_publish_time_s[name] = previous_s
