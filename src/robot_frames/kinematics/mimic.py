"""Resolve the positions of mimic joints, which follow other joints' positions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from robot_frames.io.logging import log_debug, log_warn
from robot_frames.parallelism import SharedLock

if TYPE_CHECKING:
    from collections.abc import Mapping

    from robot_frames.kinematics.body_description import BodyDescription
    from robot_frames.kinematics.kinematics_core import JointPositions


@dataclass(frozen=True)
class MimicEntry:
    """Specifies how a dependent joint's position is derived from a source joint's position."""

    source_joint: str
    multiplier: float = 1.0
    offset: float = 0.0

    def derive(self, source_position: float) -> float:
        """Compute the dependent joint's position from the source joint's position."""
        return source_position * self.multiplier + self.offset


def build_mimic_map(description: BodyDescription) -> dict[str, MimicEntry]:
    """Collect the mimic relation of every joint in the body description.

    :param description: Body description whose joint metadata is scanned
    :return: Map from each dependent joint's name to its mimic entry
    """
    mimic_map: dict[str, MimicEntry] = {}
    for joint_name, info in description.joints.items():
        if info.mimic is None:
            continue
        if info.mimic.joint == joint_name:
            log_warn(f"Ignoring mimic relation of joint '{joint_name}', which mimics itself.")
            continue
        mimic_map[joint_name] = MimicEntry(info.mimic.joint, info.mimic.multiplier, info.mimic.offset)

    return mimic_map


def expand_mimic_positions(
    positions: Mapping[str, float],
    mimic_map: Mapping[str, MimicEntry],
) -> JointPositions:
    """Add the positions of mimic joints whose source joints have known positions.

    Only one level of mimicry is resolved: a joint mimicking another mimic joint receives a
        position only if its source joint's position was given directly.

    :param positions: Joint positions, which are left unchanged
    :param mimic_map: Maps dependent joint names to their mimic entries
    :return: Copy of the joint positions, extended with derived mimic joint positions
    """
    expanded = dict(positions)
    for joint_name, entry in mimic_map.items():
        if entry.source_joint in positions and joint_name not in expanded:
            expanded[joint_name] = entry.derive(positions[entry.source_joint])
    return expanded


class MimicResolver:
    """Owns the active mimic map, which may be rebuilt while other threads read it."""

    def __init__(self) -> None:
        """Initialize the resolver with an empty mimic map."""
        self._lock = SharedLock()
        self._mimic_map: Mapping[str, MimicEntry] = MappingProxyType({})

    @property
    def lock(self) -> SharedLock:
        """Retrieve the lock guarding the mimic map."""
        return self._lock

    @property
    def mimic_map(self) -> Mapping[str, MimicEntry]:
        """Retrieve a read-only view of the active mimic map."""
        return self._mimic_map

    def update(self, description: BodyDescription) -> None:
        """Replace the mimic map with one built from the given body description."""
        log_debug("Updating mimic map.")
        new_map = MappingProxyType(build_mimic_map(description))
        with self._lock.exclusive():
            self._mimic_map = new_map

    def try_expand(self, positions: Mapping[str, float]) -> tuple[JointPositions, bool]:
        """Attempt to add mimic joint positions without blocking on a concurrent update.

        :param positions: Joint positions supplied by the caller
        :return: Tuple of (possibly expanded) joint positions and whether expansion succeeded
        """
        with self._lock.shared_attempt() as acquired:
            if not acquired:
                log_debug("Failed to update positions for mimic joints -- could not get lock")
                return dict(positions), False
            return expand_mimic_positions(positions, self._mimic_map), True
