"""Define the segments of a kinematic tree and build lookup tables from joint name to segment."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from robot_frames.io.logging import log_debug, log_info, log_warn
from robot_frames.kinematics.joints import JointType, MotionType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from robot_frames.kinematics.body_description import TreeElement
    from robot_frames.kinematics.joints import JointModel
    from robot_frames.kinematics.pose3d import Pose3D


@dataclass(frozen=True)
class Segment:
    """A joint's transform-producing model annotated with its parent and child frames."""

    joint: JointModel
    parent_frame: str
    child_frame: str

    @property
    def joint_name(self) -> str:
        """Retrieve the name of the joint connecting the parent and child frames."""
        return self.joint.name

    def pose(self, position: float) -> Pose3D:
        """Compute the child frame's pose relative to the parent frame at a joint position."""
        return self.joint.pose(position).with_ref_frame(self.parent_frame)


def _frozen(segments: dict[str, Segment]) -> Mapping[str, Segment]:
    return MappingProxyType(dict(segments))


@dataclass(frozen=True)
class SegmentTable:
    """Two read-only lookup tables from joint name to segment: moving and fixed joints."""

    moving: Mapping[str, Segment] = field(default_factory=lambda: MappingProxyType({}))
    """Segments whose pose depends on a joint position supplied at runtime."""

    fixed: Mapping[str, Segment] = field(default_factory=lambda: MappingProxyType({}))
    """Segments with a constant pose."""

    def __len__(self) -> int:
        """Count the segments across both tables."""
        return len(self.moving) + len(self.fixed)

    def __contains__(self, joint_name: object) -> bool:
        """Check whether the named joint has a segment in either table."""
        return joint_name in self.moving or joint_name in self.fixed


def build_segment_table(root: TreeElement, joint_types: Mapping[str, JointType]) -> SegmentTable:
    """Walk the kinematic tree from its root and classify every joint as moving or fixed.

    A structurally fixed joint that the body description declares as floating cannot be posed
        from a single joint position, so it is left out of both tables.

    :param root: Root element of the kinematic tree
    :param joint_types: Maps joint names to their types in the body description
    :return: Newly constructed segment tables; the tree itself is never modified
    """
    moving: dict[str, Segment] = {}
    fixed: dict[str, Segment] = {}

    stack: list[TreeElement] = [root]
    while stack:
        parent = stack.pop()
        for child in parent.children:
            stack.append(child)  # Visit every child, regardless of how it's classified

            joint_name = child.joint.name
            segment = Segment(child.joint, parent_frame=parent.name, child_frame=child.name)

            if joint_name in moving or joint_name in fixed:
                log_warn(f"Joint '{joint_name}' appears more than once; keeping its first segment.")
                continue

            if child.joint.motion == MotionType.NONE:
                if joint_types.get(joint_name) == JointType.FLOATING:
                    log_info(
                        f"Floating joint. Not adding segment from {parent.name} to {child.name}. "
                        "This transform cannot be published based on joint states.",
                    )
                else:
                    fixed[joint_name] = segment
                    log_debug(f"Adding fixed segment from {parent.name} to {child.name}")
            else:
                moving[joint_name] = segment
                log_debug(f"Adding moving segment from {parent.name} to {child.name}")

    return SegmentTable(moving=_frozen(moving), fixed=_frozen(fixed))
