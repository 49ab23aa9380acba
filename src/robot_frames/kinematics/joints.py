"""Define classes to represent robot joints and the motion they produce."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from robot_frames.kinematics.point3d import Point3D
from robot_frames.kinematics.pose3d import Pose3D
from robot_frames.kinematics.rotations import Quaternion


class JointType(Enum):
    """An enumeration of joint types as declared in a robot's body description."""

    REVOLUTE = "revolute"
    CONTINUOUS = "continuous"
    PRISMATIC = "prismatic"
    FIXED = "fixed"
    FLOATING = "floating"
    PLANAR = "planar"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, type_name: str | None) -> JointType:
        """Find the joint type with the given name, or UNKNOWN if no type matches."""
        try:
            return cls((type_name or "").lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def motion(self) -> MotionType:
        """Retrieve the single-scalar motion produced by this type of joint.

        Floating and planar joints have more than one degree of freedom, so a single joint
            position cannot describe them; like fixed joints, they produce no scalar motion.
        """
        if self in (JointType.REVOLUTE, JointType.CONTINUOUS):
            return MotionType.ROTATION
        if self == JointType.PRISMATIC:
            return MotionType.TRANSLATION
        return MotionType.NONE


class MotionType(Enum):
    """An enumeration of the motion a joint produces as its position changes."""

    NONE = 0
    ROTATION = 1
    TRANSLATION = 2


@dataclass(frozen=True)
class JointModel:
    """A joint whose pose is a function of one scalar position."""

    name: str
    motion: MotionType

    origin: Pose3D = field(default_factory=Pose3D.identity)
    """Transform from the parent link to the joint frame (its pose at position zero)."""

    axis: Point3D = Point3D(1.0, 0.0, 0.0)
    """Axis of rotation or translation, specified in the joint frame."""

    def __post_init__(self) -> None:
        """Verify that a moving joint has a usable axis."""
        if self.motion != MotionType.NONE and self.axis.norm() == 0:
            raise ValueError(f"Joint '{self.name}' moves along a zero-length axis.")

    @classmethod
    def fixed(cls, name: str, origin: Pose3D | None = None) -> JointModel:
        """Construct a joint that produces no motion, with an optional constant origin."""
        return cls(name, MotionType.NONE, origin if origin is not None else Pose3D.identity())

    def pose(self, position: float) -> Pose3D:
        """Compute the pose of the child link relative to the parent link.

        :param position: Joint position (rad for rotation, m for translation; ignored if fixed)
        :return: Rigid transform from the parent link to the child link
        """
        if self.motion == MotionType.NONE:
            return self.origin

        if self.motion == MotionType.ROTATION:
            motion = Pose3D(
                Point3D.identity(),
                Quaternion.from_axis_angle(self.axis, position),
                self.origin.ref_frame,
            )
        else:
            translation = self.axis.normalized().scaled(position)
            motion = Pose3D(translation, Quaternion.identity(), self.origin.ref_frame)

        return self.origin @ motion
