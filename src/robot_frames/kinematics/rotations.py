"""Define classes to represent 3D rotations and orientations."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import TYPE_CHECKING

import numpy as np
from pyquaternion import Quaternion as Q
from trimesh.transformations import (
    euler_from_quaternion,
    quaternion_from_euler,
    quaternion_from_matrix,
    quaternion_matrix,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray

    from robot_frames.kinematics.point3d import Point3D


@dataclass(frozen=True)
class EulerRPY:
    """A 3D rotation represented using three fixed-frame Euler angles."""

    roll_rad: float
    pitch_rad: float
    yaw_rad: float

    def __iter__(self) -> Iterator[float]:
        """Provide an iterator over the roll, pitch, and yaw values."""
        yield from astuple(self)

    def to_quaternion(self) -> Quaternion:
        """Convert the Euler angles into an equivalent unit quaternion."""
        w, x, y, z = quaternion_from_euler(self.roll_rad, self.pitch_rad, self.yaw_rad, axes="sxyz")
        return Quaternion(x=x, y=y, z=z, w=w)


@dataclass(frozen=True)
class Quaternion:
    """A unit quaternion representing a 3D orientation."""

    x: float
    y: float
    z: float
    w: float

    def __post_init__(self) -> None:
        """Normalize the quaternion after it is initialized."""
        norm = float(np.linalg.norm([self.x, self.y, self.z, self.w]))
        if norm == 0:
            raise ValueError(f"Cannot normalize a zero-valued quaternion: {self}")

        # Frozen dataclass: write the normalized components through object.__setattr__
        object.__setattr__(self, "x", float(self.x) / norm)
        object.__setattr__(self, "y", float(self.y) / norm)
        object.__setattr__(self, "z", float(self.z) / norm)
        object.__setattr__(self, "w", float(self.w) / norm)

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Return the Hamilton product of this quaternion and another.

        Reference: https://kieranwynn.github.io/pyquaternion/#quaternion-operations
        """
        if not isinstance(other, Quaternion):
            raise TypeError(f"Cannot multiply a Quaternion with a {type(other)}: {other}.")
        product = Q(self.w, self.x, self.y, self.z) * Q(other.w, other.x, other.y, other.z)
        return Quaternion(product.x, product.y, product.z, product.w)

    @classmethod
    def identity(cls) -> Quaternion:
        """Construct a Quaternion corresponding to the identity rotation."""
        return Quaternion(0, 0, 0, 1)

    @classmethod
    def from_axis_angle(cls, axis: Point3D, angle_rad: float) -> Quaternion:
        """Construct the quaternion rotating by the given angle about the given axis.

        :param axis: Rotation axis (need not be unit length, but must be nonzero)
        :param angle_rad: Right-handed rotation angle (radians) about the axis
        :return: Unit quaternion representing the rotation
        """
        q = Q(axis=axis.to_array(), angle=angle_rad)
        return Quaternion(q.x, q.y, q.z, q.w)

    def to_array(self) -> NDArray[np.float64]:
        """Convert the quaternion to a NumPy array of the form [x,y,z,w]."""
        return np.array([self.x, self.y, self.z, self.w])

    def to_euler_rpy(self) -> EulerRPY:
        """Convert the quaternion into equivalent Euler roll, pitch, and yaw angles."""
        r, p, y = euler_from_quaternion(quaternion=[self.w, self.x, self.y, self.z], axes="sxyz")
        return EulerRPY(r, p, y)

    @classmethod
    def from_rotation_matrix(cls, r_matrix: NDArray[np.float64]) -> Quaternion:
        """Construct a quaternion from a 3x3 rotation matrix."""
        if r_matrix.shape != (3, 3):
            raise ValueError(f"Quaternion expects a 3x3 rotation matrix, got {r_matrix.shape}")

        matrix = np.eye(4)  # Begin with a 4x4 identity matrix
        matrix[:3, :3] = r_matrix  # Fill in the rotation

        w, x, y, z = quaternion_from_matrix(matrix)  # Note: trimesh puts w (q's real value) first
        return Quaternion(x=float(x), y=float(y), z=float(z), w=float(w))

    def to_rotation_matrix(self) -> NDArray[np.float64]:
        """Convert the quaternion into an equivalent 3x3 rotation matrix."""
        return quaternion_matrix(quaternion=[self.w, self.x, self.y, self.z])[:3, :3]

    def approx_equal(self, other: Quaternion, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Evaluate whether another Quaternion is approximately equal to this one.

        Note: A quaternion is considered equal to its negation, as they express the same rotation.
        """
        self_array = self.to_array()
        other_array = other.to_array()

        return bool(
            np.allclose(self_array, other_array, rtol=rtol, atol=atol)
            or np.allclose(-self_array, other_array, rtol=rtol, atol=atol),
        )
