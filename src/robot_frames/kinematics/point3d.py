"""Define a class to represent positions and direction vectors in 3D space."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from numpy.typing import NDArray


@dataclass(frozen=True)
class Point3D:
    """An (x,y,z) position or direction in 3D space."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        """Provide an iterator over the point's (x,y,z) coordinates."""
        yield from astuple(self)

    @classmethod
    def identity(cls) -> Point3D:
        """Construct a Point3D corresponding to the identity translation."""
        return Point3D(0, 0, 0)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Point3D:
        """Construct a Point3D from a NumPy array."""
        if arr.shape != (3,):
            raise ValueError(f"Cannot construct Point3D from an array of shape {arr.shape}")

        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> NDArray[np.float64]:
        """Convert the 3D point to a NumPy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Point3D:
        """Construct a Point3D instance from a sequence (e.g., list or tuple) of values."""
        if len(values) != 3:
            raise ValueError(f"Point3D expects 3 values, got {len(values)}")
        return Point3D(float(values[0]), float(values[1]), float(values[2]))

    def norm(self) -> float:
        """Compute the Euclidean length of the vector from the origin to this point."""
        return float(np.linalg.norm(self.to_array()))

    def normalized(self) -> Point3D:
        """Compute the unit vector pointing in the same direction as this one.

        :raises ValueError: If the vector has zero length
        """
        length = self.norm()
        if length == 0:
            raise ValueError(f"Cannot normalize a zero-length vector: {self}")
        return Point3D.from_array(self.to_array() / length)

    def scaled(self, factor: float) -> Point3D:
        """Compute this vector multiplied by the given scalar factor."""
        return Point3D(self.x * factor, self.y * factor, self.z * factor)

    def approx_equal(self, other: Point3D, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Evaluate whether another Point3D is approximately equal to this one."""
        return bool(np.allclose(self.to_array(), other.to_array(), rtol=rtol, atol=atol))
