"""Define test fixtures shared across the robot state publisher's unit tests."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from robot_frames.io.urdf_loading import load_body_description
from robot_frames.kinematics import BodyDescription, JointInfo, JointModel, Point3D, Pose3D
from robot_frames.publishing import BodyDescriptionSource, RecordingSink, RobotStatePublisher

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from robot_frames.kinematics import JointType, MimicSpec

TEST_DATA = Path(__file__).parent / "test_data"


class ManualClock:
    """A clock whose time (seconds) only changes when the test sets it."""

    def __init__(self, now_s: float = 100.0) -> None:
        """Initialize the clock at the given time."""
        self.now_s = now_s

    def __call__(self) -> float:
        """Retrieve the current time (seconds)."""
        return self.now_s

    def advance(self, duration_s: float) -> None:
        """Move the clock forward (or backward, if negative) by the given duration."""
        self.now_s += duration_s


def chain_description(
    name: str,
    joint_types: Sequence[JointType],
    prefix: str = "",
    mimic: Mapping[str, MimicSpec] | None = None,
) -> BodyDescription:
    """Construct the body description of a serial chain of links.

    Joint i (counting from 1) connects link i-1 to link i, offset 0.1 m along the parent's z-axis
        and moving about (or along) that same axis.

    :param name: Name of the robot
    :param joint_types: Types of the chain's joints, ordered from the root outward
    :param prefix: Prefix added to every link and joint name
    :param mimic: Optional map from joint names to their mimic relations
    :return: Constructed body description
    """
    mimic = mimic or {}
    links = [f"{prefix}link_{i}" for i in range(len(joint_types) + 1)]

    joints = []
    for i, joint_type in enumerate(joint_types, start=1):
        joint_name = f"{prefix}joint_{i}"
        parent, child = links[i - 1], links[i]
        info = JointInfo(joint_name, joint_type, parent, child, mimic.get(joint_name))
        model = JointModel(
            joint_name,
            joint_type.motion,
            origin=Pose3D.from_xyz_rpy(z=0.1, ref_frame=parent),
            axis=Point3D(0.0, 0.0, 1.0),
        )
        joints.append((info, model))

    return BodyDescription.from_joints(name, links, joints)


@pytest.fixture
def urdf_path() -> Path:
    """Specify a path to an example URDF of an arm with a two-finger gripper."""
    path = TEST_DATA / "urdf/gripper_arm.urdf"
    assert path.exists(), f"Expected to find file: {path}"
    return path


@pytest.fixture
def description(urdf_path: Path) -> BodyDescription:
    """Load the example arm's body description."""
    return load_body_description(urdf_path)


@pytest.fixture
def clock() -> ManualClock:
    """Provide a manually advanced clock."""
    return ManualClock()


@pytest.fixture
def tf_sink() -> RecordingSink:
    """Provide an in-memory sink standing in for the dynamic /tf channel."""
    return RecordingSink()


@pytest.fixture
def static_sink() -> RecordingSink:
    """Provide an in-memory sink standing in for the latched /tf_static channel."""
    return RecordingSink()


@pytest.fixture
def source(description: BodyDescription) -> BodyDescriptionSource:
    """Provide a body description source holding the example arm."""
    return BodyDescriptionSource(description)


@pytest.fixture
def publisher(
    source: BodyDescriptionSource,
    tf_sink: RecordingSink,
    static_sink: RecordingSink,
    clock: ManualClock,
) -> RobotStatePublisher:
    """Provide an initialized robot state publisher for the example arm."""
    rsp = RobotStatePublisher(source, tf_sink, static_sink, clock=clock)
    assert rsp.init()
    return rsp
