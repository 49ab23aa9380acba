"""Unit tests for assembling body descriptions into kinematic trees."""

import pytest

from robot_frames.kinematics import BodyDescription, JointInfo, JointModel, JointType, MotionType

from .conftest import chain_description


def _fixed_joint(name: str, parent: str, child: str) -> tuple[JointInfo, JointModel]:
    return JointInfo(name, JointType.FIXED, parent, child), JointModel.fixed(name)


def test_chain_description_tree() -> None:
    """Verify that joints are connected into a tree rooted at the parentless link."""
    # Act
    description = chain_description("arm", [JointType.REVOLUTE, JointType.FIXED])

    # Assert - Walking the tree visits the chain in order
    elements = list(description.root.walk())
    assert [e.name for e in elements] == ["link_0", "link_1", "link_2"]
    assert elements[0].joint.name == "link_0_root_joint"
    assert elements[0].joint.motion == MotionType.NONE
    assert elements[1].joint.motion == MotionType.ROTATION
    assert description.joint_types == {"joint_1": JointType.REVOLUTE, "joint_2": JointType.FIXED}


def test_walk_is_depth_first_in_child_order() -> None:
    """Verify that the tree is walked depth-first, visiting children in declaration order."""
    description = BodyDescription.from_joints(
        "tree",
        ["root", "a", "a_child", "b"],
        [
            _fixed_joint("root_to_a", "root", "a"),
            _fixed_joint("root_to_b", "root", "b"),
            _fixed_joint("a_to_child", "a", "a_child"),
        ],
    )

    assert [e.name for e in description.root.walk()] == ["root", "a", "a_child", "b"]


def test_link_with_two_parents_raises_error() -> None:
    """Verify that a link attached beneath two different joints is rejected."""
    with pytest.raises(ValueError, match="more than one parent"):
        BodyDescription.from_joints(
            "bad",
            ["a", "b", "c"],
            [_fixed_joint("a_to_c", "a", "c"), _fixed_joint("b_to_c", "b", "c")],
        )


def test_multiple_roots_raise_error() -> None:
    """Verify that links forming more than one tree are rejected."""
    with pytest.raises(ValueError, match="exactly one root"):
        BodyDescription.from_joints("bad", ["a", "b", "c"], [_fixed_joint("a_to_b", "a", "b")])


def test_disconnected_cycle_raises_error() -> None:
    """Verify that links caught in a cycle, unreachable from the root, are rejected."""
    with pytest.raises(ValueError, match="not connected"):
        BodyDescription.from_joints(
            "bad",
            ["root", "x", "y"],
            [_fixed_joint("x_to_y", "x", "y"), _fixed_joint("y_to_x", "y", "x")],
        )
