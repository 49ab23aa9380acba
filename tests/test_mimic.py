"""Unit tests for resolving the positions of mimic joints."""

from __future__ import annotations

import pytest

from robot_frames.kinematics import BodyDescription, JointType, MimicEntry, MimicResolver, MimicSpec
from robot_frames.kinematics.mimic import build_mimic_map, expand_mimic_positions

from .conftest import chain_description


def test_mimic_map_of_example_arm(description: BodyDescription) -> None:
    """Verify that the example arm's right finger mirrors its left finger."""
    mimic_map = build_mimic_map(description)

    assert mimic_map == {"finger_right_joint": MimicEntry("finger_left_joint", -1.0, 0.1)}


def test_expand_adds_derived_position() -> None:
    """Verify that a mimic joint's position is derived from its source joint's position."""
    # Arrange
    mimic_map = {"joint_b": MimicEntry("joint_a", multiplier=2.0, offset=0.5)}
    positions = {"joint_a": 1.0}

    # Act
    expanded = expand_mimic_positions(positions, mimic_map)

    # Assert - The caller's positions are left unchanged
    assert expanded == {"joint_a": 1.0, "joint_b": 2.5}
    assert positions == {"joint_a": 1.0}


def test_expand_keeps_explicit_positions() -> None:
    """Verify that a position given for a mimic joint is never overwritten."""
    mimic_map = {"joint_b": MimicEntry("joint_a", multiplier=2.0, offset=0.5)}

    expanded = expand_mimic_positions({"joint_a": 1.0, "joint_b": -3.0}, mimic_map)

    assert expanded["joint_b"] == -3.0


def test_expand_resolves_one_level_only() -> None:
    """Verify that a mimic of a mimic joint is not derived from the original source joint."""
    # Arrange - joint_c follows joint_b, which follows joint_a
    mimic_map = {
        "joint_c": MimicEntry("joint_b", multiplier=3.0),
        "joint_b": MimicEntry("joint_a", multiplier=2.0),
    }

    # Act
    expanded = expand_mimic_positions({"joint_a": 1.0}, mimic_map)

    # Assert
    assert expanded == {"joint_a": 1.0, "joint_b": 2.0}


def test_expand_without_source_position_adds_nothing() -> None:
    """Verify that no position is derived when the source joint's position is unknown."""
    mimic_map = {"joint_b": MimicEntry("joint_a")}

    assert expand_mimic_positions({"joint_z": 0.3}, mimic_map) == {"joint_z": 0.3}


def test_self_mimic_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    """Verify that a joint declared to mimic itself is left out of the mimic map."""
    description = chain_description(
        "loop",
        [JointType.REVOLUTE, JointType.REVOLUTE],
        mimic={"joint_1": MimicSpec("joint_1"), "joint_2": MimicSpec("joint_1", 0.5)},
    )

    mimic_map = build_mimic_map(description)

    assert mimic_map == {"joint_2": MimicEntry("joint_1", 0.5, 0.0)}
    assert "mimics itself" in caplog.text


def test_resolver_expands_after_update(description: BodyDescription) -> None:
    """Verify that the resolver derives mimic positions once it has a mimic map."""
    # Arrange - Before any update, the resolver knows of no mimic joints
    resolver = MimicResolver()
    assert resolver.try_expand({"finger_left_joint": 0.3}) == ({"finger_left_joint": 0.3}, True)

    # Act
    resolver.update(description)
    expanded, success = resolver.try_expand({"finger_left_joint": 0.3})

    # Assert
    assert success
    assert expanded["finger_right_joint"] == pytest.approx(-0.2)


def test_resolver_returns_input_while_map_is_rebuilt(description: BodyDescription) -> None:
    """Verify that expansion is abandoned, rather than blocking, while the map is locked."""
    # Arrange
    resolver = MimicResolver()
    resolver.update(description)
    positions = {"finger_left_joint": 0.3}

    # Act - Attempt expansion while a writer holds the mimic map's lock
    with resolver.lock.exclusive():
        expanded, success = resolver.try_expand(positions)

    # Assert - The unchanged positions are returned as a copy
    assert not success
    assert expanded == positions
    assert expanded is not positions
