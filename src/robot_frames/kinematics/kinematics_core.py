"""Implement core definitions for kinematics."""

from typing import Dict

DEFAULT_FRAME = "base_link"

JointPositions = Dict[str, float]
"""A map from joint names to positions (rad or m), e.g., one batch of joint states."""
