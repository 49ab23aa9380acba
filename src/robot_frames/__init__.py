"""Publish the frames of a robot's kinematic tree as transforms computed from its joint states."""

__version__ = "0.1.0"
