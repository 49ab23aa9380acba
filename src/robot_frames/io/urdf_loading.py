"""Define functions to load a robot's body description from URDF."""

from __future__ import annotations

from typing import TYPE_CHECKING

from urdf_parser_py.urdf import URDF

from robot_frames.io.logging import log_error
from robot_frames.kinematics.body_description import BodyDescription, JointInfo, MimicSpec
from robot_frames.kinematics.joints import JointModel, JointType
from robot_frames.kinematics.point3d import Point3D
from robot_frames.kinematics.pose3d import Pose3D

if TYPE_CHECKING:
    from pathlib import Path

    from urdf_parser_py.urdf import Joint, Pose


def _origin_to_pose(origin: Pose | None, parent_link: str) -> Pose3D:
    """Convert a URDF joint origin into a Pose3D relative to the joint's parent link."""
    if origin is None:
        return Pose3D.identity(parent_link)

    x, y, z = origin.xyz if origin.xyz is not None else (0.0, 0.0, 0.0)
    roll, pitch, yaw = origin.rpy if origin.rpy is not None else (0.0, 0.0, 0.0)
    return Pose3D.from_xyz_rpy(x, y, z, roll, pitch, yaw, ref_frame=parent_link)


def _convert_joint(joint: Joint) -> tuple[JointInfo, JointModel]:
    """Convert a parsed URDF joint into joint metadata and a joint pose model."""
    joint_type = JointType.from_string(joint.type)

    mimic = None
    if joint.mimic is not None:
        multiplier = joint.mimic.multiplier if joint.mimic.multiplier is not None else 1.0
        offset = joint.mimic.offset if joint.mimic.offset is not None else 0.0
        mimic = MimicSpec(joint.mimic.joint, float(multiplier), float(offset))

    info = JointInfo(joint.name, joint_type, joint.parent, joint.child, mimic)

    axis = Point3D.from_sequence(joint.axis) if joint.axis is not None else Point3D(1.0, 0.0, 0.0)
    model = JointModel(
        name=joint.name,
        motion=joint_type.motion,
        origin=_origin_to_pose(joint.origin, joint.parent),
        axis=axis,
    )
    return info, model


def body_description_from_urdf(robot: URDF) -> BodyDescription:
    """Convert a parsed URDF model into a body description.

    :param robot: Robot model parsed by urdf_parser_py
    :return: Body description whose tree is rooted at the URDF's root link
    :raises ValueError: If the URDF links do not form a single tree
    """
    links = [link.name for link in robot.links]
    joints = [_convert_joint(joint) for joint in robot.joints]
    return BodyDescription.from_joints(robot.name, links, joints)


def body_description_from_string(urdf_xml: str | bytes) -> BodyDescription:
    """Parse a body description from URDF XML (pass bytes if the XML declares an encoding)."""
    return body_description_from_urdf(URDF.from_xml_string(urdf_xml))


def load_body_description(urdf_path: Path) -> BodyDescription:
    """Load a body description from the given URDF file.

    :param urdf_path: Path to a URDF file
    :return: Loaded body description
    :raises FileNotFoundError: If the URDF file does not exist
    """
    if not urdf_path.exists():
        raise FileNotFoundError(f"Cannot load body description from nonexistent URDF: {urdf_path}")

    return body_description_from_string(urdf_path.read_bytes())


def try_parse_body_description(urdf_xml: str | bytes) -> BodyDescription | None:
    """Parse a body description from URDF XML, logging an error if it doesn't form a single tree.

    :param urdf_xml: URDF XML (pass bytes if the XML declares an encoding)
    :return: Parsed body description, or None if the URDF was malformed
    """
    try:
        return body_description_from_string(urdf_xml)
    except (ValueError, SyntaxError) as exc:
        log_error(f"Failed to build a kinematic tree from URDF: {exc}")
        return None


def try_load_body_description(urdf_path: Path) -> BodyDescription | None:
    """Load a body description from the given URDF file, or None if the URDF was malformed.

    :raises FileNotFoundError: If the URDF file does not exist
    """
    if not urdf_path.exists():
        raise FileNotFoundError(f"Cannot load body description from nonexistent URDF: {urdf_path}")

    return try_parse_body_description(urdf_path.read_bytes())
