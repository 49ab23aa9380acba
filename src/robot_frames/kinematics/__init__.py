"""Import classes and definitions for robot kinematics."""

from .body_description import BodyDescription as BodyDescription
from .body_description import JointInfo as JointInfo
from .body_description import MimicSpec as MimicSpec
from .body_description import TreeElement as TreeElement
from .joints import JointModel as JointModel
from .joints import JointType as JointType
from .joints import MotionType as MotionType
from .kinematics_core import DEFAULT_FRAME as DEFAULT_FRAME
from .kinematics_core import JointPositions as JointPositions
from .mimic import MimicEntry as MimicEntry
from .mimic import MimicResolver as MimicResolver
from .point3d import Point3D as Point3D
from .pose3d import Pose3D as Pose3D
from .rotations import EulerRPY as EulerRPY
from .rotations import Quaternion as Quaternion
from .segments import Segment as Segment
from .segments import SegmentTable as SegmentTable
from .segments import build_segment_table as build_segment_table
