"""Define functions to convert between transform records and ROS messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

import rospy
from geometry_msgs.msg import Quaternion as QuaternionMsg
from geometry_msgs.msg import Transform, TransformStamped, Vector3

from robot_frames.publishing.joint_state_listener import JointStateSample

if TYPE_CHECKING:
    from sensor_msgs.msg import JointState

    from robot_frames.kinematics import Pose3D
    from robot_frames.publishing.transform_records import TransformRecord


def pose_to_tf_msg(pose: Pose3D) -> Transform:
    """Convert the given pose into a geometry_msgs/Transform message."""
    translation = Vector3(pose.position.x, pose.position.y, pose.position.z)
    q = pose.orientation
    return Transform(translation, QuaternionMsg(q.x, q.y, q.z, q.w))


def record_to_tf_stamped_msg(record: TransformRecord) -> TransformStamped:
    """Convert the given transform record into a geometry_msgs/TransformStamped message."""
    tf_stamped_msg = TransformStamped()
    tf_stamped_msg.header.stamp = rospy.Time.from_sec(record.stamp)
    tf_stamped_msg.header.frame_id = record.parent_frame
    tf_stamped_msg.child_frame_id = record.child_frame
    tf_stamped_msg.transform = pose_to_tf_msg(record.pose)
    return tf_stamped_msg


def joint_state_sample_from_msg(msg: JointState) -> JointStateSample:
    """Construct a joint state sample from a sensor_msgs/JointState message."""
    return JointStateSample(list(msg.name), list(msg.position), msg.header.stamp.to_sec())
