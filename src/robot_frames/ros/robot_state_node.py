"""Define a ROS interface that publishes a robot's frames to /tf from its joint states."""

from __future__ import annotations

import rospy
from sensor_msgs.msg import JointState
from std_msgs.msg import String

from robot_frames.io.urdf_loading import try_parse_body_description
from robot_frames.publishing import BodyDescriptionSource, JointStateListener, RobotStatePublisher
from robot_frames.ros.call_loop_thread import CallLoopThread
from robot_frames.ros.msg_conversion import joint_state_sample_from_msg
from robot_frames.ros.params import get_ros_param, load_publisher_config
from robot_frames.ros.tf_sinks import StaticTfBroadcasterSink, TfBroadcasterSink


class RobotStateNode:
    """Connects a robot state publisher to ROS joint states, tf2 broadcasters, and URDF updates."""

    def __init__(
        self,
        description_param: str = "robot_description",
        joint_state_topic: str = "joint_states",
        description_topic: str = "robot_description_updates",
    ) -> None:
        """Load the robot's URDF and parameters, then begin publishing transforms.

        :param description_param: ROS parameter holding the robot's URDF XML
        :param joint_state_topic: Topic of sensor_msgs/JointState messages
        :param description_topic: Topic of std_msgs/String messages carrying replacement URDFs
        :raises RuntimeError: If the robot state publisher cannot be initialized
        """
        config = load_publisher_config()
        urdf_xml = get_ros_param(description_param, str)

        self.source = BodyDescriptionSource(try_parse_body_description(urdf_xml))
        self.publisher = RobotStatePublisher(
            self.source,
            tf_sink=TfBroadcasterSink(),
            static_sink=StaticTfBroadcasterSink(),
            clock=rospy.get_time,
            missing_joint_warn_period_s=config.missing_joint_warn_period_s,
        )
        if not self.publisher.init():
            raise RuntimeError("Robot state publisher failed to initialize.")

        self.listener = JointStateListener(self.publisher, config, clock=rospy.get_time)
        self.listener.start()

        self._fixed_loop: CallLoopThread | None = None
        if not config.use_tf_static:
            self._fixed_loop = CallLoopThread(
                self.listener.on_fixed_timer,
                loop_hz=config.publish_frequency,
                name="fixed_transforms",
            )

        self._joint_state_sub = rospy.Subscriber(
            joint_state_topic,
            JointState,
            self._on_joint_state_msg,
            queue_size=1,
        )
        self._description_sub = rospy.Subscriber(
            description_topic,
            String,
            self._on_description_msg,
            queue_size=1,
        )

    def _on_joint_state_msg(self, msg: JointState) -> None:
        """Publish transforms for a received joint state message."""
        self.listener.on_joint_state(joint_state_sample_from_msg(msg))

    def _on_description_msg(self, msg: String) -> None:
        """Swap in a replacement body description received as URDF XML."""
        description = try_parse_body_description(msg.data)
        if description is None:
            rospy.logerr("[RobotStateNode] Ignoring invalid replacement URDF.")
            return

        self.source.swap(description, affected_frame=description.root.name)
