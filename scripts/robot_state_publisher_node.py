"""Launch a ROS node that publishes a robot's frames to /tf from its joint states."""

import rospy

from robot_frames.ros.robot_state_node import RobotStateNode


def main() -> None:
    """Publish transforms for every joint state until the node is shut down."""
    rospy.init_node("robot_state_publisher")
    rospy.loginfo(f"Initialized node with name '{rospy.get_name()}'")

    _ = RobotStateNode()
    rospy.spin()


if __name__ == "__main__":
    main()
