"""Import ROS-related classes and definitions."""

from .call_loop_thread import CallLoopThread as CallLoopThread
from .params import get_ros_param as get_ros_param
from .params import load_publisher_config as load_publisher_config
from .robot_state_node import RobotStateNode as RobotStateNode
from .tf_sinks import StaticTfBroadcasterSink as StaticTfBroadcasterSink
from .tf_sinks import TfBroadcasterSink as TfBroadcasterSink
