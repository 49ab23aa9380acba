"""Import classes used to publish a robot's frames as transforms."""

from .console_sink import ConsoleSink as ConsoleSink
from .description_source import BodyDescriptionSource as BodyDescriptionSource
from .joint_state_listener import JointStateListener as JointStateListener
from .joint_state_listener import JointStateSample as JointStateSample
from .robot_state_publisher import FIXED_TRANSFORM_STAMP_OFFSET_S as FIXED_TRANSFORM_STAMP_OFFSET_S
from .robot_state_publisher import PublishStatus as PublishStatus
from .robot_state_publisher import RobotStatePublisher as RobotStatePublisher
from .transform_records import RecordingSink as RecordingSink
from .transform_records import TransformRecord as TransformRecord
from .transform_records import TransformSink as TransformSink
from .transform_records import strip_leading_slash as strip_leading_slash
