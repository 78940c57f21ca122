"""Import ROS-related classes and definitions."""

from .params import get_ros_param as get_ros_param
from .params import load_config_from_ros as load_config_from_ros
from .target_reacher_node import RosMotionController as RosMotionController
from .target_reacher_node import TargetReacherNode as TargetReacherNode
from .transform_manager import TfFrameGraph as TfFrameGraph
