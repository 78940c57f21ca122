"""Import classes and definitions for robot kinematics."""

from .frame_tree import FrameTree as FrameTree
from .point3d import Point3D as Point3D
from .poses import DEFAULT_FRAME as DEFAULT_FRAME
from .poses import Pose3D as Pose3D
from .rotations import EulerRPY as EulerRPY
from .rotations import Quaternion as Quaternion
