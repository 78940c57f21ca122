"""Import interfaces for the robot collaborators that consume navigation commands."""

from .motion_controller import MotionController as MotionController
from .motion_controller import VelocityCommand as VelocityCommand
