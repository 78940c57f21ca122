"""Define a general-purpose interface for a mobile base's motion controller."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VelocityCommand:
    """A planar velocity command for a mobile base."""

    linear_x: float  # Forward velocity (m/s)
    angular_z: float  # Yaw rate (rad/s)

    @classmethod
    def rotation(cls, angular_speed_rad_s: float) -> VelocityCommand:
        """Construct a command that rotates the base in place at the given speed."""
        return VelocityCommand(linear_x=0.0, angular_z=angular_speed_rad_s)


class MotionController(ABC):
    """An abstract interface for a controller that drives a mobile base toward goals."""

    @abstractmethod
    def set_goal(self, x: float, y: float) -> None:
        """Replace the controller's current target with (x, y) in its working frame."""
        ...

    @abstractmethod
    def command_velocity(self, command: VelocityCommand) -> None:
        """Send a direct velocity command to the mobile base."""
        ...
