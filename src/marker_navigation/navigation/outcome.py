"""Define the result reported for each navigation event handled by the target reacher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from marker_navigation.navigation.goal_resolver import Goal
    from marker_navigation.robots import VelocityCommand


@dataclass(frozen=True)
class Outcome:
    """The result of handling a single navigation event."""

    success: bool
    message: str

    goal: Goal | None = None
    """Goal resolved from a detected marker (None if the event resolved no goal)."""

    command: VelocityCommand | None = None
    """Velocity command sent to the motion controller (None if no command was sent)."""

    @classmethod
    def failure(cls, error: Exception) -> Outcome:
        """Report an event whose handling was abandoned because of the given error."""
        return Outcome(success=False, message=str(error))
