"""Define a state machine deciding whether the robot may rotate to search for a marker."""

from __future__ import annotations

from enum import Enum

from marker_navigation.robots import VelocityCommand


class SearchState(Enum):
    """Whether the robot is still searching for a marker."""

    SEARCHING = "searching"
    MARKER_DETECTED = "marker_detected"


class SearchStateMachine:
    """Gates rotation commands on whether a marker has been detected.

    The only transition is SEARCHING -> MARKER_DETECTED, which is taken once and never undone.
    """

    DEFAULT_ROTATION_SPEED_RAD_S = 0.2

    def __init__(self, rotation_speed_rad_s: float = DEFAULT_ROTATION_SPEED_RAD_S) -> None:
        """Initialize the state machine in the SEARCHING state.

        :param rotation_speed_rad_s: Angular speed (rad/s) used while scanning for a marker
        """
        self.rotation_speed_rad_s = rotation_speed_rad_s
        self._state = SearchState.SEARCHING

    @property
    def state(self) -> SearchState:
        """Retrieve the current search state."""
        return self._state

    @property
    def marker_detected(self) -> bool:
        """Evaluate whether a marker has been detected."""
        return self._state is SearchState.MARKER_DETECTED

    def on_marker_observed(self) -> bool:
        """Latch the MARKER_DETECTED state.

        :return: True if this call caused the transition, False if the state was already latched
        """
        if self._state is SearchState.MARKER_DETECTED:
            return False

        self._state = SearchState.MARKER_DETECTED
        return True

    def on_goal_reached(self) -> VelocityCommand | None:
        """Decide the command to send once the motion controller reaches its current goal.

        :return: Rotation command while searching, or None once a marker has been detected
        """
        if self._state is SearchState.SEARCHING:
            return VelocityCommand.rotation(self.rotation_speed_rad_s)

        return None
