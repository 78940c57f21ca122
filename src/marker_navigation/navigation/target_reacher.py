"""Define a class that searches for a marker and then drives the robot to its destination."""

from __future__ import annotations

from typing import TYPE_CHECKING

from marker_navigation.io.logging import log_error, log_info
from marker_navigation.navigation.destination_catalog import DestinationCatalog, UnknownMarkerId
from marker_navigation.navigation.events import GoalReached, MarkerObserved
from marker_navigation.navigation.goal_resolver import Goal, GoalResolver
from marker_navigation.navigation.outcome import Outcome
from marker_navigation.navigation.search_state import SearchStateMachine
from marker_navigation.transforms import FrameUnavailable

if TYPE_CHECKING:
    from marker_navigation.io.pydantic_schemata import TargetReacherConfig
    from marker_navigation.navigation.events import NavigationEvent
    from marker_navigation.robots import MotionController
    from marker_navigation.transforms import FrameGraph


class TargetReacher:
    """Dispatches navigation events to the search state machine and the goal resolver."""

    def __init__(
        self,
        resolver: GoalResolver,
        search: SearchStateMachine,
        controller: MotionController,
        working_frame: str,
        *,
        repeat_resolution: bool = False,
    ) -> None:
        """Initialize the target reacher from its collaborators.

        :param resolver: Resolves detected markers into goals in the working frame
        :param search: State machine gating rotation while searching for a marker
        :param controller: Motion controller that receives goals and velocity commands
        :param working_frame: Frame in which the motion controller expects goal coordinates
        :param repeat_resolution: Whether detections after a successful resolution are resolved
            again (default: False, i.e., they are ignored)
        """
        self.resolver = resolver
        self.search = search
        self.controller = controller
        self.working_frame = working_frame
        self.repeat_resolution = repeat_resolution

        self.final_goal: Goal | None = None
        """Goal resolved from a detected marker (None until a resolution succeeds)."""

    @classmethod
    def from_config(
        cls,
        config: TargetReacherConfig,
        frame_graph: FrameGraph,
        controller: MotionController,
    ) -> TargetReacher:
        """Construct a TargetReacher from validated parameters and its collaborators."""
        resolver = GoalResolver(
            DestinationCatalog.from_config(config),
            frame_graph,
            destination_frame=config.destination_frame,
            timeout_s=config.frame_lookup_timeout_s,
        )
        search = SearchStateMachine(rotation_speed_rad_s=config.rotation_speed_rad_s)

        return TargetReacher(
            resolver,
            search,
            controller,
            working_frame=config.working_frame,
            repeat_resolution=config.repeat_resolution,
        )

    def start(self) -> None:
        """Send the initial search goal to the motion controller."""
        x, y = self.resolver.catalog.initial_goal
        log_info(f"[TargetReacher.start] Setting initial search goal ({x}, {y}).")
        self.controller.set_goal(x, y)

    def handle(self, event: NavigationEvent) -> Outcome:
        """Process a single navigation event to completion.

        :param event: Marker observation or goal-reached notification
        :return: Outcome describing how the event was handled
        :raises TypeError: If the event has an unrecognized type
        """
        if isinstance(event, MarkerObserved):
            return self._handle_marker_observed(event)
        if isinstance(event, GoalReached):
            return self._handle_goal_reached(event)

        raise TypeError(f"Received unexpected navigation event: {event}")

    def _handle_goal_reached(self, event: GoalReached) -> Outcome:
        """Rotate to search for a marker if none has been detected yet."""
        if not event.reached:
            return Outcome(success=True, message="Goal not yet reached; no command sent.")

        command = self.search.on_goal_reached()
        if command is None:
            return Outcome(success=True, message="Marker already detected; rotation withheld.")

        self.controller.command_velocity(command)
        return Outcome(
            success=True,
            message=f"Rotating at {command.angular_z} rad/s to search.",
            command=command,
        )

    def _handle_marker_observed(self, event: MarkerObserved) -> Outcome:
        """Latch marker detection and resolve the first marker's destination into a goal."""
        marker_id = event.first_marker_id
        if marker_id is None:
            return Outcome(success=True, message="Empty marker batch ignored.")

        if self.search.on_marker_observed():
            log_info(f"[TargetReacher.handle] Detected marker {marker_id}; stopped searching.")

        if self.final_goal is not None and not self.repeat_resolution:
            return Outcome(
                success=True,
                message=f"Goal already resolved; ignoring marker {marker_id}.",
                goal=self.final_goal,
            )

        try:
            goal = self.resolver.resolve(marker_id, self.working_frame, at_time=event.stamp)
        except UnknownMarkerId as unknown:
            log_error(f"[TargetReacher.handle] Dropping detection: {unknown}")
            return Outcome.failure(unknown)
        except FrameUnavailable as unavailable:
            log_error(f"[TargetReacher.handle] Could not resolve marker {marker_id}: {unavailable}")
            return Outcome.failure(unavailable)

        self.final_goal = goal
        self.controller.set_goal(goal.x, goal.y)
        return Outcome(
            success=True,
            message=f"Set goal ({goal.x:.3f}, {goal.y:.3f}) in '{goal.ref_frame}'.",
            goal=goal,
        )
