"""Define a class that converts a detected marker into a goal in the robot's working frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from marker_navigation.io.logging import log_info

if TYPE_CHECKING:
    from marker_navigation.navigation.destination_catalog import DestinationCatalog
    from marker_navigation.transforms import FrameGraph


@dataclass(frozen=True)
class Goal:
    """A navigation goal (x, y) expressed in the motion controller's working frame."""

    x: float
    y: float
    ref_frame: str


class GoalResolver:
    """Resolves marker IDs into goals by publishing their destinations into a frame graph."""

    DESTINATION_FRAME = "final_destination"

    def __init__(
        self,
        catalog: DestinationCatalog,
        frame_graph: FrameGraph,
        destination_frame: str = DESTINATION_FRAME,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the resolver with its catalog and frame graph.

        :param catalog: Catalog of configured destinations for each known marker
        :param frame_graph: Frame graph into which destinations are published
        :param destination_frame: Name of the frame published for a resolved destination
        :param timeout_s: Duration (seconds) to wait for the published frame (if None, use the
            frame graph's default)
        """
        self.catalog = catalog
        self.frame_graph = frame_graph
        self.destination_frame = destination_frame
        self.timeout_s = timeout_s

    def resolve(self, marker_id: int, working_frame: str, at_time: float | None = None) -> Goal:
        """Resolve the destination of the given marker into a goal in the working frame.

        :param marker_id: ID of the detected marker
        :param working_frame: Frame in which the motion controller expects goal coordinates
        :param at_time: Time (seconds) at which to relate the frames (if None, use the latest data)
        :return: Goal located at the marker's destination, expressed in the working frame
        :raises UnknownMarkerId: If the marker has no configured destination
        :raises FrameUnavailable: If the published destination cannot be found in time
        """
        entry = self.catalog.lookup(marker_id)

        self.frame_graph.publish_static(
            child_frame=self.destination_frame,
            parent_frame=entry.reference_frame,
            x=entry.x,
            y=entry.y,
        )

        x, y = self.frame_graph.query(
            target_frame=working_frame,
            source_frame=self.destination_frame,
            at_time=at_time,
            timeout_s=self.timeout_s,
        )

        log_info(
            f"[GoalResolver.resolve] Marker {marker_id}: ({entry.x}, {entry.y}) in "
            f"'{entry.reference_frame}' is ({x:.3f}, {y:.3f}) in '{working_frame}'.",
        )
        return Goal(x=x, y=y, ref_frame=working_frame)
