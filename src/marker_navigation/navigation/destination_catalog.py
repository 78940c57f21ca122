"""Define a catalog mapping marker IDs to configured destinations."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from marker_navigation.io.pydantic_schemata import TargetReacherConfig


class UnknownMarkerId(KeyError):
    """An error raised when a marker ID has no configured destination."""

    def __init__(self, marker_id: int, known_ids: tuple[int, ...]) -> None:
        """Initialize the error with the unknown marker ID and the IDs that are known."""
        self.marker_id = marker_id
        self.known_ids = known_ids
        super().__init__(
            f"No destination configured for marker ID {marker_id} (known IDs: {known_ids})",
        )

    def __str__(self) -> str:
        """Return the error message without the quoting added by KeyError."""
        return str(self.args[0])


@dataclass(frozen=True)
class DestinationEntry:
    """A destination (x, y) expressed in a named reference frame."""

    reference_frame: str
    x: float
    y: float


class DestinationCatalog:
    """A read-only mapping from marker IDs to their destinations."""

    def __init__(
        self,
        entries: Mapping[int, DestinationEntry],
        initial_goal: tuple[float, float],
        frame_id: str,
    ) -> None:
        """Initialize the catalog from its destination entries.

        :param entries: Map from each known marker ID to its destination
        :param initial_goal: Goal (x, y) used to seed the motion controller before any detection
        :param frame_id: Name of the reference frame shared by the configured destinations
        """
        self._entries = MappingProxyType(dict(entries))
        self.initial_goal = initial_goal
        self.frame_id = frame_id

    @classmethod
    def from_config(cls, config: TargetReacherConfig) -> DestinationCatalog:
        """Construct a DestinationCatalog from validated target reacher parameters."""
        frame_id = config.final_destination.frame_id
        entries = {
            marker_id: DestinationEntry(reference_frame=frame_id, x=point.x, y=point.y)
            for marker_id, point in config.final_destination.destinations.items()
        }
        initial_goal = (config.aruco_target.x, config.aruco_target.y)

        return DestinationCatalog(entries, initial_goal, frame_id)

    @property
    def marker_ids(self) -> tuple[int, ...]:
        """Retrieve the sorted IDs of all markers with a configured destination."""
        return tuple(sorted(self._entries))

    def __len__(self) -> int:
        """Return the number of configured destinations."""
        return len(self._entries)

    def __contains__(self, marker_id: object) -> bool:
        """Evaluate whether the given marker ID has a configured destination."""
        return marker_id in self._entries

    def lookup(self, marker_id: int) -> DestinationEntry:
        """Retrieve the destination configured for the given marker ID.

        :raises UnknownMarkerId: If no destination is configured for the marker ID
        """
        entry = self._entries.get(marker_id)
        if entry is None:
            raise UnknownMarkerId(marker_id, self.marker_ids)

        return entry
