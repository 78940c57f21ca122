"""Define the events that drive the target reacher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class MarkerObserved:
    """A batch of marker IDs reported by the marker detector."""

    marker_ids: Tuple[int, ...]
    stamp: float | None = None  # Time (seconds) of the detection, if known

    @property
    def first_marker_id(self) -> int | None:
        """Retrieve the first marker ID in the batch (None if the batch is empty)."""
        return self.marker_ids[0] if self.marker_ids else None


@dataclass(frozen=True)
class GoalReached:
    """A notification from the motion controller about its current goal."""

    reached: bool = True


NavigationEvent = Union[MarkerObserved, GoalReached]
