"""Define an in-process frame graph whose static frames become visible after a delay."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from marker_navigation.io.logging import log_info
from marker_navigation.kinematics import FrameTree, Pose3D
from marker_navigation.transforms.frame_graph import FrameGraph, FrameUnavailable


@dataclass(frozen=True)
class PendingFrame:
    """A published static frame waiting to become visible in the frame graph."""

    name: str
    pose: Pose3D
    visible_at_s: float


class LocalFrameGraph(FrameGraph):
    """A frame graph stored in memory, used where no transform server is available."""

    def __init__(
        self,
        propagation_delay_s: float = 0.0,
        timeout_s: float = FrameGraph.DEFAULT_TIMEOUT_S,
        poll_hz: float = FrameGraph.POLL_HZ,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize an empty frame graph.

        :param propagation_delay_s: Duration (seconds) before a published frame can be looked up
        :param timeout_s: Default duration (seconds) after which a query is abandoned
        :param poll_hz: Frequency (Hz) at which lookups are retried
        :param clock: Function returning the current time (seconds)
        :param sleep: Function that blocks for the given duration (seconds)
        """
        super().__init__(timeout_s=timeout_s, poll_hz=poll_hz, clock=clock, sleep=sleep)
        self.propagation_delay_s = propagation_delay_s
        self.tree = FrameTree()
        self._pending: dict[str, PendingFrame] = {}

    @classmethod
    def from_frame_tree(cls, tree: FrameTree, **kwargs) -> LocalFrameGraph:
        """Construct a LocalFrameGraph whose fixed frames are copied from the given tree."""
        graph = cls(**kwargs)
        for frame_name, pose in tree.frames.items():
            graph.add_fixed_frame(frame_name, pose)
        return graph

    def add_fixed_frame(self, frame_name: str, pose: Pose3D) -> None:
        """Add a frame that is visible immediately (e.g., a relation known before startup)."""
        self.tree.set_frame(frame_name, pose)

    def publish_static(self, child_frame: str, parent_frame: str, x: float, y: float) -> None:
        """Publish a fixed relation placing the child frame at (x, y) in the parent frame."""
        if self.tree.is_ancestor(child_frame, parent_frame):
            raise ValueError(f"Cannot publish frame '{child_frame}' as a descendant of itself.")

        if self.tree.has_frame(child_frame) or child_frame in self._pending:
            log_info(f"[LocalFrameGraph.publish_static] Overwriting static frame '{child_frame}'.")

        pose = Pose3D.from_xyz_rpy(x=x, y=y, ref_frame=parent_frame)
        visible_at_s = self._clock() + self.propagation_delay_s
        self._pending[child_frame] = PendingFrame(child_frame, pose, visible_at_s)
        self._propagate()

    def _propagate(self) -> None:
        """Move any published frames whose propagation delay has elapsed into the tree."""
        now_s = self._clock()
        for pending in list(self._pending.values()):
            if pending.visible_at_s <= now_s:
                del self._pending[pending.name]
                self.tree.set_frame(pending.name, pending.pose)

    def _lookup(
        self,
        target_frame: str,
        source_frame: str,
        at_time: float | None,
    ) -> Pose3D:
        """Find the pose of the source frame in the target frame, if known.

        Only static relations are stored, so every stored relation is valid at any `at_time`.
        """
        self._propagate()

        try:
            pose_t_s = self.tree.relative_pose(child_frame=source_frame, parent_frame=target_frame)
        except KeyError as key_error:
            raise FrameUnavailable(str(key_error)) from key_error

        return pose_t_s
