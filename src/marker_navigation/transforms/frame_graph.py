"""Define an interface to publish static frames into a frame graph and query relations."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from marker_navigation.io.logging import log_error, log_warning

if TYPE_CHECKING:
    from marker_navigation.kinematics import Pose3D


class FrameUnavailable(Exception):
    """An error raised when a relation between two frames cannot be found in the frame graph."""


class FrameGraph(ABC):
    """A graph of named coordinate frames related by rigid transforms.

    Lookups may fail until a published relation has propagated through the graph, so `query`
        retries its lookup until it succeeds or a bounded timeout elapses.
    """

    DEFAULT_TIMEOUT_S = 5.0
    POLL_HZ = 10.0  # Frequency (Hz) of lookup attempts while waiting for a relation

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        poll_hz: float = POLL_HZ,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the wait behavior shared by all frame graphs.

        :param timeout_s: Default duration (seconds) after which a query is abandoned
        :param poll_hz: Frequency (Hz) at which lookups are retried
        :param clock: Function returning the current time (seconds)
        :param sleep: Function that blocks for the given duration (seconds)
        """
        if timeout_s < 0:
            raise ValueError(f"Frame lookup timeout must be non-negative, got {timeout_s}")
        if poll_hz <= 0:
            raise ValueError(f"Frame lookup frequency must be positive, got {poll_hz}")

        self.timeout_s = timeout_s
        self.poll_hz = poll_hz
        self._clock = clock
        self._sleep = sleep

    @abstractmethod
    def publish_static(self, child_frame: str, parent_frame: str, x: float, y: float) -> None:
        """Publish a fixed relation placing the child frame at (x, y) in the parent frame.

        The relation has zero height and identity rotation, and it never expires.
            Publishing an existing child frame again overwrites its previous relation.

        :param child_frame: Name of the frame being published
        :param parent_frame: Name of the existing frame the child is anchored to
        :param x: Translation (m) of the child along the parent's x-axis
        :param y: Translation (m) of the child along the parent's y-axis
        """
        ...

    @abstractmethod
    def _lookup(
        self,
        target_frame: str,
        source_frame: str,
        at_time: float | None,
    ) -> Pose3D:
        """Make a single attempt to find the pose of the source frame in the target frame.

        :raises FrameUnavailable: If the relation is not (yet) known
        """
        ...

    def query(
        self,
        target_frame: str,
        source_frame: str,
        at_time: float | None = None,
        timeout_s: float | None = None,
    ) -> tuple[float, float]:
        """Find the translation carrying the source frame's origin into the target frame.

        :param target_frame: Frame in which the result is expressed
        :param source_frame: Frame whose origin is located
        :param at_time: Timestamp (seconds) of the relation (if None, use the latest data)
        :param timeout_s: Duration (seconds) to wait for the relation (if None, use the default)
        :return: (x, y) position of the source frame's origin w.r.t. the target frame
        :raises FrameUnavailable: If the relation cannot be found before the timeout elapses
            or is reported in a frame other than the target frame
        """
        if timeout_s is None:
            timeout_s = self.timeout_s

        deadline_s = self._clock() + timeout_s
        while True:
            try:
                pose_t_s = self._lookup(target_frame, source_frame, at_time)
            except FrameUnavailable as exc:
                if self._clock() >= deadline_s:
                    log_error(
                        f"[FrameGraph.query] Could not look up '{source_frame}' w.r.t. "
                        f"'{target_frame}' within {timeout_s} seconds: {exc}",
                    )
                    raise FrameUnavailable(
                        f"Lookup of '{source_frame}' w.r.t. '{target_frame}' timed out "
                        f"after {timeout_s} seconds: {exc}",
                    ) from exc

                log_warning(
                    f"[FrameGraph.query] Lookup of '{source_frame}' w.r.t. "
                    f"'{target_frame}' gave exception: {exc}",
                )
            else:
                if pose_t_s.ref_frame != target_frame:
                    raise FrameUnavailable(
                        f"Expected '{source_frame}' w.r.t. '{target_frame}' but found it "
                        f"w.r.t. '{pose_t_s.ref_frame}'.",
                    )
                return (pose_t_s.position.x, pose_t_s.position.y)

            self._sleep(1.0 / self.poll_hz)
