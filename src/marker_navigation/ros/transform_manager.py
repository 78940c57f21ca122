"""Define a frame graph that publishes static frames to /tf_static and reads from /tf."""

from __future__ import annotations

import rospy
from tf2_ros import Buffer, StaticTransformBroadcaster, TransformException, TransformListener

from marker_navigation.io.logging import log_info
from marker_navigation.kinematics import Pose3D
from marker_navigation.ros.msg_conversion import pose_from_tf_stamped_msg, pose_to_tf_stamped_msg
from marker_navigation.transforms import FrameGraph, FrameUnavailable


class TfFrameGraph(FrameGraph):
    """A frame graph backed by the TF2 transform server."""

    def __init__(
        self,
        timeout_s: float = FrameGraph.DEFAULT_TIMEOUT_S,
        poll_hz: float = FrameGraph.POLL_HZ,
    ) -> None:
        """Initialize the TF2 buffer, listener, and static broadcaster (requires a ROS node).

        :param timeout_s: Default duration (seconds) after which a query is abandoned
        :param poll_hz: Frequency (Hz) at which lookups are retried
        """
        super().__init__(
            timeout_s=timeout_s,
            poll_hz=poll_hz,
            clock=rospy.get_time,
            sleep=rospy.sleep,
        )

        self.tf_buffer = Buffer()
        self.tf_listener = TransformListener(self.tf_buffer)
        self.static_broadcaster = StaticTransformBroadcaster()

        self.static_frames: dict[str, Pose3D] = {}
        """Static frames published by this process, keyed by child frame name."""

    def publish_static(self, child_frame: str, parent_frame: str, x: float, y: float) -> None:
        """Publish a fixed relation placing the child frame at (x, y) in the parent frame.

        /tf_static is latched per publisher, so every frame this process has published is sent
            together; re-publishing a child frame replaces its earlier relation.
        """
        if child_frame in self.static_frames:
            log_info(f"[TfFrameGraph.publish_static] Overwriting static frame '{child_frame}'.")

        self.static_frames[child_frame] = Pose3D.from_xyz_rpy(x=x, y=y, ref_frame=parent_frame)

        stamp = rospy.Time.now()
        tf_msgs = []
        for frame_name, pose in self.static_frames.items():
            tf_stamped_msg = pose_to_tf_stamped_msg(pose, frame_name)
            tf_stamped_msg.header.stamp = stamp
            tf_msgs.append(tf_stamped_msg)

        self.static_broadcaster.sendTransform(tf_msgs)

    def _lookup(
        self,
        target_frame: str,
        source_frame: str,
        at_time: float | None,
    ) -> Pose3D:
        """Make a single TF2 lookup of the source frame relative to the target frame."""
        when = rospy.Time(0) if at_time is None else rospy.Time.from_sec(at_time)

        try:
            tf_stamped_msg = self.tf_buffer.lookup_transform(
                target_frame=target_frame,
                source_frame=source_frame,
                time=when,
                timeout=rospy.Duration.from_sec(1.0 / self.poll_hz),
            )
        except TransformException as t_exc:
            raise FrameUnavailable(str(t_exc)) from t_exc

        return pose_from_tf_stamped_msg(tf_stamped_msg)
