"""Define a ROS node that searches for a marker and sends the robot to its destination."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import rospy
from ar_track_alvar_msgs.msg import AlvarMarkers
from geometry_msgs.msg import PoseStamped, Twist
from std_msgs.msg import Bool

from marker_navigation.navigation import GoalReached, TargetReacher
from marker_navigation.robots import MotionController, VelocityCommand
from marker_navigation.ros.msg_conversion import (
    goal_to_pose_stamped_msg,
    marker_observed_from_msg,
    velocity_command_to_twist_msg,
)
from marker_navigation.ros.transform_manager import TfFrameGraph

if TYPE_CHECKING:
    from marker_navigation.io.pydantic_schemata import TargetReacherConfig
    from marker_navigation.navigation import NavigationEvent


class RosMotionController(MotionController):
    """Forwards goals and velocity commands to a robot's controller over ROS topics."""

    def __init__(self, goal_topic: str, cmd_vel_topic: str, working_frame: str) -> None:
        """Initialize publishers for goals and velocity commands.

        :param goal_topic: Topic on which goals are published as geometry_msgs/PoseStamped
        :param cmd_vel_topic: Topic on which velocity commands are published as geometry_msgs/Twist
        :param working_frame: Frame in which the controller expects goal coordinates
        """
        self.working_frame = working_frame
        self.goal_pub = rospy.Publisher(goal_topic, PoseStamped, queue_size=10, latch=True)
        self.cmd_vel_pub = rospy.Publisher(cmd_vel_topic, Twist, queue_size=10)

    def set_goal(self, x: float, y: float) -> None:
        """Replace the controller's current target with (x, y) in its working frame."""
        msg = goal_to_pose_stamped_msg(x, y, self.working_frame)
        msg.header.stamp = rospy.Time.now()
        self.goal_pub.publish(msg)

    def command_velocity(self, command: VelocityCommand) -> None:
        """Publish a direct velocity command to the mobile base."""
        self.cmd_vel_pub.publish(velocity_command_to_twist_msg(command))


class TargetReacherNode:
    """Connects a TargetReacher to its ROS topics and the TF2 frame graph."""

    def __init__(
        self,
        config: TargetReacherConfig,
        goal_topic: str = "/robot1/goal",
        cmd_vel_topic: str = "/robot1/cmd_vel",
        goal_reached_topic: str = "/goal_reached",
        markers_topic: str = "/aruco_markers",
    ) -> None:
        """Initialize the node's collaborators, then send the initial search goal.

        :param config: Validated target reacher parameters
        :param goal_topic: Topic on which goals are sent to the motion controller
        :param cmd_vel_topic: Topic on which rotation commands are sent
        :param goal_reached_topic: Topic on which the motion controller reports reached goals
        :param markers_topic: Topic on which the marker detector reports detections
        """
        self.frame_graph = TfFrameGraph(timeout_s=config.frame_lookup_timeout_s)
        self.controller = RosMotionController(goal_topic, cmd_vel_topic, config.working_frame)
        self.target_reacher = TargetReacher.from_config(config, self.frame_graph, self.controller)

        # rospy runs each subscriber's callbacks on its own thread; handle one event at a time
        self._dispatch_lock = threading.Lock()

        self.target_reacher.start()

        self.goal_reached_sub = rospy.Subscriber(
            goal_reached_topic,
            Bool,
            callback=self.goal_reached_callback,
            queue_size=10,
        )
        self.markers_sub = rospy.Subscriber(
            markers_topic,
            AlvarMarkers,
            callback=self.markers_callback,
            queue_size=10,
        )

    def dispatch(self, event: NavigationEvent) -> None:
        """Process the given event and log its outcome."""
        with self._dispatch_lock:
            outcome = self.target_reacher.handle(event)

        if outcome.success:
            rospy.logdebug(f"[TargetReacherNode.dispatch] {outcome.message}")
        else:
            rospy.logwarn(f"[TargetReacherNode.dispatch] {outcome.message}")

    def goal_reached_callback(self, goal_reached_msg: Bool) -> None:
        """Forward a goal-reached notification to the target reacher."""
        self.dispatch(GoalReached(reached=bool(goal_reached_msg.data)))

    def markers_callback(self, markers_msg: AlvarMarkers) -> None:
        """Forward a batch of marker detections to the target reacher."""
        self.dispatch(marker_observed_from_msg(markers_msg))
