"""Define functions to convert between navigation data structures and ROS messages."""

from __future__ import annotations

from ar_track_alvar_msgs.msg import AlvarMarkers
from geometry_msgs.msg import Point, PoseStamped, Transform, TransformStamped, Twist, Vector3
from geometry_msgs.msg import Quaternion as QuaternionMsg

from marker_navigation.kinematics import Point3D, Pose3D, Quaternion
from marker_navigation.navigation import MarkerObserved
from marker_navigation.robots import VelocityCommand


def point_to_vector3_msg(point: Point3D) -> Vector3:
    """Convert the given point into a geometry_msgs/Vector3 message."""
    return Vector3(point.x, point.y, point.z)


def point_from_vector3_msg(vector_msg: Vector3) -> Point3D:
    """Construct a Point3D from a geometry_msgs/Vector3 message."""
    return Point3D(vector_msg.x, vector_msg.y, vector_msg.z)


def quaternion_to_msg(q: Quaternion) -> QuaternionMsg:
    """Convert the given quaternion into a geometry_msgs/Quaternion message."""
    return QuaternionMsg(q.x, q.y, q.z, q.w)


def quaternion_from_msg(q_msg: QuaternionMsg) -> Quaternion:
    """Construct a Quaternion from a geometry_msgs/Quaternion message."""
    return Quaternion(q_msg.x, q_msg.y, q_msg.z, q_msg.w)


def pose_to_tf_stamped_msg(pose: Pose3D, child_frame: str) -> TransformStamped:
    """Convert the given pose into a geometry_msgs/TransformStamped message."""
    tf_stamped_msg = TransformStamped()
    tf_stamped_msg.header.frame_id = pose.ref_frame
    tf_stamped_msg.child_frame_id = child_frame
    tf_stamped_msg.transform = Transform(
        point_to_vector3_msg(pose.position),
        quaternion_to_msg(pose.orientation),
    )
    return tf_stamped_msg


def pose_from_tf_stamped_msg(tf_stamped_msg: TransformStamped) -> Pose3D:
    """Construct a Pose3D from a geometry_msgs/TransformStamped message."""
    position = point_from_vector3_msg(tf_stamped_msg.transform.translation)
    orientation = quaternion_from_msg(tf_stamped_msg.transform.rotation)
    return Pose3D(position, orientation, tf_stamped_msg.header.frame_id)


def velocity_command_to_twist_msg(command: VelocityCommand) -> Twist:
    """Convert the given velocity command into a geometry_msgs/Twist message."""
    msg = Twist()
    msg.linear.x = command.linear_x
    msg.angular.z = command.angular_z
    return msg


def goal_to_pose_stamped_msg(x: float, y: float, frame_id: str) -> PoseStamped:
    """Construct a geometry_msgs/PoseStamped message placing a goal at (x, y) in the frame."""
    msg = PoseStamped()
    msg.header.frame_id = frame_id
    msg.pose.position = Point(x, y, 0.0)
    msg.pose.orientation = QuaternionMsg(0.0, 0.0, 0.0, 1.0)
    return msg


def marker_observed_from_msg(markers_msg: AlvarMarkers) -> MarkerObserved:
    """Construct a MarkerObserved event from an ar_track_alvar_msgs/AlvarMarkers message."""
    markers = markers_msg.markers or []
    return MarkerObserved(
        marker_ids=tuple(int(m.id) for m in markers),
        stamp=markers_msg.header.stamp.to_sec(),
    )
