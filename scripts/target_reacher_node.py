"""Launch a ROS node that searches for a marker and drives the robot to its destination."""

import rospy

from marker_navigation.ros import TargetReacherNode, get_ros_param, load_config_from_ros


def main() -> None:
    """Load parameters, send the initial search goal, and react to detections until shutdown."""
    rospy.init_node("target_reacher")

    config = load_config_from_ros("~")  # Fails before any goal is sent if parameters are missing

    _ = TargetReacherNode(
        config,
        goal_topic=get_ros_param("~goal_topic", str, "/robot1/goal"),
        cmd_vel_topic=get_ros_param("~cmd_vel_topic", str, "/robot1/cmd_vel"),
        goal_reached_topic=get_ros_param("~goal_reached_topic", str, "/goal_reached"),
        markers_topic=get_ros_param("~markers_topic", str, "/aruco_markers"),
    )
    rospy.spin()


if __name__ == "__main__":
    main()
