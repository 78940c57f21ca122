"""Define utility functions to support loading from ROS parameters."""

from __future__ import annotations

from typing import TypeVar

import rospy

from marker_navigation.io.pydantic_schemata import TargetReacherConfig

ParamT = TypeVar("ParamT")

TOPIC_PARAM_NAMES = ("goal_topic", "cmd_vel_topic", "goal_reached_topic", "markers_topic")
"""Node parameters naming ROS topics, read separately from the target reacher parameters."""


def get_ros_param(name: str, param_t: type[ParamT], default_value: ParamT | None = None) -> ParamT:
    """Retrieve the parameter with the given name and type from the ROS parameter server.

    :param name: Name of the retrieved ROS parameter
    :param param_t: Type of the retrieved parameter
    :param default_value: Default value used if the ROS parameter doesn't exist (defaults to None)
    :return: Value retrieved from the ROS parameter server
    """
    if default_value is None:
        param_value = rospy.get_param(name)
    else:
        param_value = rospy.get_param(name, default=default_value)

    return param_t(param_value)


def load_config_from_ros(namespace: str = "~") -> TargetReacherConfig:
    """Load and validate the target reacher parameters stored under the given namespace.

    :param namespace: ROS parameter namespace holding the parameters (defaults to private "~")
    :return: Validated configuration
    :raises ConfigurationMissing: If any required parameter is absent
    """
    params = rospy.get_param(namespace, {})
    params = {name: value for name, value in params.items() if name not in TOPIC_PARAM_NAMES}
    return TargetReacherConfig.from_params(params)
