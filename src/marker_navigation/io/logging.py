"""Define utility functions to simplify logging to the CLI."""

from rich.console import Console

try:
    import rospy

    ROS_PRESENT = True
except ModuleNotFoundError:
    ROS_PRESENT = False

import logging

logger = logging.getLogger(__name__)
console = Console()


def log_info(message: str) -> None:
    """Log the given string to standard output."""
    if ROS_PRESENT:
        rospy.loginfo(message)
    else:
        logger.info(message)


def log_warning(message: str) -> None:
    """Log the given string as a warning."""
    if ROS_PRESENT:
        rospy.logwarn(message)
    else:
        logger.warning(message)


def log_error(message: str) -> None:
    """Log the given string as an error."""
    if ROS_PRESENT:
        rospy.logerr(message)
    else:
        logger.error(message)
