"""Unit tests for Pose3D, a class representing poses in 3D space."""

import math

import pytest
from hypothesis import given

from marker_navigation.kinematics import Pose3D

from .navigation_strategies import coordinates_m, yaw_angles_rad


@given(coordinates_m(), coordinates_m(), yaw_angles_rad())
def test_pose3d_inverse_multiplication(x: float, y: float, yaw_rad: float) -> None:
    """Verify that multiplying a planar Pose3D by its inverse gives the identity transform."""
    # Arrange - Given a planar pose of frame 'b' relative to frame 'a'
    pose_a_b = Pose3D.from_xyz_rpy(x=x, y=y, yaw_rad=yaw_rad, ref_frame="a")

    # Act - Find its inverse and the result of multiplying the two
    pose_b_a = pose_a_b.inverse("b")
    product = pose_b_a @ pose_a_b

    # Assert - Expect that the product is the identity w.r.t. frame 'b'
    assert Pose3D.identity("b").approx_equal(product, atol=1e-06)


def test_pose3d_multiplication_applies_rotation() -> None:
    """Verify that composing poses rotates the right-side translation by the left-side yaw."""
    # Arrange - Frame 'b' is at (3, 2) in 'a', rotated by 90 degrees; point 'c' is at (1, 0) in 'b'
    pose_a_b = Pose3D.from_xyz_rpy(x=3.0, y=2.0, yaw_rad=math.pi / 2, ref_frame="a")
    pose_b_c = Pose3D.from_xyz_rpy(x=1.0, ref_frame="b")

    # Act
    pose_a_c = pose_a_b @ pose_b_c

    # Assert - Expect that the result takes the left-side frame and lies at (3, 3)
    assert pose_a_c.ref_frame == "a"
    assert pose_a_c.position.x == pytest.approx(3.0)
    assert pose_a_c.position.y == pytest.approx(3.0)
    assert pose_a_c.orientation.approx_equal(pose_a_b.orientation)


def test_pose3d_from_yaml_data() -> None:
    """Verify that a Pose3D can be loaded from list-style and dictionary-style YAML data."""
    from_list = Pose3D.from_yaml_data([1.0, 2.0, 0.0, 0.0, 0.0, 0.0], default_frame="map")
    from_dict = Pose3D.from_yaml_data({"xyz_rpy": [1.0, 2.0, 0.0, 0.0, 0.0, 0.0], "frame": "odom"})

    assert from_list.approx_equal(Pose3D.from_xyz_rpy(x=1.0, y=2.0, ref_frame="map"))
    assert from_dict.approx_equal(Pose3D.from_xyz_rpy(x=1.0, y=2.0, ref_frame="odom"))

    with pytest.raises(TypeError):
        Pose3D.from_yaml_data("1 2 0 0 0 0")  # type: ignore[arg-type]
