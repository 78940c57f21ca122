"""Unit tests for validating target reacher parameters."""

from pathlib import Path

import pytest

from marker_navigation.io.pydantic_schemata import (
    ConfigurationError,
    ConfigurationMissing,
    TargetReacherConfig,
    load_config,
)

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def params() -> dict:
    """Provide a complete set of nested target reacher parameters."""
    return {
        "aruco_target": {"x": 4.0, "y": 0.5},
        "final_destination": {
            "frame_id": "origin1",
            "aruco_0": {"x": 1.0, "y": 1.0},
            "aruco_1": {"x": 2.0, "y": 3.0},
            "aruco_2": {"x": -1.0, "y": -1.0},
            "aruco_3": {"x": 1.0, "y": -2.0},
        },
    }


def test_load_config_from_yaml() -> None:
    """Verify that parameters can be loaded from an example YAML file."""
    config = load_config(TEST_DATA / "target_reacher_params.yaml")

    assert config.aruco_target.x == pytest.approx(4.0)
    assert config.aruco_target.y == pytest.approx(0.5)
    assert config.final_destination.frame_id == "origin1"
    assert sorted(config.final_destination.destinations) == [0, 1, 2, 3]
    assert config.final_destination.destinations[1].x == pytest.approx(2.0)
    assert config.frame_lookup_timeout_s == pytest.approx(0.2)


def test_load_config_unwraps_node_parameters() -> None:
    """Verify that a `<node>: {ros__parameters: ...}` wrapper is removed before validation."""
    config = load_config(TEST_DATA / "map_frame_params.yaml")

    assert config.final_destination.frame_id == "map"
    assert config.working_frame == "map"


def test_config_defaults(params: dict) -> None:
    """Verify the defaults of optional parameters."""
    config = TargetReacherConfig.from_params(params)

    assert config.working_frame == "odom"
    assert config.destination_frame == "final_destination"
    assert config.rotation_speed_rad_s == pytest.approx(0.2)
    assert config.frame_lookup_timeout_s == pytest.approx(5.0)
    assert config.marker_ids == (0, 1, 2, 3)
    assert not config.repeat_resolution


def test_missing_marker_destination_is_reported(params: dict) -> None:
    """Verify that a required marker without a destination fails at load time."""
    del params["final_destination"]["aruco_2"]

    with pytest.raises(ConfigurationMissing) as exc_info:
        TargetReacherConfig.from_params(params)

    assert exc_info.value.keys == ["final_destination.aruco_2.x", "final_destination.aruco_2.y"]


def test_missing_coordinate_is_reported() -> None:
    """Verify that a destination missing one coordinate names the missing parameter."""
    with pytest.raises(ConfigurationMissing) as exc_info:
        load_config(TEST_DATA / "missing_marker_params.yaml")

    assert exc_info.value.keys == ["final_destination.aruco_1.y"]


def test_missing_top_level_parameters_are_reported(params: dict) -> None:
    """Verify that missing top-level parameters are named using dotted keys."""
    del params["aruco_target"]
    del params["final_destination"]["frame_id"]

    with pytest.raises(ConfigurationMissing) as exc_info:
        TargetReacherConfig.from_params(params)

    assert set(exc_info.value.keys) == {"aruco_target", "final_destination.frame_id"}


def test_custom_marker_ids(params: dict) -> None:
    """Verify that only the configured marker IDs are required."""
    params["marker_ids"] = [7]
    params["final_destination"]["aruco_7"] = {"x": 0.0, "y": 0.0}

    config = TargetReacherConfig.from_params(params)

    assert config.marker_ids == (7,)
    assert 7 in config.final_destination.destinations


def test_invalid_values_are_rejected(params: dict) -> None:
    """Verify that invalid (but present) parameter values raise a ConfigurationError."""
    params["frame_lookup_timeout_s"] = 0.0

    with pytest.raises(ConfigurationError) as exc_info:
        TargetReacherConfig.from_params(params)

    assert not isinstance(exc_info.value, ConfigurationMissing)


def test_destination_frame_cannot_be_its_own_parent(params: dict) -> None:
    """Verify that a destination frame published within itself is rejected at load time."""
    params["final_destination"]["frame_id"] = "final_destination"

    with pytest.raises(ConfigurationError, match="final_destination.frame_id"):
        TargetReacherConfig.from_params(params)


def test_destination_frame_cannot_be_the_working_frame(params: dict) -> None:
    """Verify that goals cannot be expressed in the frame published for the destination."""
    params["working_frame"] = "goal"
    params["destination_frame"] = "goal"

    with pytest.raises(ConfigurationError, match="working_frame"):
        TargetReacherConfig.from_params(params)


def test_misspelled_parameter_is_rejected(params: dict) -> None:
    """Verify that an unrecognized parameter fails instead of silently using a default."""
    params["frame_lookup_timout_s"] = 1.0

    with pytest.raises(ConfigurationError, match="frame_lookup_timout_s"):
        TargetReacherConfig.from_params(params)
