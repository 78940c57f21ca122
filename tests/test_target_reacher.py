"""Unit tests for the TargetReacher class, which dispatches navigation events."""

from pathlib import Path

import pytest

from marker_navigation.io.pydantic_schemata import load_config
from marker_navigation.kinematics import FrameTree
from marker_navigation.navigation import (
    Goal,
    GoalReached,
    MarkerObserved,
    SearchState,
    TargetReacher,
)
from marker_navigation.robots import VelocityCommand
from marker_navigation.transforms import LocalFrameGraph

from .doubles import FakeClock, RecordingFrameGraph, RecordingMotionController

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def controller() -> RecordingMotionController:
    """Provide a motion controller that records the goals and commands it receives."""
    return RecordingMotionController()


@pytest.fixture
def map_reacher(controller: RecordingMotionController) -> TargetReacher:
    """Provide a started target reacher whose destinations and working frame are both 'map'."""
    config = load_config(TEST_DATA / "map_frame_params.yaml")
    reacher = TargetReacher.from_config(config, LocalFrameGraph(timeout_s=0.0), controller)
    reacher.start()
    return reacher


@pytest.fixture
def odom_reacher(controller: RecordingMotionController) -> TargetReacher:
    """Provide a started target reacher resolving destinations in 'origin1' into 'odom'."""
    config = load_config(TEST_DATA / "target_reacher_params.yaml")
    tree = FrameTree.from_yaml(TEST_DATA / "fixed_frames.yaml")
    clock = FakeClock()
    graph = LocalFrameGraph.from_frame_tree(tree, clock=clock, sleep=clock.sleep)
    reacher = TargetReacher.from_config(config, graph, controller)
    reacher.start()
    return reacher


def test_start_sets_initial_search_goal(
    odom_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that starting the target reacher sends the configured search goal."""
    assert controller.goals == [(4.0, 0.5)]
    assert odom_reacher.search.state is SearchState.SEARCHING
    assert odom_reacher.final_goal is None


def test_goal_reached_rotates_until_marker_detected(
    map_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that each reached goal rotates the robot until a marker has been detected."""
    # Act - Reach the search goal twice, detect a marker, then reach goals twice more
    first_outcome = map_reacher.handle(GoalReached())
    map_reacher.handle(GoalReached())
    map_reacher.handle(MarkerObserved(marker_ids=(1,)))
    outcome = map_reacher.handle(GoalReached())
    map_reacher.handle(GoalReached())

    # Assert - Expect exactly two rotation commands, both from before the detection
    assert len(controller.rotation_commands) == 2
    assert all(c.linear_x == 0.0 for c in controller.rotation_commands)
    assert first_outcome.command == VelocityCommand.rotation(0.2)
    assert outcome.success
    assert outcome.command is None
    assert "withheld" in outcome.message


def test_goal_not_reached_is_ignored(
    map_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that a negative goal-reached notification sends no command."""
    map_reacher.handle(GoalReached(reached=False))

    assert not controller.commands


def test_marker_resolves_final_goal_in_map_frame(
    map_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that a detected marker sends its destination unchanged when all frames are 'map'."""
    outcome = map_reacher.handle(MarkerObserved(marker_ids=(1, 3)))

    assert outcome.success
    assert outcome.goal == Goal(x=2.0, y=3.0, ref_frame="map")
    assert controller.goals == [(0.0, 0.0), (2.0, 3.0)]
    assert map_reacher.search.state is SearchState.MARKER_DETECTED


def test_marker_resolves_final_goal_in_odom_frame(
    odom_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that a destination in a rotated reference frame is converted into 'odom'."""
    outcome = odom_reacher.handle(MarkerObserved(marker_ids=(1,)))
    goal = outcome.goal

    # (2, 3) in 'origin1' lies at (0, 4) in 'map', i.e., at (-1, 4) in 'odom'
    assert outcome.success, outcome.message
    assert goal is not None
    assert goal.ref_frame == "odom"
    assert goal.x == pytest.approx(-1.0)
    assert goal.y == pytest.approx(4.0)
    assert controller.goals[-1] == pytest.approx((-1.0, 4.0))


def test_later_markers_are_ignored_after_resolution(
    map_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that marker batches after a successful resolution do not change the goal."""
    map_reacher.handle(MarkerObserved(marker_ids=(1,)))
    outcome = map_reacher.handle(MarkerObserved(marker_ids=(2,)))

    assert outcome.success
    assert outcome.goal == Goal(x=2.0, y=3.0, ref_frame="map")
    assert controller.goals == [(0.0, 0.0), (2.0, 3.0)]


def test_repeat_resolution_policy(
    map_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that later marker batches are resolved again when repeat resolution is enabled."""
    map_reacher.repeat_resolution = True

    map_reacher.handle(MarkerObserved(marker_ids=(1,)))
    map_reacher.handle(MarkerObserved(marker_ids=(2,)))

    assert controller.goals == [(0.0, 0.0), (2.0, 3.0), (-2.0, 1.0)]


def test_unknown_marker_sets_no_goal(
    map_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that an unknown marker is dropped without setting a goal or publishing a frame."""
    outcome = map_reacher.handle(MarkerObserved(marker_ids=(42,)))

    assert not outcome.success
    assert "42" in outcome.message
    assert controller.goals == [(0.0, 0.0)]
    assert not map_reacher.resolver.frame_graph.tree.has_frame("final_destination")

    # The detection still stops the search, and a later known marker is resolved
    assert map_reacher.search.state is SearchState.MARKER_DETECTED
    assert map_reacher.handle(MarkerObserved(marker_ids=(0,))).success
    assert controller.goals == [(0.0, 0.0), (0.0, 0.0)]


def test_unavailable_frame_keeps_prior_goal(controller: RecordingMotionController) -> None:
    """Verify that a failed frame lookup leaves the initial goal active."""
    config = load_config(TEST_DATA / "target_reacher_params.yaml")
    clock = FakeClock()
    graph = LocalFrameGraph(clock=clock, sleep=clock.sleep)  # No path from 'origin1' to 'odom'
    reacher = TargetReacher.from_config(config, graph, controller)
    reacher.start()

    outcome = reacher.handle(MarkerObserved(marker_ids=(0,)))

    assert not outcome.success
    assert controller.goals == [(4.0, 0.5)]
    assert reacher.final_goal is None
    assert clock() >= config.frame_lookup_timeout_s


def test_empty_marker_batch_is_ignored(
    map_reacher: TargetReacher,
    controller: RecordingMotionController,
) -> None:
    """Verify that an empty batch of markers neither latches the search nor sets a goal."""
    outcome = map_reacher.handle(MarkerObserved(marker_ids=()))

    assert outcome.success
    assert map_reacher.search.state is SearchState.SEARCHING
    assert controller.goals == [(0.0, 0.0)]


def test_unexpected_event_raises(map_reacher: TargetReacher) -> None:
    """Verify that an unrecognized event type is rejected."""
    with pytest.raises(TypeError):
        map_reacher.handle("goal_reached")  # type: ignore[arg-type]


def test_marker_stamp_is_used_for_frame_lookup(controller: RecordingMotionController) -> None:
    """Verify that a marker's detection time is used when relating its destination to 'map'."""
    # Arrange
    config = load_config(TEST_DATA / "map_frame_params.yaml")
    graph = RecordingFrameGraph(timeout_s=0.0)
    reacher = TargetReacher.from_config(config, graph, controller)

    # Act
    outcome = reacher.handle(MarkerObserved(marker_ids=(1,), stamp=12.5))

    # Assert - Expect a single lookup made at the time of the detection
    assert outcome.success, outcome.message
    assert graph.lookup_times == [12.5]
