"""Define strategies for generating navigation data for property-based testing."""

import math

import hypothesis.strategies as st


@st.composite
def coordinates_m(draw: st.DrawFn) -> float:
    """Generate random planar coordinates (in meters)."""
    return draw(st.floats(min_value=-1e3, max_value=1e3, allow_infinity=False, allow_nan=False))


@st.composite
def yaw_angles_rad(draw: st.DrawFn) -> float:
    """Generate random yaw angles (in radians)."""
    return draw(st.floats(min_value=-math.pi, max_value=math.pi, allow_nan=False))


@st.composite
def marker_ids(draw: st.DrawFn) -> int:
    """Generate marker IDs from the default set of configured IDs."""
    return draw(st.sampled_from([0, 1, 2, 3]))


@st.composite
def unknown_marker_ids(draw: st.DrawFn) -> int:
    """Generate marker IDs outside the default set of configured IDs."""
    return draw(st.integers(min_value=-1000, max_value=1000).filter(lambda i: i not in range(4)))
