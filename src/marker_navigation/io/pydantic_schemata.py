"""Define Pydantic models for validating target reacher parameters."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict, Mapping, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from marker_navigation.io.yaml_utils import load_yaml_data

if TYPE_CHECKING:
    from pathlib import Path

MARKER_KEY_PATTERN = re.compile(r"^aruco_(\d+)$")
"""Parameter keys naming the destination of a marker, e.g. `aruco_2`."""

DEFAULT_MARKER_IDS = (0, 1, 2, 3)
"""Marker IDs whose destinations must be configured unless overridden."""


class ConfigurationError(ValueError):
    """An error raised when the given parameters cannot be used to configure the system."""


class ConfigurationMissing(ConfigurationError):
    """An error raised when required parameters are absent."""

    def __init__(self, keys: Sequence[str]) -> None:
        """Initialize the error with the dotted names of the missing parameters."""
        self.keys = list(keys)
        super().__init__(f"Missing required parameters: {', '.join(self.keys)}")


# =============================================================================
# Parameter Schemata
# =============================================================================


class PointXYSchema(BaseModel):
    """Schema for an (x, y) coordinate pair."""

    x: float
    y: float

    model_config = ConfigDict(extra="forbid")


class FinalDestinationSchema(BaseModel):
    """Schema for the per-marker final destinations and their shared reference frame."""

    frame_id: str
    destinations: Dict[int, PointXYSchema] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def collect_marker_destinations(cls, data: Any) -> Any:
        """Gather `aruco_<id>` entries into the `destinations` mapping keyed by marker ID."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        destinations = dict(data.pop("destinations", None) or {})
        for key in list(data):
            match = MARKER_KEY_PATTERN.match(str(key))
            if match is not None:
                destinations[int(match.group(1))] = data.pop(key)

        data["destinations"] = destinations
        return data


class TargetReacherConfig(BaseModel):
    """Schema for all parameters used to search for a marker and reach its destination."""

    aruco_target: PointXYSchema
    """Initial goal (x, y) sent to the motion controller while searching for a marker."""

    final_destination: FinalDestinationSchema

    working_frame: str = "odom"
    """Frame in which the motion controller expects goal coordinates."""

    destination_frame: str = "final_destination"
    """Name of the frame published for a resolved destination."""

    rotation_speed_rad_s: float = 0.2
    frame_lookup_timeout_s: float = Field(default=5.0, gt=0)
    marker_ids: Tuple[int, ...] = DEFAULT_MARKER_IDS
    repeat_resolution: bool = False
    """Whether marker detections after the first successful resolution resolve a new goal."""

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_destination_frame(self) -> TargetReacherConfig:
        """Ensure that the published destination frame is distinct from the frames it relates."""
        if self.destination_frame == self.final_destination.frame_id:
            raise ValueError(
                f"destination_frame '{self.destination_frame}' cannot also be the "
                "final_destination.frame_id it is published in.",
            )
        if self.destination_frame == self.working_frame:
            raise ValueError(
                f"destination_frame '{self.destination_frame}' cannot also be the working_frame.",
            )
        return self

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> TargetReacherConfig:
        """Construct a validated configuration from a (possibly nested) parameter mapping.

        :param params: Parameters, e.g. loaded from YAML or a ROS parameter namespace
        :return: Validated configuration
        :raises ConfigurationMissing: If any required parameter is absent
        :raises ConfigurationError: If any parameter has an invalid value
        """
        params = unwrap_node_params(params)

        try:
            config = cls.model_validate(params)
        except ValidationError as error:
            missing = [_dotted_key(e["loc"]) for e in error.errors() if e["type"] == "missing"]
            if missing:
                raise ConfigurationMissing(missing) from error
            raise ConfigurationError(f"Invalid target reacher parameters: {error}") from error

        missing_keys = config.missing_destination_keys()
        if missing_keys:
            raise ConfigurationMissing(missing_keys)

        return config

    def missing_destination_keys(self) -> list[str]:
        """List the dotted names of destination parameters required but not configured."""
        missing: list[str] = []
        for marker_id in self.marker_ids:
            if marker_id not in self.final_destination.destinations:
                missing.append(f"final_destination.aruco_{marker_id}.x")
                missing.append(f"final_destination.aruco_{marker_id}.y")
        return missing


def unwrap_node_params(params: Mapping[str, Any]) -> Mapping[str, Any]:
    """Strip a `<node_name>: {ros__parameters: {...}}` wrapper from a parameter mapping."""
    if len(params) == 1:
        (node_params,) = params.values()
        if isinstance(node_params, dict) and "ros__parameters" in node_params:
            return node_params["ros__parameters"] or {}

    return params


def _dotted_key(loc: Tuple[Union[int, str], ...]) -> str:
    """Convert a Pydantic error location into the dotted name of the parameter."""
    parts = [str(p) for p in loc]
    if len(parts) >= 3 and parts[:2] == ["final_destination", "destinations"]:
        parts = ["final_destination", f"aruco_{parts[2]}", *parts[3:]]
    return ".".join(parts)


def load_config(yaml_path: Path) -> TargetReacherConfig:
    """Load and validate target reacher parameters from the given YAML file."""
    yaml_data = load_yaml_data(yaml_path)
    if not isinstance(yaml_data, dict):
        raise ConfigurationError(f"Expected a mapping of parameters in YAML file: {yaml_path}")

    return TargetReacherConfig.from_params(yaml_data)
