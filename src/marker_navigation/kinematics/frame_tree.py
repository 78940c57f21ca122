"""Represent a collection of named coordinate frames as a forest of kinematic trees."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from marker_navigation.io.yaml_utils import load_yaml_data
from marker_navigation.kinematics.poses import DEFAULT_FRAME, Pose3D

if TYPE_CHECKING:
    from pathlib import Path

    from numpy.typing import NDArray


def invert_rigid_transform(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Invert a 4x4 rigid-body transformation matrix using its rotation's transpose."""
    rotation_t = matrix[:3, :3].T
    inverse = np.eye(4)
    inverse[:3, :3] = rotation_t
    inverse[:3, 3] = -rotation_t @ matrix[:3, 3]
    return inverse


class FrameTree:
    """A forest of coordinate frames specifying relative poses between named frames."""

    def __init__(self) -> None:
        """Initialize an empty collection of frames."""
        self.frames: dict[str, Pose3D] = {}
        """Maps the name of each child frame to its pose relative to its parent frame."""

        self.children: dict[str, set[str]] = {}
        """Maps the name of each frame to its set of child frames."""

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> FrameTree:
        """Construct a FrameTree instance using named frames from the given YAML file.

        Each entry under `frames` maps a frame name to its pose, given either as a list
            of [x, y, z, roll, pitch, yaw] (relative to `default_frame`) or as a dictionary
            with keys `xyz_rpy` and `frame`.

        :param yaml_path: YAML file containing the named frames
        :return: Constructed FrameTree instance
        """
        yaml_data: dict[str, Any] = load_yaml_data(yaml_path, required_keys={"frames"})
        default_frame = yaml_data.get("default_frame", DEFAULT_FRAME)

        tree = FrameTree()
        for frame_name, pose_data in (yaml_data["frames"] or {}).items():
            tree.set_frame(frame_name, Pose3D.from_yaml_data(pose_data, default_frame))

        return tree

    def has_frame(self, frame_name: str) -> bool:
        """Evaluate whether the named frame exists (as a child or parent) within the forest."""
        return frame_name in self.frames or frame_name in self.children

    def get_parent_frame(self, child_frame: str) -> str | None:
        """Retrieve the parent frame of the given child frame.

        :param child_frame: Frame whose parent frame is retrieved
        :return: Name of the reference frame of the child frame (None if parent frame is unknown)
        """
        child_pose = self.frames.get(child_frame)
        return None if child_pose is None else child_pose.ref_frame

    def is_ancestor(self, ancestor: str, frame_name: str) -> bool:
        """Evaluate whether `ancestor` is the given frame or lies on its path to its root."""
        curr_frame: str | None = frame_name
        while curr_frame is not None:
            if curr_frame == ancestor:
                return True
            curr_frame = self.get_parent_frame(curr_frame)
        return False

    def set_frame(self, frame_name: str, pose: Pose3D) -> None:
        """Add or update the named frame with the given pose relative to its parent.

        An existing frame is overwritten, including its parent frame.

        :param frame_name: Name of the reference frame added or updated
        :param pose: New relative pose of the frame (its `ref_frame` names the parent frame)
        :raises ValueError: If the new relation would create a cycle of frames
        """
        if self.is_ancestor(frame_name, pose.ref_frame):
            raise ValueError(
                f"Cannot set frame '{frame_name}' relative to '{pose.ref_frame}' "
                "because the result would contain a cycle.",
            )

        prev_parent_frame = self.get_parent_frame(frame_name)
        if prev_parent_frame is not None:  # Remove the frame from its previous parent's children
            self.children[prev_parent_frame].discard(frame_name)

        self.frames[frame_name] = pose

        # Ensure that this frame and its parent frame have children sets initialized
        self.children[frame_name] = self.children.get(frame_name, set())
        self.children[pose.ref_frame] = self.children.get(pose.ref_frame, set())
        self.children[pose.ref_frame].add(frame_name)

    def _matrix_wrt_root(self, frame_name: str) -> tuple[str, NDArray[np.float64]]:
        """Find the root of the named frame and the frame's transform relative to that root.

        :param frame_name: Name of a frame in the forest
        :return: Pair of the root frame's name and the 4x4 transform of the frame w.r.t. the root
        :raises KeyError: If the frame is unknown
        """
        if not self.has_frame(frame_name):
            raise KeyError(f"Unknown frame: '{frame_name}'.")

        matrix = np.eye(4)
        curr_frame = frame_name
        while curr_frame in self.frames:
            pose_p_c = self.frames[curr_frame]
            matrix = pose_p_c.to_homogeneous_matrix() @ matrix
            curr_frame = pose_p_c.ref_frame

        return curr_frame, matrix

    def relative_pose(self, child_frame: str, parent_frame: str) -> Pose3D:
        """Compute the pose of the child frame relative to the parent frame.

        Frame notation: Child frame (c), parent frame (p), and their shared root frame (r).

        :param child_frame: Frame whose relative pose we want to find
        :param parent_frame: Frame relative to which the pose is found
        :return: Pose3D of the child frame w.r.t. the parent frame (i.e., pose_p_c)
        :raises KeyError: If either frame is unknown or the frames have no connecting path
        """
        child_root, matrix_r_c = self._matrix_wrt_root(child_frame)
        parent_root, matrix_r_p = self._matrix_wrt_root(parent_frame)

        if child_root != parent_root:
            raise KeyError(
                f"Frames '{child_frame}' and '{parent_frame}' are not connected "
                f"(roots '{child_root}' and '{parent_root}').",
            )

        matrix_p_c = invert_rigid_transform(matrix_r_p) @ matrix_r_c
        return Pose3D.from_homogeneous_matrix(matrix_p_c, ref_frame=parent_frame)
