"""Import classes used to publish and query relations between named coordinate frames."""

from .frame_graph import FrameGraph as FrameGraph
from .frame_graph import FrameUnavailable as FrameUnavailable
from .local_frame_graph import LocalFrameGraph as LocalFrameGraph
