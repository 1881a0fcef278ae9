"""Region detection: frame-level detector and cycling detection session."""

from .detection_session import DetectionSession, filter_and_sort, merge_unique
from .frame_decoder import decode_frame
from .region_detector import RegionDetector
from .thumbnail import render_thumbnail

__all__ = [
    "RegionDetector",
    "DetectionSession",
    "merge_unique",
    "filter_and_sort",
    "decode_frame",
    "render_thumbnail",
]
