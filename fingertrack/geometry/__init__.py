"""Point geometry: depth points, convex hull and thinning."""

from .depth_point import DepthPoint, points_from_array
from .graham_scan import GrahamScan, PointAngleComparer, cross
from .point_filter import PointFilter

__all__ = [
    "DepthPoint",
    "points_from_array",
    "GrahamScan",
    "PointAngleComparer",
    "cross",
    "PointFilter",
]
