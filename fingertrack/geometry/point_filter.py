"""
Point Filter

Thins an ordered, closed point sequence (usually a convex hull) by
collapsing runs of nearby points into a single representative.

Usage:
    from fingertrack.geometry.point_filter import PointFilter

    thinned = PointFilter(min_distance=18.0).filter(hull)
"""

from typing import List, Sequence

from .depth_point import DepthPoint


class PointFilter:
    """Merges consecutive points closer than ``min_distance``."""

    def __init__(self, min_distance: float = 18.0, use_depth: bool = True):
        """
        Args:
            min_distance: Points closer than this to the current
                representative are dropped
            use_depth: Include the depth sample in the distance
        """
        self.min_distance = min_distance
        self.use_depth = use_depth

    def filter(self, points: Sequence[DepthPoint]) -> List[DepthPoint]:
        """
        Thin a point sequence.

        Args:
            points: Ordered point sequence

        Returns:
            New list, never longer than ``points``
        """
        result: List[DepthPoint] = []

        if not points:
            return result

        current = points[0]
        result.append(current)

        for point in points[1:]:
            if not self.points_are_close(point, current):
                current = point
                result.append(current)

        # Closing seam of a closed polygon
        if len(result) > 1 and self.points_are_close(result[-1], result[0]):
            result.pop()

        return result

    def points_are_close(self, p1: DepthPoint, p2: DepthPoint) -> bool:
        if self.use_depth:
            return DepthPoint.distance(p1, p2) < self.min_distance
        return DepthPoint.distance_2d(p1, p2) < self.min_distance
