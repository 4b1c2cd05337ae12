"""
Graham Scan Convex Hull

Reduces an unordered contour point set to its convex hull.

The hull starts at the pivot (lowest y, then lowest x), runs through the
remaining points in increasing polar angle around it and is closed by
repeating the pivot at the end. Angles are measured in the mathematical
sense of the (x, y) axes, so with image coordinates (y pointing down) the
polygon is traversed clockwise on screen.

Usage:
    from fingertrack.geometry.graham_scan import GrahamScan

    hull = GrahamScan().convex_hull(contour)
"""

from functools import cmp_to_key
from typing import List, Sequence

from .depth_point import DepthPoint


def cross(p0: DepthPoint, p1: DepthPoint, p2: DepthPoint) -> float:
    """Z component of (p1 - p0) x (p2 - p0)."""
    return (p1.x - p0.x) * (p2.y - p0.y) - (p2.x - p0.x) * (p1.y - p0.y)


class PointAngleComparer:
    """Orders points by polar angle around a fixed pivot."""

    def __init__(self, pivot: DepthPoint):
        self.pivot = pivot

    def dist2(self, p: DepthPoint) -> float:
        return (p.x - self.pivot.x) ** 2 + (p.y - self.pivot.y) ** 2

    def __call__(self, p1: DepthPoint, p2: DepthPoint) -> int:
        if p1 == p2:
            return 0

        value = cross(self.pivot, p1, p2)

        # Same ray from the pivot: nearer point first
        if value == 0:
            d1, d2 = self.dist2(p1), self.dist2(p2)
            if d1 == d2:
                return 0
            return -1 if d1 < d2 else 1
        if value < 0:
            return 1
        return -1


class GrahamScan:
    """Convex hull builder."""

    @staticmethod
    def minimum_point(points: Sequence[DepthPoint]) -> DepthPoint:
        """Lowest y coordinate, ties broken by lowest x."""
        min_point = points[0]

        for p in points[1:]:
            if p.y < min_point.y or (p.y == min_point.y and p.x < min_point.x):
                min_point = p

        return min_point

    def sort_points(self, points: Sequence[DepthPoint]) -> List[DepthPoint]:
        """
        Put the pivot first and sort the rest by angle around it.

        Points on the same ray from the pivot sort nearer first, so the
        scan always meets the farthest one last and keeps it. ``list.sort``
        is stable, so duplicates keep their input order.
        """
        pivot = self.minimum_point(points)

        rest = list(points)
        rest.remove(pivot)
        rest.sort(key=cmp_to_key(PointAngleComparer(pivot)))

        return [pivot] + rest

    def convex_hull(self, points: Sequence[DepthPoint]) -> Sequence[DepthPoint]:
        """
        Compute the convex hull of a point set.

        Args:
            points: Arbitrary point set

        Returns:
            ``points`` itself when it holds 3 points or fewer, otherwise the
            closed hull (first point repeated at the end)
        """
        if len(points) <= 3:
            return points

        hull = self.sort_points(points)
        index = 1

        while index + 1 < len(hull):
            # Negative when hull[index] is a left turn between its neighbours
            value = cross(hull[index - 1], hull[index + 1], hull[index])

            if value < 0:
                index += 1
            else:
                del hull[index]
                if index > 1:
                    index -= 1

        hull.append(hull[0])

        return hull
