"""
Depth Point

Value type for points in depth-pixel space together with their raw
depth sample, plus the small set of geometric helpers the detection
stages share.

Usage:
    from fingertrack.geometry.depth_point import DepthPoint

    p = DepthPoint(120, 84, 912)
    d = DepthPoint.distance(p, DepthPoint(121, 90, 915))
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence


@dataclass(frozen=True)
class DepthPoint:
    """A depth-pixel coordinate (x, y) with its depth sample z (0 = invalid)."""
    x: float
    y: float
    z: float = 0.0

    @staticmethod
    def distance(p1: 'DepthPoint', p2: 'DepthPoint') -> float:
        """Euclidean distance including the depth component."""
        return math.sqrt(
            (p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2 + (p1.z - p2.z) ** 2
        )

    @staticmethod
    def distance_2d(p1: 'DepthPoint', p2: 'DepthPoint') -> float:
        """Euclidean distance in the image plane only."""
        return math.hypot(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def center(p1: 'DepthPoint', p2: 'DepthPoint') -> 'DepthPoint':
        """Midpoint of two points."""
        return DepthPoint(
            (p1.x + p2.x) / 2, (p1.y + p2.y) / 2, (p1.z + p2.z) / 2
        )

    @staticmethod
    def centroid(points: Sequence['DepthPoint']) -> 'DepthPoint':
        """Mean of a list of points; the origin for an empty list."""
        if not points:
            return DepthPoint(0.0, 0.0, 0.0)

        n = len(points)
        return DepthPoint(
            sum(p.x for p in points) / n,
            sum(p.y for p in points) / n,
            sum(p.z for p in points) / n,
        )

    @staticmethod
    def nearest(
        target: 'DepthPoint',
        points: Iterable['DepthPoint']
    ) -> Optional['DepthPoint']:
        """
        Find the point closest to ``target`` in the image plane.

        Returns:
            The nearest point (first one on ties) or None if ``points`` is empty
        """
        best = None
        best_dist = math.inf

        for p in points:
            dist = DepthPoint.distance_2d(p, target)
            if dist < best_dist:
                best = p
                best_dist = dist

        return best

    @staticmethod
    def angle(
        center_x: float,
        center_y: float,
        start_x: float,
        start_y: float,
        end_x: float,
        end_y: float
    ) -> float:
        """
        Signed angle in degrees from vector center->start to center->end.

        The result lies in (-180, 180]. Positive values rotate from the
        image x axis toward the image y axis (clockwise on screen).
        """
        v1x, v1y = start_x - center_x, start_y - center_y
        v2x, v2y = end_x - center_x, end_y - center_y

        sin = v1x * v2y - v2x * v1y
        cos = v1x * v2x + v1y * v2y

        return math.degrees(math.atan2(sin, cos))


def points_from_array(array) -> List[DepthPoint]:
    """Build DepthPoints from an (N, 3) array-like of (x, y, z) rows."""
    return [DepthPoint(float(row[0]), float(row[1]), float(row[2])) for row in array]
