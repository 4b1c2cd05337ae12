"""
Fingertip Selector

Picks fingertip candidates from a thinned convex hull using the forearm
orientation: the fingers are expected on the far side of the wrist in
the direction the forearm points.

Orientation buckets (degrees, see ``forearm_angle``):
    (-90, 30)   hand up:    y < wrist y
    [30, 90)    hand right: x > wrist x
    [90, 180)   hand down:  y > wrist y
    otherwise   hand left:  x < wrist x

Usage:
    from fingertrack.hand.fingertip_selector import FingertipSelector, forearm_angle

    angle = forearm_angle(joints.wrist, joints.hand)
    tips = FingertipSelector().select(thinned_hull, wrist_x, wrist_y, angle)
"""

from typing import List, Sequence, Tuple

from ..geometry.depth_point import DepthPoint


def forearm_angle(wrist: Tuple[float, float], palm: Tuple[float, float]) -> float:
    """
    Signed angle between wrist->image top and wrist->palm, in degrees.

    0 means the palm is straight above the wrist, positive values rotate
    toward the image's right side.
    """
    wx, wy = wrist
    return DepthPoint.angle(wx, wy, wx, 0.0, palm[0], palm[1])


class FingertipSelector:
    """Orientation-bucketed fingertip heuristic."""

    def __init__(self, max_fingertips: int = 5):
        self.max_fingertips = max_fingertips

    def select(
        self,
        points: Sequence[DepthPoint],
        wrist_x: float,
        wrist_y: float,
        angle: float
    ) -> List[DepthPoint]:
        """
        Select fingertip candidates.

        Args:
            points: Thinned hull points
            wrist_x: Wrist x in depth pixels
            wrist_y: Wrist y in depth pixels
            angle: Forearm angle in degrees

        Returns:
            The first ``max_fingertips`` qualifying points, in hull order
        """
        if -90.0 < angle < 30.0:
            candidates = [p for p in points if p.y < wrist_y]
        elif 30.0 <= angle < 90.0:
            candidates = [p for p in points if p.x > wrist_x]
        elif 90.0 <= angle < 180.0:
            candidates = [p for p in points if p.y > wrist_y]
        else:
            candidates = [p for p in points if p.x < wrist_x]

        return candidates[:self.max_fingertips]
