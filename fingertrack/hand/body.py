"""
Tracked Body Data

Per-frame skeleton input consumed by the hand detector, and the
projected joint set a single hand side works with.

Joint positions are camera-space (x, y, z) tuples in metres, keyed by
``<joint>_<side>`` names:

    hand_left,  wrist_left,  hand_tip_left,  thumb_left
    hand_right, wrist_right, hand_tip_right, thumb_right

Usage:
    from fingertrack.hand.body import Body, HandState

    body = Body(tracking_id=7, joints=joints, hand_right_state=HandState.OPEN)
"""

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Tuple, Union

Vector3 = Tuple[float, float, float]
Point2 = Tuple[float, float]

SIDES = ('left', 'right')


class HandState(IntEnum):
    """Hand states reported by the skeleton tracker."""
    UNKNOWN = 0
    NOT_TRACKED = 1
    OPEN = 2
    CLOSED = 3
    LASSO = 4

    @classmethod
    def parse(cls, value: Union[str, int, 'HandState', None]) -> 'HandState':
        """Accept an enum member, its integer value or its name (any case)."""
        if value is None:
            return cls.UNKNOWN
        if isinstance(value, str):
            return cls[value.strip().upper()]
        return cls(value)


def joint_name(joint: str, side: str) -> str:
    """Key of a joint in ``Body.joints``, e.g. ``joint_name('wrist', 'left')``."""
    if side not in SIDES:
        raise ValueError(f"Unknown hand side: {side}")
    return f"{joint}_{side}"


@dataclass
class Body:
    """Skeleton data for one tracked body in one frame."""
    tracking_id: int
    joints: Dict[str, Vector3] = field(default_factory=dict)
    hand_left_state: HandState = HandState.UNKNOWN
    hand_right_state: HandState = HandState.UNKNOWN

    def hand_state(self, side: str) -> HandState:
        return self.hand_left_state if side == 'left' else self.hand_right_state

    def joint(self, joint: str, side: str) -> Vector3:
        """
        Camera-space position of a joint.

        Joints the tracker did not report come back as infinite, the same
        sentinel the sensor uses for positions it cannot resolve.
        """
        return self.joints.get(joint_name(joint, side), (math.inf, math.inf, math.inf))

    @classmethod
    def from_dict(cls, data: Dict) -> 'Body':
        """Create a Body from its JSON representation."""
        joints = {
            name: tuple(float(v) for v in position)
            for name, position in data.get('joints', {}).items()
        }
        return cls(
            tracking_id=int(data['tracking_id']),
            joints=joints,
            hand_left_state=HandState.parse(data.get('hand_left_state')),
            hand_right_state=HandState.parse(data.get('hand_right_state')),
        )


@dataclass(frozen=True)
class HandJoints:
    """One hand side's joints projected into depth-pixel coordinates."""
    hand: Point2
    wrist: Point2
    tip: Point2
    thumb: Point2
    palm_depth: float  # same unit as the depth buffer

    def is_valid(self) -> bool:
        """False when any projected coordinate is infinite or undefined."""
        return all(
            math.isfinite(c)
            for point in (self.hand, self.wrist, self.tip, self.thumb)
            for c in point
        )

    def reach_radius(self) -> float:
        """Twice the larger of the palm->tip and palm->thumb pixel distances."""
        hx, hy = self.hand
        to_tip = math.hypot(self.tip[0] - hx, self.tip[1] - hy) * 2
        to_thumb = math.hypot(self.thumb[0] - hx, self.thumb[1] - hy) * 2
        return max(to_tip, to_thumb)

    def bounding_box(self) -> Tuple[int, int, int, int]:
        """Inclusive (min_x, min_y, max_x, max_y) box around the palm."""
        radius = self.reach_radius()
        hx, hy = self.hand
        return (
            int(hx - radius),
            int(hy - radius),
            int(hx + radius),
            int(hy + radius),
        )
