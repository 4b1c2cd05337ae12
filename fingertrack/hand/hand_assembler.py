"""
Hand Assembler

Packages the contour and fingertip points of one detected hand into a
``Hand`` result, mapping every point into camera and colour space.

Usage:
    from fingertrack.hand.hand_assembler import HandAssembler

    assembler = HandAssembler(mapper)
    hand = assembler.assemble(tracking_id, state, contour, fingertips)
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .body import HandState
from .coordinate_mapping import CoordinateMapper
from ..geometry.depth_point import DepthPoint

Point2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Finger:
    """A fingertip in depth, camera and colour space."""
    depth_point: Point2
    camera_point: Vector3
    color_point: Point2


@dataclass(frozen=True)
class Hand:
    """A detected hand for one frame."""
    tracking_id: int
    state: HandState
    fingers: Tuple[Finger, ...]
    contour_depth: Tuple[Point2, ...]
    contour_camera: Tuple[Vector3, ...]
    contour_color: Tuple[Point2, ...]

    @property
    def finger_count(self) -> int:
        return len(self.fingers)

    def to_dict(self) -> Dict:
        return {
            'tracking_id': self.tracking_id,
            'state': self.state.name.lower(),
            'fingers': [
                {
                    'depth': list(f.depth_point),
                    'camera': list(f.camera_point),
                    'color': list(f.color_point),
                }
                for f in self.fingers
            ],
            'contour_depth': [list(p) for p in self.contour_depth],
        }


@dataclass(frozen=True)
class HandPair:
    """The hands detected for one tracked body in one frame."""
    tracking_id: int
    left: Optional[Hand] = None
    right: Optional[Hand] = None

    @property
    def hands(self) -> List[Hand]:
        return [h for h in (self.left, self.right) if h is not None]

    def to_dict(self) -> Dict:
        return {
            'tracking_id': self.tracking_id,
            'left': self.left.to_dict() if self.left else None,
            'right': self.right.to_dict() if self.right else None,
        }


class HandAssembler:
    """Builds ``Hand`` results using an external coordinate mapper."""

    def __init__(self, coordinate_mapper: CoordinateMapper):
        self.coordinate_mapper = coordinate_mapper

    def make_finger(self, point: DepthPoint) -> Finger:
        depth_point = (point.x, point.y)
        depth = int(point.z)

        return Finger(
            depth_point=depth_point,
            camera_point=self.coordinate_mapper.map_depth_point_to_camera_space(depth_point, depth),
            color_point=self.coordinate_mapper.map_depth_point_to_color_space(depth_point, depth),
        )

    def assemble(
        self,
        tracking_id: int,
        state: HandState,
        contour: Sequence[DepthPoint],
        fingertips: Sequence[DepthPoint]
    ) -> Hand:
        """
        Build a Hand.

        Fingers are only reported for open hands; the contour is always kept.

        Args:
            tracking_id: Body tracking id
            state: Hand open/closed state
            contour: Contour points in depth space
            fingertips: Fingertip candidates in depth space

        Returns:
            Hand result
        """
        mapper = self.coordinate_mapper

        if state == HandState.OPEN:
            fingers = tuple(self.make_finger(p) for p in fingertips)
        else:
            fingers = ()

        contour_depth = tuple((p.x, p.y) for p in contour)
        depths = [int(p.z) for p in contour]

        contour_camera = tuple(
            mapper.map_depth_point_to_camera_space(p, d)
            for p, d in zip(contour_depth, depths)
        )
        contour_color = tuple(
            mapper.map_depth_point_to_color_space(p, d)
            for p, d in zip(contour_depth, depths)
        )

        return Hand(
            tracking_id=tracking_id,
            state=state,
            fingers=fingers,
            contour_depth=contour_depth,
            contour_camera=contour_camera,
            contour_color=contour_color,
        )
