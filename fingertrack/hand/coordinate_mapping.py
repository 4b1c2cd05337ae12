"""
Coordinate Mapping

Conversions between camera space (metres), depth-pixel space and
colour-image space.

The detector only depends on the ``CoordinateMapper`` interface; a
sensor SDK's calibrated mapper can be plugged in directly.
``PinholeCoordinateMapper`` is a software stand-in built from pinhole
intrinsics, used for recorded data and tests.

Usage:
    from fingertrack.hand.coordinate_mapping import PinholeCoordinateMapper

    mapper = PinholeCoordinateMapper.from_config(config.camera)
    px = mapper.map_camera_point_to_depth_space((0.1, 0.2, 0.9))
"""

import math
from dataclasses import dataclass
from typing import Protocol, Tuple

Vector3 = Tuple[float, float, float]
Point2 = Tuple[float, float]


class CoordinateMapper(Protocol):
    """Interface of the external coordinate mapper."""

    def map_camera_point_to_depth_space(self, point: Vector3) -> Point2:
        ...

    def map_depth_point_to_camera_space(self, point: Point2, depth: int) -> Vector3:
        ...

    def map_depth_point_to_color_space(self, point: Point2, depth: int) -> Point2:
        ...


@dataclass
class PinholeIntrinsics:
    """Focal lengths and principal point of a pinhole camera, in pixels."""
    fx: float
    fy: float
    cx: float
    cy: float


class PinholeCoordinateMapper:
    """
    Pinhole model of a depth camera with a colour camera offset along x.

    Camera space follows the sensor convention: x right, y up, z forward,
    metres. Depth samples are millimetres (``depth_scale`` units per metre).
    Points on or behind the image plane project to infinity, the value
    sensor SDKs use for positions they cannot map.
    """

    def __init__(
        self,
        depth_intrinsics: PinholeIntrinsics,
        color_intrinsics: PinholeIntrinsics,
        color_baseline: float = 0.052,
        depth_scale: float = 1000.0
    ):
        """
        Args:
            depth_intrinsics: Depth camera intrinsics
            color_intrinsics: Colour camera intrinsics
            color_baseline: Colour camera offset from the depth camera (metres, +x)
            depth_scale: Depth buffer units per metre
        """
        self.depth_intrinsics = depth_intrinsics
        self.color_intrinsics = color_intrinsics
        self.color_baseline = color_baseline
        self.depth_scale = depth_scale

    @classmethod
    def from_config(cls, camera_config, depth_scale: float = 1000.0) -> 'PinholeCoordinateMapper':
        """Create a mapper from a ``CameraConfig``."""
        return cls(
            depth_intrinsics=PinholeIntrinsics(
                camera_config.depth_fx, camera_config.depth_fy,
                camera_config.depth_cx, camera_config.depth_cy
            ),
            color_intrinsics=PinholeIntrinsics(
                camera_config.color_fx, camera_config.color_fy,
                camera_config.color_cx, camera_config.color_cy
            ),
            color_baseline=camera_config.color_baseline,
            depth_scale=depth_scale,
        )

    @staticmethod
    def _project(point: Vector3, intrinsics: PinholeIntrinsics) -> Point2:
        x, y, z = point
        if not (z > 0) or not math.isfinite(z):
            return (-math.inf, -math.inf)

        u = intrinsics.fx * x / z + intrinsics.cx
        v = intrinsics.cy - intrinsics.fy * y / z
        return (u, v)

    def map_camera_point_to_depth_space(self, point: Vector3) -> Point2:
        return self._project(point, self.depth_intrinsics)

    def map_depth_point_to_camera_space(self, point: Point2, depth: int) -> Vector3:
        z = depth / self.depth_scale
        if z <= 0:
            return (-math.inf, -math.inf, -math.inf)

        k = self.depth_intrinsics
        x = (point[0] - k.cx) * z / k.fx
        y = (k.cy - point[1]) * z / k.fy
        return (x, y, z)

    def map_depth_point_to_color_space(self, point: Point2, depth: int) -> Point2:
        x, y, z = self.map_depth_point_to_camera_space(point, depth)
        return self._project((x - self.color_baseline, y, z), self.color_intrinsics)
