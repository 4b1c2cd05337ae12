"""
Hands Controller

Runs the per-frame detection pipeline for one tracked body:

1. Project the hand joints into depth space
2. Mask the depth pixels around each hand
3. Extract the mask contour
4. Reduce it to its convex hull and thin the hull
5. Select fingertip candidates from the forearm orientation
6. Assemble the Hand results

Usage:
    from fingertrack.hand.controller import HandsController

    controller = HandsController(mapper, config)
    pair = controller.update(depth_frame, body)  # HandPair or None
"""

import numpy as np
from typing import Callable, List, Optional

from .body import Body, HandJoints, SIDES
from .contour_extractor import ContourExtractor
from .coordinate_mapping import CoordinateMapper
from .depth_masker import DepthMasker
from .fingertip_selector import FingertipSelector, forearm_angle
from .hand_assembler import Hand, HandAssembler, HandPair
from ..geometry.graham_scan import GrahamScan
from ..geometry.point_filter import PointFilter
from ..utils.config import Config
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class FrameShapeError(ValueError):
    """Depth buffer does not match the configured frame size."""


class HandSideDetector:
    """
    Detection state and stages for one hand side.

    Owns its own mask buffer; two sides never share scratch state.
    """

    def __init__(self, side: str, width: int, height: int, config: Config):
        self.side = side

        depth_cfg = config.depth
        contour_cfg = config.contour

        self.masker = DepthMasker(
            width=width,
            height=height,
            min_depth=depth_cfg.min_depth,
            max_depth=depth_cfg.max_depth,
            depth_tolerance=depth_cfg.depth_tolerance,
        )
        self.contour_extractor = ContourExtractor()
        self.graham_scan = GrahamScan()
        self.point_filter = PointFilter(
            min_distance=contour_cfg.min_point_distance,
            use_depth=contour_cfg.use_depth_in_distance,
        )
        self.selector = FingertipSelector(max_fingertips=contour_cfg.max_fingertips)

    def detect(
        self,
        depth: np.ndarray,
        joints: HandJoints,
        tracking_id: int,
        state,
        assembler: HandAssembler
    ) -> Optional[Hand]:
        """
        Detect this side's hand.

        Returns:
            The Hand, or None when the joints are untrackable or no contour
            or fingertip candidate was found
        """
        mask = self.masker.compute(depth, joints)
        if mask is None:
            return None

        contour = self.contour_extractor.extract(mask, depth)
        hull = self.graham_scan.convex_hull(contour)
        thinned = self.point_filter.filter(hull)

        wrist_x, wrist_y = joints.wrist
        angle = forearm_angle(joints.wrist, joints.hand)
        fingertips = self.selector.select(thinned, wrist_x, wrist_y, angle)

        logger.debug(
            f"{self.side} hand: {len(contour)} contour, {len(hull)} hull, "
            f"{len(thinned)} thinned, {len(fingertips)} fingertips (angle {angle:.1f})"
        )

        if not contour or not fingertips:
            return None

        return assembler.assemble(tracking_id, state, contour, fingertips)


class HandsController:
    """Detects hands and fingertips of tracked bodies in depth frames."""

    def __init__(
        self,
        coordinate_mapper: CoordinateMapper,
        config: Optional[Config] = None
    ):
        """
        Args:
            coordinate_mapper: Mapper between camera, depth and colour space
            config: Detection configuration (defaults if None)
        """
        self.config = config or Config()
        self.coordinate_mapper = coordinate_mapper
        self.assembler = HandAssembler(coordinate_mapper)

        depth_cfg = self.config.depth
        self.width = depth_cfg.width or Config().depth.width
        self.height = depth_cfg.height or Config().depth.height

        self.detect_left = self.config.detect_left
        self.detect_right = self.config.detect_right

        self.detectors = {
            side: HandSideDetector(side, self.width, self.height, self.config)
            for side in SIDES
        }
        self._listeners: List[Callable[[HandPair], None]] = []

    def add_listener(self, callback: Callable[[HandPair], None]):
        """Register a callback invoked with every detected HandPair."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[HandPair], None]):
        self._listeners.remove(callback)

    def project_joints(self, body: Body, side: str) -> HandJoints:
        """Project one side's joints into depth-pixel coordinates."""
        mapper = self.coordinate_mapper
        hand = body.joint('hand', side)

        return HandJoints(
            hand=mapper.map_camera_point_to_depth_space(hand),
            wrist=mapper.map_camera_point_to_depth_space(body.joint('wrist', side)),
            tip=mapper.map_camera_point_to_depth_space(body.joint('hand_tip', side)),
            thumb=mapper.map_camera_point_to_depth_space(body.joint('thumb', side)),
            palm_depth=hand[2] * self.config.depth.depth_scale,
        )

    def _as_frame(self, depth) -> np.ndarray:
        frame = np.asarray(depth)

        if frame.size != self.width * self.height:
            raise FrameShapeError(
                f"Depth buffer has {frame.size} samples, expected "
                f"{self.width}x{self.height} = {self.width * self.height}"
            )

        return frame.reshape(self.height, self.width)

    def side_enabled(self, side: str) -> bool:
        return self.detect_left if side == 'left' else self.detect_right

    def update(self, depth, body: Optional[Body]) -> Optional[HandPair]:
        """
        Detect the hands of one body in one depth frame.

        Args:
            depth: Depth samples, flat row-major or (height, width)
            body: Tracked body for this frame

        Returns:
            HandPair with the detected hands, or None when neither hand
            was detected

        Raises:
            FrameShapeError: If the buffer size is not width x height
        """
        if depth is None or body is None:
            return None

        frame = self._as_frame(depth)
        hands = {}

        for side in SIDES:
            if not self.side_enabled(side):
                continue

            joints = self.project_joints(body, side)
            hands[side] = self.detectors[side].detect(
                frame, joints, body.tracking_id, body.hand_state(side), self.assembler
            )

        left = hands.get('left')
        right = hands.get('right')

        if left is None and right is None:
            return None

        pair = HandPair(tracking_id=body.tracking_id, left=left, right=right)

        for callback in self._listeners:
            callback(pair)

        return pair
