"""
Depth Masker

Segments the depth pixels that plausibly belong to one hand: pixels
inside a square window around the palm whose depth lies in a band
around the palm joint's depth.

Usage:
    from fingertrack.hand.depth_masker import DepthMasker

    masker = DepthMasker(width=512, height=424)
    mask = masker.compute(depth, joints)  # None if the joints are untracked
"""

import numpy as np
from typing import Optional

from .body import HandJoints
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class DepthMasker:
    """
    Builds the binary hand mask for a single hand side.

    The mask buffer is allocated once and reset in place on every call, so
    a masker must not be shared between hand sides or threads.
    """

    def __init__(
        self,
        width: int = 512,
        height: int = 424,
        min_depth: int = 500,
        max_depth: int = 65535,
        depth_tolerance: float = 80.0
    ):
        """
        Args:
            width: Depth frame width in pixels
            height: Depth frame height in pixels
            min_depth: Smallest depth sample considered valid
            max_depth: Largest depth sample considered valid
            depth_tolerance: Half-width of the depth band around the palm
        """
        self.width = width
        self.height = height
        self.min_depth = min_depth
        self.max_depth = max_depth
        self.depth_tolerance = depth_tolerance

        self.mask = np.zeros((height, width), dtype=np.uint8)

    def compute(self, depth: np.ndarray, joints: HandJoints) -> Optional[np.ndarray]:
        """
        Compute the hand mask for this frame.

        Args:
            depth: (height, width) array of depth samples
            joints: The hand side's projected joints

        Returns:
            The (height, width) uint8 mask (255 = hand pixel), or None when
            a joint could not be projected and the hand is skipped
        """
        if not joints.is_valid():
            logger.debug("Skipping hand: joint position not trackable")
            return None

        self.mask.fill(0)

        min_x, min_y, max_x, max_y = joints.bounding_box()
        x0, y0 = max(min_x, 0), max(min_y, 0)
        x1, y1 = min(max_x, self.width - 1), min(max_y, self.height - 1)

        if x0 > x1 or y0 > y1:
            return self.mask

        low = joints.palm_depth - self.depth_tolerance
        high = joints.palm_depth + self.depth_tolerance

        window = depth[y0:y1 + 1, x0:x1 + 1]
        selected = (
            (window >= low) & (window <= high) &
            (window >= self.min_depth) & (window <= self.max_depth)
        )
        self.mask[y0:y1 + 1, x0:x1 + 1][selected] = 255

        return self.mask
