"""
Contour Extractor

Extracts the boundary pixels of a hand mask: set pixels with at least
one unset 4-neighbour. Neighbours outside the frame count as unset.
"""

import cv2
import numpy as np
from typing import List

from ..geometry.depth_point import DepthPoint


class ContourExtractor:
    """4-connected boundary extraction via morphological erosion."""

    def __init__(self):
        self.kernel = cv2.getStructuringElement(cv2.MORPH_CROSS, (3, 3))

    def boundary_mask(self, mask: np.ndarray) -> np.ndarray:
        """Boolean (height, width) array of boundary pixels."""
        # A pixel survives erosion only if all of its 4-neighbours are set
        eroded = cv2.erode(
            mask, self.kernel,
            borderType=cv2.BORDER_CONSTANT, borderValue=0
        )
        return (mask != 0) & (eroded == 0)

    def extract(self, mask: np.ndarray, depth: np.ndarray) -> List[DepthPoint]:
        """
        Extract the contour of a mask.

        Args:
            mask: (height, width) uint8 mask, non-zero = member
            depth: (height, width) depth samples

        Returns:
            Boundary points in row-major order with their depth samples
        """
        ys, xs = np.nonzero(self.boundary_mask(mask))
        zs = depth[ys, xs]

        return [
            DepthPoint(int(x), int(y), int(z))
            for x, y, z in zip(xs, ys, zs)
        ]
