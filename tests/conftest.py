"""Shared fixtures: a pass-through coordinate mapper and a synthetic hand frame."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from fingertrack.hand.body import Body, HandState


WIDTH = 512
HEIGHT = 424
PALM_DEPTH_MM = 900


class PassThroughMapper:
    """
    Treats camera x/y as depth pixels and records every depth->other call.

    Colour space is depth space scaled by 2, camera z is depth in metres.
    """

    def __init__(self):
        self.camera_calls = []
        self.color_calls = []

    def map_camera_point_to_depth_space(self, point):
        return (point[0], point[1])

    def map_depth_point_to_camera_space(self, point, depth):
        self.camera_calls.append((point, depth))
        return (point[0], point[1], depth / 1000.0)

    def map_depth_point_to_color_space(self, point, depth):
        self.color_calls.append((point, depth))
        return (point[0] * 2, point[1] * 2)


@pytest.fixture
def mapper():
    return PassThroughMapper()


@pytest.fixture
def hand_frame():
    """
    512x424 depth frame with an upright hand at 900mm over a 2m background.

    Palm: rows 180-260, cols 170-230. Five fingers rise to row 130.
    """
    depth = np.full((HEIGHT, WIDTH), 2000, dtype=np.uint16)
    depth[:, :40] = 0  # invalid readings

    depth[180:261, 170:231] = PALM_DEPTH_MM
    for col in (172, 185, 198, 211, 224):
        depth[130:180, col:col + 5] = PALM_DEPTH_MM

    return depth


@pytest.fixture
def make_body():
    """Factory for a body whose right hand sits on the ``hand_frame`` palm."""

    def _make(state=HandState.OPEN, wrist=(200.0, 280.0, 0.9), tracking_id=7):
        joints = {
            'hand_right': (200.0, 200.0, PALM_DEPTH_MM / 1000.0),
            'wrist_right': wrist,
            'hand_tip_right': (200.0, 140.0, 0.9),
            'thumb_right': (240.0, 200.0, 0.9),
        }
        return Body(
            tracking_id=tracking_id,
            joints=joints,
            hand_left_state=HandState.NOT_TRACKED,
            hand_right_state=state,
        )

    return _make
