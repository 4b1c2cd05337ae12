"""Hand segmentation and fingertip detection module."""

from .body import Body, HandJoints, HandState
from .coordinate_mapping import CoordinateMapper, PinholeCoordinateMapper
from .depth_masker import DepthMasker
from .contour_extractor import ContourExtractor
from .fingertip_selector import FingertipSelector, forearm_angle
from .hand_assembler import Finger, Hand, HandPair, HandAssembler
from .controller import HandsController, HandSideDetector, FrameShapeError

__all__ = [
    "Body",
    "HandJoints",
    "HandState",
    "CoordinateMapper",
    "PinholeCoordinateMapper",
    "DepthMasker",
    "ContourExtractor",
    "FingertipSelector",
    "forearm_angle",
    "Finger",
    "Hand",
    "HandPair",
    "HandAssembler",
    "HandsController",
    "HandSideDetector",
    "FrameShapeError",
]
