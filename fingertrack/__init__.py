"""
Depth Finger Tracking Package

Hand contour and fingertip detection from depth frames and tracked
skeleton joints.
"""

__version__ = "1.0.0"

from . import geometry
from . import hand
from . import utils
