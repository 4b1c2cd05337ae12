"""
Recorded Session Pipeline

Runs hand and fingertip detection over a recorded depth session.

A recording is a ``.npz`` file holding a ``depth`` array of shape
(T, height, width) plus a JSON file with one list of tracked bodies per
frame (see ``Body.from_dict`` for the body layout).

Usage:
    python -m fingertrack.pipeline --config configs/default.yaml \
        --input session.npz --bodies session.json --output hands.json
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from .hand.body import Body
from .hand.controller import HandsController
from .hand.coordinate_mapping import CoordinateMapper, PinholeCoordinateMapper
from .hand.hand_assembler import HandPair
from .utils.config import Config, load_config
from .utils.logging_utils import setup_logging, get_logger

logger = get_logger(__name__)


def load_recording(
    depth_path: str,
    bodies_path: str
) -> Tuple[np.ndarray, List[List[Body]]]:
    """
    Load a recorded session.

    Args:
        depth_path: ``.npz`` file with a ``depth`` array (T, H, W)
        bodies_path: JSON file with a list of body lists, one per frame

    Returns:
        (depth_frames, bodies_per_frame)
    """
    depth_file = Path(depth_path)
    bodies_file = Path(bodies_path)

    if not depth_file.exists():
        raise FileNotFoundError(f"Depth recording not found: {depth_path}")
    if not bodies_file.exists():
        raise FileNotFoundError(f"Body recording not found: {bodies_path}")

    with np.load(depth_file) as data:
        if 'depth' not in data.files:
            raise ValueError(f"No 'depth' array in {depth_path}")
        depth = data['depth']

    with open(bodies_file, 'r') as f:
        frames = json.load(f)

    if len(frames) != len(depth):
        raise ValueError(
            f"Recording mismatch: {len(depth)} depth frames, {len(frames)} body frames"
        )

    try:
        bodies = [[Body.from_dict(b) for b in frame] for frame in frames]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed body record in {bodies_path}: {e}") from e

    return depth, bodies


class RecordingProcessor:
    """Detects hands on every frame of a recorded session."""

    def __init__(
        self,
        config: Config,
        coordinate_mapper: Optional[CoordinateMapper] = None
    ):
        """
        Args:
            config: Configuration object
            coordinate_mapper: Mapper to use (pinhole model from config if None)
        """
        self.config = config

        if coordinate_mapper is None:
            coordinate_mapper = PinholeCoordinateMapper.from_config(
                config.camera, depth_scale=config.depth.depth_scale
            )

        self.controller = HandsController(coordinate_mapper, config)

        logger.info("Recording processor initialized")

    def process(
        self,
        depth: np.ndarray,
        bodies: List[List[Body]],
        show_progress: bool = True
    ) -> List[Dict]:
        """
        Process all frames of a session.

        Returns:
            One entry per frame: ``{'frame_idx', 'hands': [HandPair dicts]}``
        """
        results = []
        detected = 0

        for frame_idx in tqdm(range(len(depth)), desc="Frames", disable=not show_progress):
            pairs: List[HandPair] = []

            for body in bodies[frame_idx]:
                pair = self.controller.update(depth[frame_idx], body)
                if pair is not None:
                    pairs.append(pair)

            if pairs:
                detected += 1
            results.append({
                'frame_idx': frame_idx,
                'hands': [p.to_dict() for p in pairs],
            })

        logger.info(f"Hands detected in {detected}/{len(depth)} frames")

        return results


def main():
    parser = argparse.ArgumentParser(description="Depth-based hand and fingertip detection")
    parser.add_argument('--config', type=str, default=None, help="YAML config file")
    parser.add_argument('--input', type=str, required=True, help="Depth recording (.npz)")
    parser.add_argument('--bodies', type=str, required=True, help="Body recording (.json)")
    parser.add_argument('--output', type=str, default='hands.json', help="Output JSON file")
    parser.add_argument('--verbose', action='store_true', help="Log per-hand details")
    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, use_tqdm=True)

    config = load_config(args.config) if args.config else Config()

    depth, bodies = load_recording(args.input, args.bodies)
    logger.info(f"Loaded {len(depth)} frames from {args.input}")

    processor = RecordingProcessor(config)
    results = processor.process(depth, bodies)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")


if __name__ == '__main__':
    main()
