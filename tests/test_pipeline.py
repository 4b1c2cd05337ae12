"""Tests for configuration loading and the recorded session pipeline."""

import json

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fingertrack.hand.body import HandState
from fingertrack.pipeline import RecordingProcessor, load_recording
from fingertrack.utils.config import (
    Config, load_config, save_config, merge_configs
)


class TestConfig:
    """Tests for configuration management."""

    def test_defaults(self):
        """Default detection constants."""
        config = Config()

        assert config.depth.width == 512
        assert config.depth.height == 424
        assert config.depth.min_depth == 500
        assert config.depth.max_depth == 65535
        assert config.depth.depth_tolerance == 80.0
        assert config.contour.min_point_distance == 18.0
        assert config.contour.max_fingertips == 5
        assert config.detect_left and config.detect_right

    def test_from_dict_partial(self):
        """Missing keys keep their defaults."""
        config = Config.from_dict({
            'depth': {'depth_tolerance': 60.0},
            'contour': {'max_fingertips': 3},
            'detection': {'detect_left': False},
        })

        assert config.depth.depth_tolerance == 60.0
        assert config.depth.width == 512
        assert config.contour.max_fingertips == 3
        assert config.contour.min_point_distance == 18.0
        assert config.detect_left is False
        assert config.detect_right is True

    def test_from_empty(self):
        assert Config.from_dict(None).depth.min_depth == 500

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_save_and_load(self, tmp_path):
        """Saved configs load back with the same values."""
        config = Config()
        config.depth.min_depth = 400
        config.camera.depth_fx = 360.0
        path = tmp_path / "config.yaml"

        save_config(config, str(path))
        loaded = load_config(str(path))

        assert loaded.depth.min_depth == 400
        assert loaded.camera.depth_fx == 360.0
        assert loaded.contour == config.contour

    def test_default_yaml(self):
        """The shipped default config matches the built-in defaults."""
        path = Path(__file__).parent.parent / "configs" / "default.yaml"
        config = load_config(str(path))

        assert config.depth == Config().depth
        assert config.contour == Config().contour
        assert config.camera == Config().camera

    def test_merge_configs(self):
        """Nested dictionaries merge recursively."""
        base = {'depth': {'width': 512, 'height': 424}, 'contour': {'max_fingertips': 5}}
        override = {'depth': {'width': 640}}

        merged = merge_configs(base, override)

        assert merged['depth'] == {'width': 640, 'height': 424}
        assert merged['contour'] == {'max_fingertips': 5}
        assert base['depth']['width'] == 512


@pytest.fixture
def recording(tmp_path, hand_frame, make_body):
    """Two-frame session: a hand, then an empty frame."""
    depth = np.stack([hand_frame, np.zeros_like(hand_frame)])
    body = make_body()
    body_dict = {
        'tracking_id': body.tracking_id,
        'hand_right_state': 'open',
        'hand_left_state': int(HandState.NOT_TRACKED),
        'joints': {name: list(pos) for name, pos in body.joints.items()},
    }

    depth_path = tmp_path / "session.npz"
    bodies_path = tmp_path / "session.json"
    np.savez(depth_path, depth=depth)
    with open(bodies_path, 'w') as f:
        json.dump([[body_dict], [body_dict]], f)

    return depth_path, bodies_path


class TestRecording:
    """Tests for recorded session loading and processing."""

    def test_load_recording(self, recording):
        """Depth frames and bodies load frame by frame."""
        depth, bodies = load_recording(*map(str, recording))

        assert depth.shape == (2, 424, 512)
        assert len(bodies) == 2
        assert bodies[0][0].tracking_id == 7
        assert bodies[0][0].hand_right_state is HandState.OPEN

    def test_missing_files(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_recording(str(tmp_path / "a.npz"), str(tmp_path / "a.json"))

    def test_frame_count_mismatch(self, recording):
        """Body and depth streams must have the same length."""
        depth_path, bodies_path = recording
        with open(bodies_path, 'w') as f:
            json.dump([[]], f)

        with pytest.raises(ValueError):
            load_recording(str(depth_path), str(bodies_path))

    @pytest.mark.parametrize("field,value", [
        ("hand_right_state", "waving"),
        ("tracking_id", None),
    ])
    def test_malformed_body_record(self, recording, field, value):
        """Unknown hand states and missing tracking ids are reported as ValueError."""
        depth_path, bodies_path = recording
        with open(bodies_path, 'r') as f:
            frames = json.load(f)
        for frame in frames:
            if value is None:
                del frame[0][field]
            else:
                frame[0][field] = value
        with open(bodies_path, 'w') as f:
            json.dump(frames, f)

        with pytest.raises(ValueError, match="Malformed body record"):
            load_recording(str(depth_path), str(bodies_path))

    def test_process(self, recording, mapper):
        """Hands are reported only on frames where they were detected."""
        depth, bodies = load_recording(*map(str, recording))
        processor = RecordingProcessor(Config(), coordinate_mapper=mapper)

        results = processor.process(depth, bodies, show_progress=False)

        assert [r['frame_idx'] for r in results] == [0, 1]
        assert len(results[0]['hands']) == 1
        assert results[0]['hands'][0]['right']['state'] == 'open'
        assert len(results[0]['hands'][0]['right']['fingers']) == 5
        assert results[1]['hands'] == []

    def test_default_mapper_from_config(self):
        """Without a mapper the pinhole model from the config is used."""
        processor = RecordingProcessor(Config())
        mapper = processor.controller.coordinate_mapper

        assert mapper.depth_intrinsics.fx == Config().camera.depth_fx


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
