"""
Configuration Management

Handles loading and merging configuration files.

Usage:
    from fingertrack.utils.config import load_config

    config = load_config('configs/default.yaml')
"""

import yaml
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass, field


@dataclass
class DepthConfig:
    """Depth frame and segmentation configuration."""
    width: int = 512
    height: int = 424
    min_depth: int = 500
    max_depth: int = 65535
    depth_tolerance: float = 80.0  # 8cm
    depth_scale: float = 1000.0  # buffer units per metre


@dataclass
class ContourConfig:
    """Contour thinning and fingertip selection configuration."""
    min_point_distance: float = 18.0
    use_depth_in_distance: bool = True
    max_fingertips: int = 5


@dataclass
class CameraConfig:
    """Pinhole intrinsics for the software coordinate mapper."""
    depth_fx: float = 365.5
    depth_fy: float = 365.5
    depth_cx: float = 257.0
    depth_cy: float = 210.0
    color_fx: float = 1081.4
    color_fy: float = 1081.4
    color_cx: float = 959.5
    color_cy: float = 539.5
    color_baseline: float = 0.052


@dataclass
class Config:
    """Main configuration container."""
    project_name: str = "fingertrack"
    version: str = "1.0.0"

    detect_left: bool = True
    detect_right: bool = True

    # Sub-configurations
    depth: DepthConfig = field(default_factory=DepthConfig)
    contour: ContourConfig = field(default_factory=ContourConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create Config from dictionary."""
        config = cls()
        config_dict = config_dict or {}

        # Project settings
        project = config_dict.get('project', {})
        config.project_name = project.get('name', config.project_name)
        config.version = project.get('version', config.version)

        # Detection switches
        detection = config_dict.get('detection', {})
        config.detect_left = detection.get('detect_left', config.detect_left)
        config.detect_right = detection.get('detect_right', config.detect_right)

        # Depth config
        depth = config_dict.get('depth', {})
        config.depth = DepthConfig(
            width=depth.get('width', 512),
            height=depth.get('height', 424),
            min_depth=depth.get('min_depth', 500),
            max_depth=depth.get('max_depth', 65535),
            depth_tolerance=depth.get('depth_tolerance', 80.0),
            depth_scale=depth.get('depth_scale', 1000.0)
        )

        # Contour config
        contour = config_dict.get('contour', {})
        config.contour = ContourConfig(
            min_point_distance=contour.get('min_point_distance', 18.0),
            use_depth_in_distance=contour.get('use_depth_in_distance', True),
            max_fingertips=contour.get('max_fingertips', 5)
        )

        # Camera config
        camera = config_dict.get('camera', {})
        depth_cam = camera.get('depth', {})
        color_cam = camera.get('color', {})
        defaults = CameraConfig()
        config.camera = CameraConfig(
            depth_fx=depth_cam.get('fx', defaults.depth_fx),
            depth_fy=depth_cam.get('fy', defaults.depth_fy),
            depth_cx=depth_cam.get('cx', defaults.depth_cx),
            depth_cy=depth_cam.get('cy', defaults.depth_cy),
            color_fx=color_cam.get('fx', defaults.color_fx),
            color_fy=color_cam.get('fy', defaults.color_fy),
            color_cx=color_cam.get('cx', defaults.color_cx),
            color_cy=color_cam.get('cy', defaults.color_cy),
            color_baseline=camera.get('color_baseline', defaults.color_baseline)
        )

        return config


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Config object
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    return Config.from_dict(config_dict)


def merge_configs(base: Dict, override: Dict) -> Dict:
    """
    Merge two config dictionaries.

    Args:
        base: Base configuration
        override: Override values

    Returns:
        Merged configuration
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def config_to_dict(config: Config) -> Dict[str, Any]:
    """Nested dictionary in the layout ``Config.from_dict`` reads."""
    return {
        'project': {
            'name': config.project_name,
            'version': config.version
        },
        'detection': {
            'detect_left': config.detect_left,
            'detect_right': config.detect_right
        },
        'depth': {
            'width': config.depth.width,
            'height': config.depth.height,
            'min_depth': config.depth.min_depth,
            'max_depth': config.depth.max_depth,
            'depth_tolerance': config.depth.depth_tolerance,
            'depth_scale': config.depth.depth_scale
        },
        'contour': {
            'min_point_distance': config.contour.min_point_distance,
            'use_depth_in_distance': config.contour.use_depth_in_distance,
            'max_fingertips': config.contour.max_fingertips
        },
        'camera': {
            'depth': {
                'fx': config.camera.depth_fx,
                'fy': config.camera.depth_fy,
                'cx': config.camera.depth_cx,
                'cy': config.camera.depth_cy
            },
            'color': {
                'fx': config.camera.color_fx,
                'fy': config.camera.color_fy,
                'cx': config.camera.color_cx,
                'cy': config.camera.color_cy
            },
            'color_baseline': config.camera.color_baseline
        }
    }


def save_config(config: Config, path: str):
    """Save configuration to YAML file."""
    with open(path, 'w') as f:
        yaml.dump(config_to_dict(config), f, default_flow_style=False)
