"""
Configuration management for trackmatch.

Loads YAML configuration with defaults for every matching stage.
"""

import os
from dataclasses import asdict, dataclass, field
from typing import Optional

import yaml


@dataclass
class MatchingConfig:
    """Configuration for the normalize -> resample -> distance chain."""
    algorithm: str = "frechet"  # "hausdorff", "frechet" or "turning-angle"
    policy: str = "bbox"  # "bbox" or "pca"
    resample_count: int = 64
    offset_divisions: int = 8


@dataclass
class ScoringConfig:
    """Exponential decay constants, one per distance metric."""
    hausdorff_decay: float = 8.0
    frechet_decay: float = 10.0
    turning_angle_decay: float = 10.0


@dataclass
class ParallelConfig:
    """Configuration for scoring candidates on a worker pool."""
    workers: int = 1


@dataclass
class OutputConfig:
    """Configuration for result files and SVG overlays."""
    top_k: int = 10
    overlay: bool = False
    overlay_size: int = 400
    drawing_color: str = "black"
    circuit_color: str = "red"
    stroke_width: float = 2.0


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: Optional[str] = None
    json_output: bool = False


@dataclass
class MatchConfig:
    """Complete trackmatch configuration."""
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    parallel: ParallelConfig = field(default_factory=ParallelConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


_SECTIONS = ("matching", "scoring", "parallel", "output", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = MatchConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass."""
    for section_name in _SECTIONS:
        section_data = yaml_data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        section = getattr(config, section_name)
        for key, value in section_data.items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(MatchConfig())
    # file_path has no useful default to advertise
    yaml_data["tracing"].pop("file_path", None)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
