"""Configuration management."""

import json
import yaml
from pathlib import Path
from typing import Dict, Any

from ..engine.errors import InvalidConfig
from ..models.settings import AlgorithmConfig, DEFAULT_BASE, normalize_keys


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            config = yaml.safe_load(f) or {}
        elif path.suffix.lower() == '.json':
            config = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(config).__name__}: {config_path}")
    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'algorithm': {
            'num_categories': 3,
            'use_custom_base': False,
            'custom_base': DEFAULT_BASE,
            'use_half_weight': False,
        },
        'evaluation': {
            'trials': 100000,
            'task_count': 20,
            'due_date_range_days': 14,
            'seed': 42,
        },
        'logging': {
            'level': 'INFO',
        },
    }


def get_algorithm_config(config: Dict[str, Any]) -> AlgorithmConfig:
    """Build validated algorithm settings from the 'algorithm' section."""
    section = config.get('algorithm') or {}
    if not isinstance(section, dict):
        raise InvalidConfig("'algorithm' section must be a mapping")
    return AlgorithmConfig.from_dict(section)


def update_algorithm_config(current: AlgorithmConfig, updates: Dict[str, Any]) -> AlgorithmConfig:
    """Apply a partial settings update, rejecting unknown or out-of-range values."""
    values = normalize_keys(updates)
    unknown = sorted(set(values) - set(AlgorithmConfig.field_names()))
    if unknown:
        raise InvalidConfig(f"Unknown settings: {', '.join(unknown)}", field=unknown[0])

    merged = current.to_dict()
    merged.update(values)
    return AlgorithmConfig.from_dict(merged)
