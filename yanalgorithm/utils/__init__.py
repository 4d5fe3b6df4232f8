"""Utility functions."""

from .config import load_config, get_algorithm_config, update_algorithm_config
from .datetime_utils import days_until, parse_day, to_day

__all__ = [
    'load_config',
    'get_algorithm_config',
    'update_algorithm_config',
    'days_until',
    'parse_day',
    'to_day',
]
