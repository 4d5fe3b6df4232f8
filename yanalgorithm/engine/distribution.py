"""Category probability distribution."""

import math
from typing import List

from ..models.settings import DEFAULT_BASE, AlgorithmConfig
from ..models.trace import CategoryDistribution
from .errors import InvalidConfig


def effective_base(total_weight: float, config: AlgorithmConfig) -> float:
    """Resolve the exponential base for the given total weight and settings."""
    calculated_base = total_weight if total_weight > 0 else DEFAULT_BASE
    if config.use_half_weight:
        calculated_base = calculated_base / 2

    return config.custom_base if config.use_custom_base else calculated_base


def compute_category_distribution(
    total_weight: float,
    config: AlgorithmConfig,
) -> CategoryDistribution:
    """Compute base^(i+1) terms and their share of the total, in percent.

    The category count is taken from the config as-is; range checks belong
    to AlgorithmConfig.validate. Only inputs that would break the math are
    rejected here.
    """
    num_categories = config.num_categories
    if num_categories < 1:
        raise InvalidConfig("num_categories must be at least 1", field='num_categories')

    base = effective_base(total_weight, config)
    if not math.isfinite(base) or base <= 0:
        raise InvalidConfig(f"base must be a positive number, got {base!r}", field='custom_base')

    try:
        terms: List[float] = [base ** (i + 1) for i in range(num_categories)]
    except OverflowError:
        raise InvalidConfig(f"base {base!r} is too large for {num_categories} categories")

    total = sum(terms)
    if not math.isfinite(total):
        raise InvalidConfig(f"base {base!r} is too large for {num_categories} categories")

    probabilities = [term / total * 100 for term in terms]

    return CategoryDistribution(
        base=base,
        terms=tuple(terms),
        sum=total,
        probabilities=tuple(probabilities),
    )
