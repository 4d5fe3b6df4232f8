"""Snapshot of the settings behind a generated number."""

from typing import Optional

from ..models.settings import AlgorithmConfig
from ..models.trace import AlgorithmSnapshot
from .distribution import effective_base

BASE_TOLERANCE = 0.001


def build_snapshot(config: AlgorithmConfig, total_weight: float) -> AlgorithmSnapshot:
    """Capture the settings and effective base in use right now."""
    return AlgorithmSnapshot(
        num_categories=config.num_categories,
        use_custom_base=config.use_custom_base,
        custom_base=config.custom_base,
        use_half_weight=config.use_half_weight,
        effective_base=effective_base(total_weight, config),
        total_weight=total_weight,
    )


def is_snapshot_stale(
    snapshot: Optional[AlgorithmSnapshot],
    live_config: AlgorithmConfig,
    live_total_weight: float,
) -> bool:
    """Check if a saved snapshot no longer matches the live settings and tasks."""
    if snapshot is None:
        return True

    current_base = effective_base(live_total_weight, live_config)

    return not (
        snapshot.num_categories == live_config.num_categories
        and snapshot.use_custom_base == live_config.use_custom_base
        and snapshot.use_half_weight == live_config.use_half_weight
        and snapshot.custom_base == live_config.custom_base
        and abs(snapshot.effective_base - current_base) < BASE_TOLERANCE
    )
