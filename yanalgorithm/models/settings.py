"""Algorithm settings model."""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict

from ..engine.errors import InvalidConfig

MIN_CATEGORIES = 2
MAX_CATEGORIES = 10
MIN_CUSTOM_BASE = 0.1
MAX_CUSTOM_BASE = 20.0

# Fallback base when there is no weight signal; also the default custom base.
DEFAULT_BASE = 2.93

# Stored settings used camelCase field names.
CAMEL_CASE_KEYS = {
    'numCategories': 'num_categories',
    'useCustomBase': 'use_custom_base',
    'customBase': 'custom_base',
    'useHalfWeight': 'use_half_weight',
}


def normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase setting keys to their snake_case names."""
    return {CAMEL_CASE_KEYS.get(key, key): value for key, value in data.items()}


@dataclass(frozen=True)
class AlgorithmConfig:
    """User-tunable parameters of the recommendation algorithm."""

    num_categories: int = 3
    use_custom_base: bool = False
    custom_base: float = DEFAULT_BASE
    use_half_weight: bool = False

    @classmethod
    def field_names(cls) -> tuple:
        """Return the names of all settings."""
        return tuple(cls.__dataclass_fields__)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlgorithmConfig":
        """Build and validate a config, ignoring keys that are not settings."""
        values = normalize_keys(data or {})
        known = {key: values[key] for key in cls.field_names() if key in values}
        config = cls(**known)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise InvalidConfig if any setting is out of range."""
        if isinstance(self.num_categories, bool) or not isinstance(self.num_categories, int):
            raise InvalidConfig(
                f"num_categories must be an integer, got {self.num_categories!r}",
                field='num_categories',
            )
        if not MIN_CATEGORIES <= self.num_categories <= MAX_CATEGORIES:
            raise InvalidConfig(
                f"num_categories must be between {MIN_CATEGORIES} and {MAX_CATEGORIES}",
                field='num_categories',
            )

        for name in ('use_custom_base', 'use_half_weight'):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfig(f"{name} must be a boolean", field=name)

        if isinstance(self.custom_base, bool) or not isinstance(self.custom_base, (int, float)):
            raise InvalidConfig(
                f"custom_base must be a number, got {self.custom_base!r}",
                field='custom_base',
            )
        if not math.isfinite(self.custom_base) or not (
            MIN_CUSTOM_BASE <= self.custom_base <= MAX_CUSTOM_BASE
        ):
            raise InvalidConfig(
                f"custom_base must be between {MIN_CUSTOM_BASE} and {MAX_CUSTOM_BASE}",
                field='custom_base',
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)
