"""Result and trace models for recommendation runs."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .task import Task, require_bool


@dataclass(frozen=True)
class WeightResult:
    """Per-task weights and their sum."""

    per_task_weight: Dict[str, float]
    total_weight: float


@dataclass(frozen=True)
class CategoryDistribution:
    """Exponential category distribution for one base."""

    base: float
    terms: Tuple[float, ...]
    sum: float
    probabilities: Tuple[float, ...]

    @property
    def num_categories(self) -> int:
        return len(self.terms)


@dataclass(frozen=True)
class AlgorithmSnapshot:
    """Settings and effective base captured when a number was generated."""

    num_categories: int
    use_custom_base: bool
    custom_base: float
    use_half_weight: bool
    effective_base: float
    total_weight: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlgorithmSnapshot":
        """Load a snapshot saved in snake_case or camelCase form."""
        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        try:
            return cls(
                num_categories=int(pick('num_categories', 'numCategories')),
                use_custom_base=require_bool(pick('use_custom_base', 'useCustomBase'), 'use_custom_base'),
                custom_base=float(pick('custom_base', 'customBase')),
                use_half_weight=require_bool(pick('use_half_weight', 'useHalfWeight'), 'use_half_weight'),
                effective_base=float(pick('effective_base', 'effectiveBase')),
                total_weight=pick('total_weight', 'totalWeight'),
            )
        except TypeError:
            raise ValueError(f"Incomplete algorithm snapshot: {data!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert snapshot to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class Recommendation:
    """A recommended task, or the reason there is none."""

    task: Optional[Task]
    method: str
    generated_at: datetime
    total_weight: float = 0.0
    effective_weight: float = 0.0
    random_value: Optional[float] = None
    task_weights: Dict[str, float] = field(default_factory=dict)
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert recommendation to dictionary for JSON export."""
        return {
            'recommendation': self.task.to_dict() if self.task else None,
            'method': self.method,
            'total_weight': self.total_weight,
            'effective_weight': self.effective_weight,
            'random_value': self.random_value,
            'task_weights': dict(self.task_weights),
            'generated_at': self.generated_at.isoformat(),
            'message': self.message,
        }


@dataclass(frozen=True)
class NumberGeneration:
    """A drawn category number with the values that produced it."""

    selected_category: int
    random_number: float
    generated_sum: float
    generated_random_value: float
    base: float
    probabilities: Tuple[float, ...]
    generated_at: datetime
    snapshot: AlgorithmSnapshot

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NumberGeneration":
        """Load a saved generation."""
        try:
            return cls(
                selected_category=int(data['selected_category']),
                random_number=float(data['random_number']),
                generated_sum=float(data['generated_sum']),
                generated_random_value=float(data['generated_random_value']),
                base=float(data['base']),
                probabilities=tuple(data.get('probabilities', ())),
                generated_at=datetime.fromisoformat(data['generated_at']),
                snapshot=AlgorithmSnapshot.from_dict(data['snapshot']),
            )
        except (KeyError, TypeError):
            raise ValueError(f"Incomplete saved generation: {data!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert generation to dictionary for JSON export."""
        return {
            'selected_category': self.selected_category,
            'random_number': self.random_number,
            'generated_sum': self.generated_sum,
            'generated_random_value': self.generated_random_value,
            'base': self.base,
            'probabilities': list(self.probabilities),
            'generated_at': self.generated_at.isoformat(),
            'snapshot': self.snapshot.to_dict(),
        }


@dataclass
class TaskWeightLine:
    """Weight details for one task in a trace."""

    task_id: str
    title: str
    priority: str
    due_in_days: Optional[int]
    weight: float
    probability_percent: float


@dataclass
class GenerationTrace:
    """Complete trace of a recommendation or number generation run."""

    run_id: str
    timestamp: datetime
    kind: str
    config: Dict[str, Any]
    task_weights: List[TaskWeightLine]
    result: Dict[str, Any]
    summary_stats: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Convert trace to dictionary for JSON export."""
        return asdict(self)

    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        lines = [
            f"=== {self.kind.title()} Run: {self.run_id} ===",
            f"Timestamp: {self.timestamp}",
            "",
            "Configuration:",
        ]

        for key, value in self.config.items():
            lines.append(f"  {key}: {value}")

        lines.extend([
            "",
            "Task Weights:",
        ])

        for line in self.task_weights:
            due = "no due date" if line.due_in_days is None else f"due in {line.due_in_days} days"
            lines.append(f"  {line.task_id} ({line.priority}, {due}): {line.title}")
            lines.append(f"    Weight: {line.weight:.4f} ({line.probability_percent:.2f}%)")

        lines.extend([
            "",
            "Result:",
        ])

        for key, value in self.result.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(f"{v:.2f}" if isinstance(v, float) else str(v) for v in value)
            lines.append(f"  {key}: {value}")

        lines.extend([
            "",
            "Summary Statistics:",
        ])

        for key, value in self.summary_stats.items():
            lines.append(f"  {key}: {value}")

        lines.append("=" * 50)

        return "\n".join(lines)
