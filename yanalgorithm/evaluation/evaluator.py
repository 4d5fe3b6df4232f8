"""Offline evaluation of draw frequencies against theory."""

import json
import logging
import random
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..engine.candidates import filter_candidates
from ..engine.distribution import compute_category_distribution
from ..engine.sampling import draw_weighted_category, draw_weighted_task
from ..engine.weights import compute_task_weights
from ..models.settings import AlgorithmConfig
from ..models.task import Task
from ..utils.config import get_algorithm_config
from .generator import TaskGenerator

logger = logging.getLogger(__name__)


class FrequencyReport:
    """Expected versus observed outcome shares for one kind of draw."""

    def __init__(self, name: str, trials: int):
        self.name = name
        self.trials = trials
        self.expected_percent: Dict[str, float] = {}
        self.observed_counts: Dict[str, int] = {}

    def observed_percent(self, outcome: str) -> float:
        if self.trials == 0:
            return 0.0
        return self.observed_counts.get(outcome, 0) / self.trials * 100

    @property
    def max_deviation(self) -> float:
        """Largest absolute gap in percentage points."""
        if not self.expected_percent:
            return 0.0
        return max(
            abs(self.observed_percent(outcome) - expected)
            for outcome, expected in self.expected_percent.items()
        )

    @property
    def chi_squared(self) -> float:
        """Pearson chi-squared statistic over outcomes with non-zero expectation."""
        statistic = 0.0
        for outcome, expected in self.expected_percent.items():
            expected_count = expected / 100 * self.trials
            if expected_count <= 0:
                continue
            observed = self.observed_counts.get(outcome, 0)
            statistic += (observed - expected_count) ** 2 / expected_count
        return statistic

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON export."""
        return {
            'name': self.name,
            'trials': self.trials,
            'max_deviation_percent': self.max_deviation,
            'chi_squared': self.chi_squared,
            'degrees_of_freedom': max(0, len(self.expected_percent) - 1),
            'outcomes': [
                {
                    'outcome': outcome,
                    'expected_percent': expected,
                    'observed_percent': self.observed_percent(outcome),
                }
                for outcome, expected in self.expected_percent.items()
            ],
        }


class Evaluator:
    """Runs repeated draws and compares them with the theoretical distribution."""

    def __init__(self, config: dict):
        """Initialize evaluator with configuration."""
        self.config = config
        self.eval_config = config.get('evaluation', {})
        self.seed = self.eval_config.get('seed', 42)
        self.generator = TaskGenerator(seed=self.seed, config=config)

    def evaluate_tasks(
        self,
        tasks: Sequence[Task],
        today: date,
        algorithm: AlgorithmConfig,
        trials: int,
    ) -> FrequencyReport:
        """Draw tasks repeatedly and tally how often each one wins."""
        report = FrequencyReport('task_draw', trials)
        candidates = filter_candidates(tasks, today)
        if not candidates:
            return report

        weights = compute_task_weights(candidates, today)
        for task in candidates:
            report.expected_percent[task.task_id] = (
                weights.per_task_weight[task.task_id] / weights.total_weight * 100
            )

        rng = random.Random(self.seed)
        for _ in range(trials):
            task_id = draw_weighted_task(
                candidates,
                weights.per_task_weight,
                weights.total_weight,
                algorithm.use_half_weight,
                rng.random,
            )
            report.observed_counts[task_id] = report.observed_counts.get(task_id, 0) + 1

        return report

    def evaluate_categories(
        self,
        total_weight: float,
        algorithm: AlgorithmConfig,
        trials: int,
    ) -> FrequencyReport:
        """Draw categories repeatedly and tally each category."""
        report = FrequencyReport('category_draw', trials)
        distribution = compute_category_distribution(total_weight, algorithm)
        for i, probability in enumerate(distribution.probabilities):
            report.expected_percent[str(i + 1)] = probability

        rng = random.Random(self.seed)
        for _ in range(trials):
            category = str(draw_weighted_category(distribution, algorithm.num_categories, rng.random))
            report.observed_counts[category] = report.observed_counts.get(category, 0) + 1

        return report

    def run_evaluation(
        self,
        today: date,
        tasks: Optional[List[Task]] = None,
        output_dir: Optional[str] = "results",
    ) -> Dict[str, FrequencyReport]:
        """Run the full evaluation and optionally save the report."""
        algorithm = get_algorithm_config(self.config)
        trials = self.eval_config.get('trials', 100000)

        if tasks is None:
            tasks = self.generator.generate_task_stream(today)

        task_report = self.evaluate_tasks(tasks, today, algorithm, trials)
        total_weight = compute_task_weights(filter_candidates(tasks, today), today).total_weight
        category_report = self.evaluate_categories(total_weight, algorithm, trials)

        reports = {'tasks': task_report, 'categories': category_report}
        logger.info(
            "Evaluation finished: task deviation %.3f pp, category deviation %.3f pp",
            task_report.max_deviation, category_report.max_deviation,
        )

        if output_dir:
            output_path = Path(output_dir)
            output_path.mkdir(exist_ok=True)

            with open(output_path / 'evaluation_results.json', 'w') as f:
                json.dump(
                    {
                        'algorithm': algorithm.to_dict(),
                        'today': today.isoformat(),
                        'total_weight': total_weight,
                        'reports': {key: report.to_dict() for key, report in reports.items()},
                    },
                    f,
                    indent=2,
                )

        return reports

    def print_summary(self, reports: Dict[str, FrequencyReport]):
        """Print comparison report."""
        print("\n" + "=" * 70)
        print("DRAW FREQUENCY EVALUATION")
        print("=" * 70)

        for report in reports.values():
            print(f"\n{report.name} ({report.trials} trials)")
            print(f"{'Outcome':<20} {'Expected (%)':<15} {'Observed (%)':<15}")
            print("-" * 70)
            for outcome, expected in report.expected_percent.items():
                print(f"{outcome:<20} {expected:<15.3f} {report.observed_percent(outcome):<15.3f}")
            print(f"Max deviation: {report.max_deviation:.3f} pp, chi-squared: {report.chi_squared:.3f}")

        print("\n" + "=" * 70)
