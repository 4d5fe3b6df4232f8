"""Recommendation coordinator."""

import logging
import math
import random
import uuid
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from ..models.settings import AlgorithmConfig
from ..models.task import Task
from ..models.trace import (
    GenerationTrace,
    NumberGeneration,
    Recommendation,
    TaskWeightLine,
    WeightResult,
)
from ..utils.datetime_utils import days_until
from .candidates import filter_candidates
from .distribution import compute_category_distribution
from .sampling import RandomSource, sample_category, sample_task
from .snapshot import build_snapshot, is_snapshot_stale
from .weights import compute_task_weights

logger = logging.getLogger(__name__)

METHOD_NONE = "none"
NO_CANDIDATES_MESSAGE = "No active tasks available for recommendation"


def truncate(value: float, places: int = 3) -> float:
    """Truncate toward negative infinity at the given decimal places."""
    factor = 10 ** places
    return math.floor(value * factor) / factor


class Recommender:
    """Applies the candidate rules and runs the weighting engine."""

    def __init__(
        self,
        config: AlgorithmConfig,
        random_source: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ):
        """Initialize with validated settings and an optional random source.

        A seed builds a private random.Random; an explicit random_source wins
        over the seed.
        """
        config.validate()
        self.config = config
        if random_source is not None:
            self.random_source = random_source
        elif seed is not None:
            self.random_source = random.Random(seed).random
        else:
            self.random_source = random.random

    def weigh(self, tasks: Sequence[Task], today: date) -> Tuple[List[Task], WeightResult]:
        """Filter candidates and compute their weights."""
        candidates = filter_candidates(tasks, today)
        return candidates, compute_task_weights(candidates, today)

    def recommend(
        self,
        tasks: Sequence[Task],
        today: date,
        now: Optional[datetime] = None,
    ) -> Tuple[Recommendation, GenerationTrace]:
        """Recommend one task from the active list."""
        now = now or datetime.now()
        candidates, weights = self.weigh(tasks, today)

        if not candidates:
            logger.info("No candidates among %d tasks, skipping recommendation", len(tasks))
            recommendation = Recommendation(
                task=None,
                method=METHOD_NONE,
                generated_at=now,
                message=NO_CANDIDATES_MESSAGE,
            )
            return recommendation, self._build_trace('recommendation', now, candidates, weights, today, {
                'method': METHOD_NONE,
                'message': NO_CANDIDATES_MESSAGE,
            }, len(tasks))

        draw = sample_task(
            candidates,
            weights.per_task_weight,
            weights.total_weight,
            self.config.use_half_weight,
            self.random_source,
        )
        chosen = next(task for task in candidates if task.task_id == draw.task_id)

        logger.info(
            "Recommended %s via %s (total weight %.4f over %d candidates)",
            chosen.task_id, draw.method, weights.total_weight, len(candidates),
        )

        recommendation = Recommendation(
            task=chosen,
            method=draw.method,
            generated_at=now,
            total_weight=weights.total_weight,
            effective_weight=draw.effective_weight,
            random_value=draw.random_value,
            task_weights=dict(weights.per_task_weight),
        )

        trace = self._build_trace('recommendation', now, candidates, weights, today, {
            'recommended_task': chosen.task_id,
            'title': chosen.title,
            'method': draw.method,
            'effective_weight': draw.effective_weight,
            'random_value': draw.random_value,
        }, len(tasks))

        return recommendation, trace

    def generate_number(
        self,
        tasks: Sequence[Task],
        today: date,
        now: Optional[datetime] = None,
    ) -> Tuple[NumberGeneration, GenerationTrace]:
        """Draw a category number weighted by the current task load."""
        now = now or datetime.now()
        candidates, weights = self.weigh(tasks, today)

        distribution = compute_category_distribution(weights.total_weight, self.config)
        draw = sample_category(distribution, self.config.num_categories, self.random_source)
        snapshot = build_snapshot(self.config, weights.total_weight)

        logger.info(
            "Generated category %d of %d (base %.4f, total weight %.4f)",
            draw.category, self.config.num_categories, distribution.base, weights.total_weight,
        )

        generation = NumberGeneration(
            selected_category=draw.category,
            random_number=truncate(draw.random_value),
            generated_sum=truncate(distribution.sum),
            generated_random_value=truncate(draw.random_value),
            base=distribution.base,
            probabilities=distribution.probabilities,
            generated_at=now,
            snapshot=snapshot,
        )

        trace = self._build_trace('number generation', now, candidates, weights, today, {
            'selected_category': draw.category,
            'base': distribution.base,
            'sum': distribution.sum,
            'random_value': draw.random_value,
            'probabilities': list(distribution.probabilities),
        }, len(tasks))

        return generation, trace

    def is_stale(self, generation: Optional[NumberGeneration], tasks: Sequence[Task], today: date) -> bool:
        """Check a saved generation against the live settings and task weights."""
        _, weights = self.weigh(tasks, today)
        snapshot = generation.snapshot if generation is not None else None
        return is_snapshot_stale(snapshot, self.config, weights.total_weight)

    def _build_trace(
        self,
        kind: str,
        now: datetime,
        candidates: List[Task],
        weights: WeightResult,
        today: date,
        result: dict,
        tasks_total: int,
    ) -> GenerationTrace:
        """Assemble the trace for a run."""
        lines = []
        for task in candidates:
            weight = weights.per_task_weight[task.task_id]
            share = weight / weights.total_weight * 100 if weights.total_weight > 0 else 0.0
            lines.append(TaskWeightLine(
                task_id=task.task_id,
                title=task.title,
                priority=task.priority.value,
                due_in_days=days_until(task.due_date, today) if task.due_date else None,
                weight=weight,
                probability_percent=share,
            ))

        return GenerationTrace(
            run_id=str(uuid.uuid4())[:8],
            timestamp=now,
            kind=kind,
            config=self.config.to_dict(),
            task_weights=lines,
            result=result,
            summary_stats={
                'tasks_total': tasks_total,
                'candidates': len(candidates),
                'excluded': tasks_total - len(candidates),
                'total_weight': weights.total_weight,
                'today': today.isoformat(),
            },
        )
