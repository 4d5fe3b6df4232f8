"""Weighted random draws over tasks and categories."""

import logging
import math
import random
from typing import Callable, Mapping, NamedTuple, Optional, Sequence

from ..models.task import Task
from ..models.trace import CategoryDistribution
from .errors import EmptyCandidateSet

logger = logging.getLogger(__name__)

# Returns uniform floats in [0, 1)
RandomSource = Callable[[], float]

METHOD_WEIGHTED = "weighted_random"
METHOD_UNIFORM_FALLBACK = "random_fallback"


class TaskDraw(NamedTuple):
    """Outcome of one task draw."""

    task_id: str
    method: str
    effective_weight: float
    random_value: Optional[float]


class CategoryDraw(NamedTuple):
    """Outcome of one category draw."""

    category: int
    random_value: float


def sample_task(
    candidates: Sequence[Task],
    per_task_weight: Mapping[str, float],
    total_weight: float,
    use_half_weight: bool = False,
    random_source: RandomSource = random.random,
) -> TaskDraw:
    """Draw a task and report how it was drawn."""
    if not candidates:
        raise EmptyCandidateSet("Cannot draw a task from an empty candidate set")

    if total_weight <= 0:
        index = math.floor(random_source() * len(candidates))
        logger.debug("No task weight, uniform pick at index %d", index)
        return TaskDraw(candidates[index].task_id, METHOD_UNIFORM_FALLBACK, 0.0, None)

    effective_weight = total_weight / 2 if use_half_weight else total_weight
    random_value = random_source() * effective_weight

    cumulative = 0.0
    for task in candidates:
        weight = per_task_weight[task.task_id]
        cumulative += weight / 2 if use_half_weight else weight
        if random_value < cumulative:
            return TaskDraw(task.task_id, METHOD_WEIGHTED, effective_weight, random_value)

    logger.debug(
        "Cumulative walk missed r=%r (cumulative=%r), using first candidate",
        random_value, cumulative,
    )
    return TaskDraw(candidates[0].task_id, METHOD_WEIGHTED, effective_weight, random_value)


def draw_weighted_task(
    candidates: Sequence[Task],
    per_task_weight: Mapping[str, float],
    total_weight: float,
    use_half_weight: bool = False,
    random_source: RandomSource = random.random,
) -> str:
    """Pick one task id with probability proportional to its weight.

    Falls back to a uniform pick when there is no weight at all, and to the
    first candidate if rounding lets the cumulative walk end without a hit.
    Raises EmptyCandidateSet when there is nothing to pick from.
    """
    draw = sample_task(candidates, per_task_weight, total_weight, use_half_weight, random_source)
    return draw.task_id


def sample_category(
    distribution: CategoryDistribution,
    num_categories: int,
    random_source: RandomSource = random.random,
) -> CategoryDraw:
    """Draw a category and keep the random value that chose it."""
    random_value = random_source() * distribution.sum

    cumulative = 0.0
    for i in range(num_categories):
        cumulative += distribution.terms[i]
        if random_value < cumulative:
            return CategoryDraw(i + 1, random_value)

    logger.debug("Cumulative walk missed r=%r, using category 1", random_value)
    return CategoryDraw(1, random_value)


def draw_weighted_category(
    distribution: CategoryDistribution,
    num_categories: int,
    random_source: RandomSource = random.random,
) -> int:
    """Pick a 1-based category number proportional to its base^(i+1) term."""
    return sample_category(distribution, num_categories, random_source).category
