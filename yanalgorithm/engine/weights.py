"""Per-task urgency weights."""

from datetime import date
from typing import Dict, Iterable

from ..models.task import Priority, Task
from ..models.trace import WeightResult
from ..utils.datetime_utils import days_until

# A task without a due date weighs the same as one due in a week.
NO_DUE_DATE_DAYS = 7

PRIORITY_MULTIPLIERS: Dict[Priority, float] = {
    Priority.LOW: 1.0,
    Priority.HIGH: 2.0,
}


def effective_days(days_difference: int) -> float:
    """Map a signed day distance to a strictly positive day count.

    Future tasks use the distance itself. Tasks due today or overdue get
    1 / (overdue_days + 2): 0.5 today, 1/3 one day late, shrinking toward
    zero the longer they stay open.
    """
    if days_difference > 0:
        return float(days_difference)
    return 1 / (-days_difference + 2)


def task_weight(task: Task, today: date) -> float:
    """Compute the weight of a single task."""
    if task.due_date is not None:
        weight = 1 / effective_days(days_until(task.due_date, today))
    else:
        weight = 1 / NO_DUE_DATE_DAYS

    return weight * PRIORITY_MULTIPLIERS[task.priority]


def compute_task_weights(tasks: Iterable[Task], today: date) -> WeightResult:
    """Weigh every candidate task.

    The caller is expected to have filtered the list already
    (see filter_candidates).
    """
    per_task_weight: Dict[str, float] = {}
    total_weight = 0.0

    for task in tasks:
        weight = task_weight(task, today)
        per_task_weight[task.task_id] = weight
        total_weight += weight

    return WeightResult(per_task_weight=per_task_weight, total_weight=total_weight)
