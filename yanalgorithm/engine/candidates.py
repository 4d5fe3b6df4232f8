"""Candidate selection and schedule maintenance."""

from datetime import date
from typing import Iterable, List

from ..models.task import Task
from ..utils.datetime_utils import is_after_day, is_before_day


def is_candidate(task: Task, today: date) -> bool:
    """Check if a task may be recommended today."""
    if task.completed:
        return False
    # Tasks parked for a later day stay hidden until that day comes
    return not is_after_day(task.scheduled_date, today)


def filter_candidates(tasks: Iterable[Task], today: date) -> List[Task]:
    """Drop completed tasks and tasks scheduled after today, keeping order."""
    return [task for task in tasks if is_candidate(task, today)]


def expired_schedule_ids(tasks: Iterable[Task], today: date) -> List[str]:
    """Ids of tasks whose scheduled day has already passed."""
    return [task.task_id for task in tasks if is_before_day(task.scheduled_date, today)]


def clear_expired_schedules(tasks: Iterable[Task], today: date) -> List[Task]:
    """Return tasks with past scheduled dates cleared."""
    return [
        task.without_schedule() if is_before_day(task.scheduled_date, today) else task
        for task in tasks
    ]
