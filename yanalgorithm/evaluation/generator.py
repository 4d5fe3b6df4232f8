"""Task generator for evaluation and demos."""

import random
from datetime import date, datetime, time, timedelta
from typing import List

from ..models.task import Priority, Task


class TaskGenerator:
    """Generates deterministic task sets for evaluation."""

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.eval_config = self.config.get('evaluation', {})

    def generate_tasks(
        self,
        count: int,
        today: date,
        due_date_range_days: int = 14,
    ) -> List[Task]:
        """Generate a set of tasks with realistic properties."""
        tasks = []
        titles = ['Pay rent', 'Read chapter', 'Call dentist', 'Water plants', 'Write report',
                  'Clean desk', 'Reply to email', 'Plan trip', 'Fix bike', 'Buy groceries']

        for i in range(count):
            task_id = f"task_{i:03d}"

            # Roughly a quarter of tasks have no due date
            if self.random.random() < 0.25:
                due_date = None
            else:
                # Allow overdue tasks as well as future ones
                days_offset = self.random.randint(-due_date_range_days // 2, due_date_range_days)
                due_date = today + timedelta(days=days_offset)

            priority = Priority.HIGH if self.random.random() < 0.3 else Priority.LOW

            # Some tasks are parked for later days
            scheduled_date = None
            if self.random.random() < 0.15:
                scheduled_date = today + timedelta(days=self.random.randint(-3, 5))

            completed = self.random.random() < 0.1

            created_day = today - timedelta(days=self.random.randint(0, 7))

            tasks.append(Task(
                task_id=task_id,
                title=f"{self.random.choice(titles)} #{i}",
                completed=completed,
                priority=priority,
                due_date=due_date,
                scheduled_date=scheduled_date,
                created_at=datetime.combine(created_day, time(9, 0)),
            ))

        return tasks

    def generate_task_stream(
        self,
        today: date,
        task_count: int = None,
        due_date_range_days: int = None,
    ) -> List[Task]:
        """Generate tasks using evaluation settings for any value not given."""
        task_count = task_count or self.eval_config.get('task_count', 20)
        due_date_range_days = due_date_range_days or self.eval_config.get('due_date_range_days', 14)

        return self.generate_tasks(task_count, today, due_date_range_days)
