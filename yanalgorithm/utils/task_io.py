"""Loading and saving task and generation records."""

import json
import logging
from pathlib import Path
from typing import List, Optional

from ..models.task import Task
from ..models.trace import NumberGeneration

logger = logging.getLogger(__name__)


def load_tasks(path: str) -> List[Task]:
    """Load tasks from a JSON array, normalizing legacy priorities."""
    with open(path, 'r') as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"Expected a JSON array of tasks in {path}")

    tasks = [Task.from_dict(record) for record in records]
    logger.debug("Loaded %d tasks from %s", len(tasks), path)
    return tasks


def save_tasks(tasks: List[Task], path: str) -> None:
    """Write tasks as a JSON array."""
    with open(path, 'w') as f:
        json.dump([task.to_dict() for task in tasks], f, indent=2)


def save_generation(generation: NumberGeneration, path: str) -> None:
    """Persist the last generated number and its settings snapshot."""
    with open(path, 'w') as f:
        json.dump(generation.to_dict(), f, indent=2)


def load_generation(path: str) -> Optional[NumberGeneration]:
    """Load a saved generation, or None if nothing was saved yet."""
    if not Path(path).exists():
        return None

    with open(path, 'r') as f:
        return NumberGeneration.from_dict(json.load(f))
