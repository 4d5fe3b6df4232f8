"""Task ingestion and saved-generation file tests."""

from __future__ import annotations

import datetime
import json
import os
import tempfile
import unittest

from yanalgorithm.engine.recommender import Recommender
from yanalgorithm.models.settings import AlgorithmConfig
from yanalgorithm.models.task import Priority, Task, normalize_priority
from yanalgorithm.utils.datetime_utils import parse_day
from yanalgorithm.utils.task_io import load_generation, load_tasks, save_generation, save_tasks


class TestPriorityNormalization(unittest.TestCase):

    def test_legacy_medium_becomes_low(self) -> None:
        self.assertIs(normalize_priority("medium"), Priority.LOW)
        self.assertIs(normalize_priority("MEDIUM"), Priority.LOW)

    def test_known_priorities(self) -> None:
        self.assertIs(normalize_priority("high"), Priority.HIGH)
        self.assertIs(normalize_priority("low"), Priority.LOW)
        self.assertIs(normalize_priority(Priority.HIGH), Priority.HIGH)
        self.assertIs(normalize_priority(None), Priority.LOW)

    def test_unknown_priority_rejected(self) -> None:
        with self.assertRaises(ValueError):
            normalize_priority("urgent")


class TestTaskRecords(unittest.TestCase):

    def test_from_camel_case_record(self) -> None:
        task = Task.from_dict({
            'id': 'abc',
            'text': 'Buy milk',
            'completed': False,
            'priority': 'medium',
            'dueDate': '2024-01-20T00:00:00.000Z',
            'scheduledDate': None,
            'createdAt': '2024-01-10T08:30:00',
        })
        self.assertEqual(task.task_id, 'abc')
        self.assertEqual(task.title, 'Buy milk')
        self.assertIs(task.priority, Priority.LOW)
        self.assertEqual(task.due_date, datetime.date(2024, 1, 20))
        self.assertIsNone(task.scheduled_date)
        self.assertEqual(task.created_at, datetime.datetime(2024, 1, 10, 8, 30))

    def test_record_without_id_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Task.from_dict({'title': 'No id'})

    def test_completed_must_be_boolean(self) -> None:
        with self.assertRaises(ValueError):
            Task.from_dict({'id': '1', 'completed': 'false'})
        with self.assertRaises(ValueError):
            Task.from_dict({'id': '1', 'completed': 1})

    def test_missing_completed_defaults_to_false(self) -> None:
        self.assertFalse(Task.from_dict({'id': '1'}).completed)
        self.assertTrue(Task.from_dict({'id': '1', 'completed': True}).completed)

    def test_parse_day_variants(self) -> None:
        self.assertIsNone(parse_day(None))
        self.assertIsNone(parse_day(''))
        self.assertEqual(parse_day('2024-03-01'), datetime.date(2024, 3, 1))
        self.assertEqual(parse_day('2024-03-01T15:45:00'), datetime.date(2024, 3, 1))
        self.assertEqual(parse_day(datetime.datetime(2024, 3, 1, 23, 0)), datetime.date(2024, 3, 1))


class TestFiles(unittest.TestCase):

    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def path(self, name: str) -> str:
        return os.path.join(self.tmpdir.name, name)

    def test_load_tasks_normalizes_priorities(self) -> None:
        with open(self.path("tasks.json"), 'w') as f:
            json.dump([
                {'id': '1', 'title': 'A', 'priority': 'high', 'dueDate': '2024-01-16'},
                {'id': '2', 'title': 'B', 'priority': 'medium'},
            ], f)

        tasks = load_tasks(self.path("tasks.json"))
        self.assertEqual([t.priority for t in tasks], [Priority.HIGH, Priority.LOW])

    def test_load_tasks_requires_array(self) -> None:
        with open(self.path("tasks.json"), 'w') as f:
            json.dump({'id': '1'}, f)
        with self.assertRaises(ValueError):
            load_tasks(self.path("tasks.json"))

    def test_saved_tasks_load_back(self) -> None:
        tasks = [
            Task(task_id="x", title="X", priority=Priority.HIGH, due_date=datetime.date(2024, 2, 1)),
            Task(task_id="y", title="Y", scheduled_date=datetime.date(2024, 2, 3), completed=True),
        ]
        save_tasks(tasks, self.path("out.json"))
        self.assertEqual(load_tasks(self.path("out.json")), tasks)

    def test_missing_generation_file_is_none(self) -> None:
        self.assertIsNone(load_generation(self.path("missing.json")))

    def test_saved_generation_stays_current(self) -> None:
        today = datetime.date(2024, 1, 15)
        tasks = [Task(task_id="t", due_date=today)]
        recommender = Recommender(AlgorithmConfig(), seed=4)
        generation, _ = recommender.generate_number(tasks, today)

        save_generation(generation, self.path("gen.json"))
        loaded = load_generation(self.path("gen.json"))

        self.assertFalse(recommender.is_stale(loaded, tasks, today))
