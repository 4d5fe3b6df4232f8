"""
Recommender Tests
=================

End-to-end runs through the Recommender: candidate filtering,
recommendation records, number generation and saved-generation checks.
"""

from __future__ import annotations

import datetime
import json
import unittest
from dataclasses import replace

from yanalgorithm.engine.errors import InvalidConfig
from yanalgorithm.engine.recommender import METHOD_NONE, NO_CANDIDATES_MESSAGE, Recommender, truncate
from yanalgorithm.engine.sampling import METHOD_WEIGHTED
from yanalgorithm.models.settings import AlgorithmConfig
from yanalgorithm.models.task import Priority, Task
from yanalgorithm.models.trace import NumberGeneration


TODAY = datetime.date(2024, 1, 15)
NOW = datetime.datetime(2024, 1, 15, 12, 0)


def sample_tasks():
    return [
        Task(task_id="overdue", title="Pay bill", due_date=TODAY - datetime.timedelta(days=3)),
        Task(task_id="soon", title="Report", priority=Priority.HIGH,
             due_date=TODAY + datetime.timedelta(days=2)),
        Task(task_id="someday", title="Clean garage"),
        Task(task_id="done", title="Done already", completed=True),
        Task(task_id="parked", title="Later", scheduled_date=TODAY + datetime.timedelta(days=4)),
    ]


class TestRecommend(unittest.TestCase):

    def setUp(self) -> None:
        self.config = AlgorithmConfig()
        self.tasks = sample_tasks()

    def test_no_candidates_returns_empty_recommendation(self) -> None:
        recommender = Recommender(self.config, seed=1)
        tasks = [Task(task_id="done", completed=True)]

        recommendation, trace = recommender.recommend(tasks, TODAY, now=NOW)

        self.assertIsNone(recommendation.task)
        self.assertEqual(recommendation.method, METHOD_NONE)
        self.assertEqual(recommendation.message, NO_CANDIDATES_MESSAGE)
        self.assertEqual(trace.summary_stats['candidates'], 0)

    def test_only_candidates_are_weighted(self) -> None:
        recommendation, _ = Recommender(self.config, seed=1).recommend(self.tasks, TODAY, now=NOW)

        self.assertEqual(set(recommendation.task_weights), {"overdue", "soon", "someday"})
        self.assertIn(recommendation.task.task_id, {"overdue", "soon", "someday"})
        self.assertAlmostEqual(recommendation.total_weight, 5.0 + 1.0 + 1 / 7)
        self.assertEqual(recommendation.method, METHOD_WEIGHTED)

    def test_scripted_draw_picks_expected_task(self) -> None:
        # Weights in order: overdue 5.0, soon 1.0, someday 1/7
        recommender = Recommender(self.config, random_source=lambda: 0.9)
        recommendation, _ = recommender.recommend(self.tasks, TODAY, now=NOW)

        self.assertEqual(recommendation.task.task_id, "soon")
        self.assertAlmostEqual(recommendation.random_value, 0.9 * recommendation.total_weight)

    def test_half_weight_reports_halved_effective_weight(self) -> None:
        config = AlgorithmConfig(use_half_weight=True)
        recommendation, _ = Recommender(config, seed=3).recommend(self.tasks, TODAY, now=NOW)
        self.assertAlmostEqual(recommendation.effective_weight, recommendation.total_weight / 2)

    def test_same_seed_same_recommendation(self) -> None:
        first, _ = Recommender(self.config, seed=7).recommend(self.tasks, TODAY, now=NOW)
        second, _ = Recommender(self.config, seed=7).recommend(self.tasks, TODAY, now=NOW)
        self.assertEqual(first, second)

    def test_single_candidate_is_always_chosen(self) -> None:
        tasks = [Task(task_id="only", title="Only one")]
        recommender = Recommender(self.config, seed=11)
        for _ in range(20):
            recommendation, _ = recommender.recommend(tasks, TODAY, now=NOW)
            self.assertEqual(recommendation.task.task_id, "only")

    def test_invalid_config_rejected_up_front(self) -> None:
        with self.assertRaises(InvalidConfig):
            Recommender(AlgorithmConfig(num_categories=12))

    def test_recommendation_is_json_serializable(self) -> None:
        recommendation, trace = Recommender(self.config, seed=5).recommend(self.tasks, TODAY, now=NOW)
        payload = json.loads(json.dumps(recommendation.to_dict()))
        self.assertEqual(payload['generated_at'], NOW.isoformat())
        json.dumps(trace.to_dict(), default=str)

    def test_trace_lists_candidate_weights(self) -> None:
        _, trace = Recommender(self.config, seed=5).recommend(self.tasks, TODAY, now=NOW)

        self.assertEqual([line.task_id for line in trace.task_weights], ["overdue", "soon", "someday"])
        self.assertAlmostEqual(sum(line.probability_percent for line in trace.task_weights), 100.0)
        self.assertEqual(trace.summary_stats['excluded'], 2)

        text = trace.to_human_readable()
        self.assertIn(trace.run_id, text)
        self.assertIn("Pay bill", text)
        self.assertIn("due in -3 days", text)


class TestGenerateNumber(unittest.TestCase):

    def setUp(self) -> None:
        self.config = AlgorithmConfig(num_categories=3)
        self.tasks = sample_tasks()

    def test_generation_uses_task_weight_as_base(self) -> None:
        generation, _ = Recommender(self.config, seed=1).generate_number(self.tasks, TODAY, now=NOW)

        expected_base = 5.0 + 1.0 + 1 / 7
        self.assertAlmostEqual(generation.base, expected_base)
        self.assertAlmostEqual(generation.snapshot.effective_base, expected_base)
        self.assertIn(generation.selected_category, (1, 2, 3))
        self.assertAlmostEqual(sum(generation.probabilities), 100.0)

    def test_no_tasks_fall_back_to_default_base(self) -> None:
        generation, _ = Recommender(self.config, seed=1).generate_number([], TODAY, now=NOW)
        self.assertEqual(generation.base, 2.93)
        self.assertEqual(generation.generated_sum, truncate(2.93 + 2.93 ** 2 + 2.93 ** 3))

    def test_values_are_truncated_to_three_places(self) -> None:
        recommender = Recommender(self.config, random_source=lambda: 0.123456789)
        generation, trace = recommender.generate_number([], TODAY, now=NOW)

        raw = trace.result['random_value']
        self.assertEqual(generation.random_number, truncate(raw))
        self.assertEqual(generation.generated_random_value, generation.random_number)
        self.assertLessEqual(generation.random_number, raw)
        self.assertLess(raw - generation.random_number, 0.001)

    def test_truncate_rounds_down(self) -> None:
        self.assertEqual(truncate(1.23456), 1.234)
        self.assertEqual(truncate(36.6686), 36.668)

    def test_fresh_generation_is_not_stale(self) -> None:
        recommender = Recommender(self.config, seed=1)
        generation, _ = recommender.generate_number(self.tasks, TODAY, now=NOW)
        self.assertFalse(recommender.is_stale(generation, self.tasks, TODAY))

    def test_generation_goes_stale_after_settings_change(self) -> None:
        generation, _ = Recommender(self.config, seed=1).generate_number(self.tasks, TODAY, now=NOW)
        changed = Recommender(replace(self.config, num_categories=4), seed=1)
        self.assertTrue(changed.is_stale(generation, self.tasks, TODAY))

    def test_generation_goes_stale_when_tasks_change(self) -> None:
        recommender = Recommender(self.config, seed=1)
        generation, _ = recommender.generate_number(self.tasks, TODAY, now=NOW)
        fewer = [task for task in self.tasks if task.task_id != "overdue"]
        self.assertTrue(recommender.is_stale(generation, fewer, TODAY))

    def test_missing_generation_is_stale(self) -> None:
        self.assertTrue(Recommender(self.config).is_stale(None, self.tasks, TODAY))

    def test_generation_survives_json(self) -> None:
        generation, _ = Recommender(self.config, seed=1).generate_number(self.tasks, TODAY, now=NOW)
        loaded = NumberGeneration.from_dict(json.loads(json.dumps(generation.to_dict())))

        self.assertEqual(loaded.snapshot, generation.snapshot)
        self.assertEqual(loaded.selected_category, generation.selected_category)
        self.assertEqual(loaded.generated_at, NOW)
