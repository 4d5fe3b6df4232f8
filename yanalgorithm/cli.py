"""Command line interface for the YanAlgorithm task recommender."""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

import yaml

from .engine.errors import YanAlgorithmError
from .engine.recommender import Recommender
from .evaluation.evaluator import Evaluator
from .evaluation.generator import TaskGenerator
from .utils.config import load_config, get_default_config, get_algorithm_config
from .utils.datetime_utils import parse_day
from .utils.task_io import load_tasks, save_tasks, save_generation, load_generation

logger = logging.getLogger(__name__)

RESULTS_DIR = Path("results")
GENERATION_FILE = RESULTS_DIR / "last_generation.json"
DEFAULT_CONFIG_PATH = "config.yaml"


def resolve_config(config_path: str) -> dict:
    """Load the config file; only a missing default config.yaml falls back to defaults."""
    if config_path == DEFAULT_CONFIG_PATH and not Path(config_path).exists():
        logger.debug("Config file %s not found, using defaults", config_path)
        return get_default_config()
    return load_config(config_path)


def generator_seed(args, config: dict) -> int:
    """Seed for synthetic tasks: --seed if given, else the evaluation seed."""
    if args.seed is not None:
        return args.seed
    return config.get('evaluation', {}).get('seed', 42)


def resolve_tasks(args, config: dict, today: date):
    """Load tasks from --tasks, or generate a seeded set."""
    if args.tasks:
        return load_tasks(args.tasks)
    generator = TaskGenerator(seed=generator_seed(args, config), config=config)
    return generator.generate_task_stream(today)


def save_trace(trace):
    """Write the JSON trace and its human-readable log."""
    trace_path = RESULTS_DIR / f"trace_{trace.run_id}.json"
    with open(trace_path, 'w') as f:
        json.dump(trace.to_dict(), f, indent=2, default=str)

    log_path = RESULTS_DIR / f"trace_{trace.run_id}.log"
    with open(log_path, 'w') as f:
        f.write(trace.to_human_readable())

    print(f"Trace saved to: {trace_path}")
    print(f"Human-readable log saved to: {log_path}")


def run_recommend(args, config: dict, today: date):
    """Recommend one task."""
    recommender = Recommender(get_algorithm_config(config), seed=args.seed)
    tasks = resolve_tasks(args, config, today)

    recommendation, trace = recommender.recommend(tasks, today)

    if recommendation.task is None:
        print(f"\n{recommendation.message}")
    else:
        print(f"\nRecommended task: {recommendation.task.title} ({recommendation.task.task_id})")
        print(f"Method: {recommendation.method}")
        print(f"Total weight: {recommendation.total_weight:.4f}")

    save_trace(trace)
    return recommendation


def run_generate_number(args, config: dict, today: date):
    """Draw a category number and save it with its settings snapshot."""
    recommender = Recommender(get_algorithm_config(config), seed=args.seed)
    tasks = resolve_tasks(args, config, today)

    generation, trace = recommender.generate_number(tasks, today)

    print(f"\nSelected category: {generation.selected_category}")
    print(f"Base: {generation.base:.4f}")
    for i, probability in enumerate(generation.probabilities):
        print(f"  Category {i + 1}: {probability:.2f}%")

    save_generation(generation, str(GENERATION_FILE))
    print(f"Generation saved to: {GENERATION_FILE}")
    save_trace(trace)
    return generation


def run_check_snapshot(args, config: dict, today: date) -> bool:
    """Report whether the saved generation still matches live settings."""
    recommender = Recommender(get_algorithm_config(config), seed=args.seed)
    tasks = resolve_tasks(args, config, today)

    generation = load_generation(str(GENERATION_FILE))
    stale = recommender.is_stale(generation, tasks, today)

    if generation is None:
        print("\nNo saved generation found")
    elif stale:
        print(f"\nSaved generation from {generation.generated_at} is stale")
    else:
        print(f"\nSaved generation from {generation.generated_at} is current "
              f"(category {generation.selected_category})")
    return stale


def run_evaluation(args, config: dict, today: date):
    """Run the draw frequency evaluation."""
    if args.seed is not None:
        config.setdefault('evaluation', {})['seed'] = args.seed
    evaluator = Evaluator(config)
    tasks = load_tasks(args.tasks) if args.tasks else None

    reports = evaluator.run_evaluation(today, tasks=tasks, output_dir=str(RESULTS_DIR))
    evaluator.print_summary(reports)

    print(f"\nEvaluation saved to: {RESULTS_DIR / 'evaluation_results.json'}")
    return reports


def run_generate_tasks(args, config: dict, today: date):
    """Write a seeded synthetic task set."""
    generator = TaskGenerator(seed=generator_seed(args, config), config=config)
    tasks = generator.generate_task_stream(today)

    output = RESULTS_DIR / "generated_tasks.json"
    save_tasks(tasks, str(output))

    print(f"Generated {len(tasks)} tasks")
    print(f"Tasks saved to: {output}")
    return tasks


COMMANDS = {
    'recommend': run_recommend,
    'generate-number': run_generate_number,
    'check-snapshot': run_check_snapshot,
    'evaluate': run_evaluation,
    'generate-tasks': run_generate_tasks,
}


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="YanAlgorithm weighted task recommender"
    )
    parser.add_argument(
        'command',
        choices=list(COMMANDS),
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--tasks',
        type=str,
        default=None,
        help='JSON file with tasks (default: generate a seeded task set)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducible draws (default: unseeded draws)'
    )
    parser.add_argument(
        '--today',
        type=str,
        default=None,
        help='Reference date as YYYY-MM-DD (default: current date)'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Logging level (default: from config, else INFO)'
    )

    args = parser.parse_args(argv)

    try:
        config = resolve_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 2

    level = args.log_level or config.get('logging', {}).get('level', 'INFO')
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Create results directory
    RESULTS_DIR.mkdir(exist_ok=True)

    try:
        today = parse_day(args.today) if args.today else date.today()
        COMMANDS[args.command](args, config, today)
    except YanAlgorithmError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0
