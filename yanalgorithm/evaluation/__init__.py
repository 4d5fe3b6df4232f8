"""Evaluation and simulation modules."""

from .generator import TaskGenerator
from .evaluator import Evaluator, FrequencyReport

__all__ = ['TaskGenerator', 'Evaluator', 'FrequencyReport']
