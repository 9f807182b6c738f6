"""Evaluation of Rill expression trees."""

from rill.evaluation.evaluator import evaluate

__all__ = ["evaluate"]
