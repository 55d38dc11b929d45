"""Host project adapters: descriptor loading, POM reading, property evaluation."""

from graalbuild.project.descriptor import load_project
from graalbuild.project.evaluator import ExpressionEvaluationError, PropertyEvaluator
from graalbuild.project.pom import PomInfo, PomReader

__all__ = [
    "load_project",
    "ExpressionEvaluationError",
    "PropertyEvaluator",
    "PomInfo",
    "PomReader",
]
