"""Cheap candidate filters applied before any validator call."""

from jsleak.accuracy.entropy import calculate_shannon_entropy
from jsleak.accuracy.false_positives import is_known_false_positive
from jsleak.accuracy.programming import is_programming_pattern

__all__ = [
    "calculate_shannon_entropy",
    "is_known_false_positive",
    "is_programming_pattern",
]
