"""
Domain models and value objects.

Contains the inputs and results of the binomial series evaluator.
"""

from src.core.domain.series_parameters import (
    SeriesEvaluationResult,
    SeriesParameters,
    TermOrdering,
)

__all__ = [
    "SeriesParameters",
    "SeriesEvaluationResult",
    "TermOrdering",
]
