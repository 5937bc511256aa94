"""Binomial series evaluator: recurrence engine, accumulator and precision tooling.

(1 + 1/x)^(a/b) · k as a truncated Maclaurin series in fixed-width unsigned
integer arithmetic.
"""

from .accumulator import SeriesAccumulator, is_added, is_added_at_step
from .evaluator import (
    ORDERING_DIVERGENCE_PER_STEP,
    BinomialSeriesEvaluator,
    SeriesDomainViolation,
    SeriesEvaluatorConfig,
    evaluate,
    ordering_divergence_bound,
)
from .literal import evaluate_literal, literal_term
from .precision_analysis import (
    PRECISION_SEARCH_LIMIT,
    REFERENCE_DIGITS_3_2_POW_250_365,
    OrderingComparison,
    compare_orderings,
    count_correct_digits,
    find_overflow_boundary,
    precision_sweep,
)
from .recurrence import RecurrenceEngine
from .special_cases import SPECIAL_CASE_MAX_PRECISION, evaluate_special_case

__all__ = [
    # Evaluator
    "ORDERING_DIVERGENCE_PER_STEP",
    "BinomialSeriesEvaluator",
    "SeriesDomainViolation",
    "SeriesEvaluatorConfig",
    "evaluate",
    "ordering_divergence_bound",
    # Components
    "RecurrenceEngine",
    "SeriesAccumulator",
    "is_added",
    "is_added_at_step",
    "SPECIAL_CASE_MAX_PRECISION",
    "evaluate_special_case",
    # Baseline
    "evaluate_literal",
    "literal_term",
    # Precision analysis
    "PRECISION_SEARCH_LIMIT",
    "REFERENCE_DIGITS_3_2_POW_250_365",
    "OrderingComparison",
    "compare_orderings",
    "count_correct_digits",
    "find_overflow_boundary",
    "precision_sweep",
]
