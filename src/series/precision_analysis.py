"""
Precision Analysis — сравнение orderings и границы переполнения

Инструменты оценки точности evaluator:
- count_correct_digits: число совпадающих ведущих цифр с эталонным значением
- compare_orderings: результаты двух конфигураций на одних входах и их разница
- find_overflow_boundary: максимальная precision без ArithmeticOverflow
- precision_sweep: сравнение по диапазону precision

Эталон для (3/2)^(250/365) · 10**18 хранится как строка цифр:
вычисление с произвольной точностью в задачи модуля не входит.
"""

from dataclasses import dataclass, replace
from typing import Final, Iterable

from src.core.domain.series_parameters import SeriesParameters, TermOrdering
from src.core.math.fixed_width import ArithmeticOverflow
from src.series.evaluator import (
    BinomialSeriesEvaluator,
    SeriesEvaluatorConfig,
    ordering_divergence_bound,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Цифры (1 + 1/2)^(250/365) без десятичной точки
REFERENCE_DIGITS_3_2_POW_250_365: Final[str] = (
    "13201110046196193717850777704475865296594774744103490246734003641"
)

# Верхняя граница поиска precision: поле precision в упакованном слове занимает 16 бит
PRECISION_SEARCH_LIMIT: Final[int] = (1 << 16) - 1


# =============================================================================
# CORRECT DIGITS
# =============================================================================


def count_correct_digits(result: int, reference_digits: str) -> int:
    """
    Длина общего префикса десятичной записи result и эталонных цифр.

    Args:
        result: Значение ряда (масштабированное)
        reference_digits: Эталонные цифры без точки и знака

    Returns:
        Количество совпавших ведущих цифр

    Examples:
        >>> count_correct_digits(1320111004140914335, REFERENCE_DIGITS_3_2_POW_250_365)
        10
    """
    if not reference_digits.isdigit():
        raise ValueError(f"reference_digits must contain only digits, got {reference_digits!r}")

    digits = str(result)
    matched = 0
    for got, expected in zip(digits, reference_digits):
        if got != expected:
            break
        matched += 1
    return matched


# =============================================================================
# ORDERING COMPARISON
# =============================================================================


@dataclass(frozen=True)
class OrderingComparison:
    """Результат сравнения двух конфигураций на одних входах.

    None в результате означает ArithmeticOverflow на этой стороне.
    """

    params: SeriesParameters
    baseline_ordering: TermOrdering
    candidate_ordering: TermOrdering
    baseline_result: int | None
    candidate_result: int | None
    tolerance: int

    @property
    def both_succeeded(self) -> bool:
        return self.baseline_result is not None and self.candidate_result is not None

    @property
    def difference(self) -> int | None:
        """candidate − baseline (None, если одна из сторон переполнилась)."""
        if not self.both_succeeded:
            return None
        return self.candidate_result - self.baseline_result

    @property
    def within_tolerance(self) -> bool:
        diff = self.difference
        return diff is not None and abs(diff) <= self.tolerance


def _evaluate_or_none(evaluator: BinomialSeriesEvaluator, params: SeriesParameters) -> int | None:
    try:
        return evaluator.evaluate(params)
    except ArithmeticOverflow:
        return None


def compare_orderings(
    params: SeriesParameters,
    baseline: TermOrdering = TermOrdering.NUMERATOR_DENOMINATOR_SEPARATE,
    candidate: TermOrdering = TermOrdering.FUSED_DIVIDE_THEN_MULTIPLY,
    config: SeriesEvaluatorConfig | None = None,
    tolerance: int | None = None,
) -> OrderingComparison:
    """
    Вычисление params двумя orderings при прочих равных настройках.

    tolerance по умолчанию: ordering_divergence_bound(params.precision).

    ArithmeticOverflow фиксируется в результате как None. Остальные ошибки
    (DivisionByZero, SeriesDomainViolation) пробрасываются: они не зависят
    от ordering.
    """
    base_config = config or SeriesEvaluatorConfig()
    baseline_evaluator = BinomialSeriesEvaluator(replace(base_config, ordering=baseline))
    candidate_evaluator = BinomialSeriesEvaluator(replace(base_config, ordering=candidate))

    return OrderingComparison(
        params=params,
        baseline_ordering=baseline,
        candidate_ordering=candidate,
        baseline_result=_evaluate_or_none(baseline_evaluator, params),
        candidate_result=_evaluate_or_none(candidate_evaluator, params),
        tolerance=(
            ordering_divergence_bound(params.precision) if tolerance is None else tolerance
        ),
    )


def precision_sweep(
    params: SeriesParameters,
    precisions: Iterable[int],
    baseline: TermOrdering = TermOrdering.NUMERATOR_DENOMINATOR_SEPARATE,
    candidate: TermOrdering = TermOrdering.FUSED_DIVIDE_THEN_MULTIPLY,
    config: SeriesEvaluatorConfig | None = None,
) -> list[OrderingComparison]:
    """compare_orderings() для каждой precision из precisions (params.precision игнорируется)."""
    return [
        compare_orderings(params.with_precision(p), baseline, candidate, config)
        for p in precisions
    ]


# =============================================================================
# OVERFLOW BOUNDARY
# =============================================================================


def find_overflow_boundary(
    params: SeriesParameters,
    config: SeriesEvaluatorConfig | None = None,
    limit: int = PRECISION_SEARCH_LIMIT,
) -> int:
    """
    Максимальная precision в 0..limit, вычисляемая без ArithmeticOverflow.

    Набор операций для precision p является префиксом набора для p + 1,
    поэтому переполнение монотонно по precision и допускает бинарный поиск.
    params.precision игнорируется.

    Returns:
        Граничная precision; limit, если переполнения нет во всём диапазоне

    Raises:
        ValueError: limit < 0
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    evaluator = BinomialSeriesEvaluator(config)

    def succeeds(precision: int) -> bool:
        return _evaluate_or_none(evaluator, params.with_precision(precision)) is not None

    if succeeds(limit):
        return limit

    # precision 0 всегда вычислима: инвариант succeeds(lo) and not succeeds(hi)
    lo, hi = 0, limit
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if succeeds(mid):
            lo = mid
        else:
            hi = mid
    return lo
