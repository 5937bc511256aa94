"""
Тесты для Precision Analysis

Проверяет:
1. Подсчёт совпадающих цифр с эталоном
2. Сравнение orderings (включая переполнение одной стороны)
3. Поиск границы переполнения (ordering B не хуже ordering A)
4. Sweep по диапазону precision
"""

import pytest

from src.core.domain.series_parameters import SeriesParameters, TermOrdering
from src.core.math.fixed_width import DivisionByZero
from src.series.evaluator import SeriesEvaluatorConfig, evaluate, ordering_divergence_bound
from src.series.precision_analysis import (
    REFERENCE_DIGITS_3_2_POW_250_365,
    compare_orderings,
    count_correct_digits,
    find_overflow_boundary,
    precision_sweep,
)

A = TermOrdering.NUMERATOR_DENOMINATOR_SEPARATE
B = TermOrdering.FUSED_DIVIDE_THEN_MULTIPLY


@pytest.fixture
def reference_params() -> SeriesParameters:
    """k = 10**18, (1 + 1/2)^(250/365)"""
    return SeriesParameters(k=10**18, x=2, a=250, b=365, precision=18)


# =============================================================================
# ТЕСТЫ: count_correct_digits
# =============================================================================


class TestCountCorrectDigits:
    """Совпадение ведущих цифр"""

    def test_reference_precision_21(self):
        assert count_correct_digits(1320111004140914335, REFERENCE_DIGITS_3_2_POW_250_365) == 10

    def test_identical_prefix(self):
        assert count_correct_digits(1320111004619619371, REFERENCE_DIGITS_3_2_POW_250_365) == 19

    def test_first_digit_wrong(self):
        assert count_correct_digits(2, "13") == 0

    def test_zero_result(self):
        assert count_correct_digits(0, "01") == 1

    def test_invalid_reference(self):
        with pytest.raises(ValueError, match="only digits"):
            count_correct_digits(1, "1.32")

    def test_more_terms_more_digits(self, reference_params):
        """Точность растёт с precision (ordering B)"""
        digits = [
            count_correct_digits(
                evaluate(10**18, 2, 250, 365, p), REFERENCE_DIGITS_3_2_POW_250_365
            )
            for p in (3, 10, 20, 30)
        ]
        assert digits == sorted(digits)
        assert digits[-1] >= 11


# =============================================================================
# ТЕСТЫ: compare_orderings
# =============================================================================


class TestCompareOrderings:
    """Сравнение ordering A (baseline) и B (candidate)"""

    def test_both_succeed_at_18(self, reference_params):
        comparison = compare_orderings(reference_params)
        assert comparison.both_succeeded
        assert comparison.baseline_result == 1320111009630163049
        assert comparison.candidate_result == 1320111009630163047
        assert comparison.difference == -2
        assert comparison.within_tolerance
        assert comparison.tolerance == ordering_divergence_bound(18) == 15

    def test_baseline_overflows_at_21(self, reference_params):
        comparison = compare_orderings(reference_params.with_precision(21))
        assert comparison.baseline_result is None
        assert comparison.candidate_result == 1320111004140914335
        assert not comparison.both_succeeded
        assert comparison.difference is None
        assert not comparison.within_tolerance

    def test_custom_tolerance(self, reference_params):
        comparison = compare_orderings(reference_params, tolerance=1)
        assert not comparison.within_tolerance

    def test_default_tolerance_grows_with_steps(self, reference_params):
        """Одна единица на шаг рекуррентности; precision <= 3 требует точного совпадения"""
        assert compare_orderings(reference_params.with_precision(3)).tolerance == 0
        assert compare_orderings(reference_params.with_precision(5)).tolerance == 2

    def test_sweep_tolerance_follows_precision(self):
        params = SeriesParameters(k=10**18, x=1, a=1, b=3, precision=0)
        rows = precision_sweep(params, range(19, 38))
        assert all(row.both_succeeded for row in rows)
        assert [row.tolerance for row in rows] == list(range(16, 35))
        assert all(row.within_tolerance for row in rows)

    def test_same_ordering_is_exact(self, reference_params):
        comparison = compare_orderings(reference_params, baseline=B, candidate=B)
        assert comparison.difference == 0

    def test_division_by_zero_propagates(self):
        params = SeriesParameters(k=10**18, x=0, a=250, b=365, precision=5)
        with pytest.raises(DivisionByZero):
            compare_orderings(params)

    def test_config_width_is_shared(self, reference_params):
        """Прочие настройки config применяются к обеим сторонам"""
        comparison = compare_orderings(
            reference_params.with_precision(3), config=SeriesEvaluatorConfig(width_bits=64)
        )
        assert comparison.baseline_result is None
        assert comparison.candidate_result is None


# =============================================================================
# ТЕСТЫ: find_overflow_boundary
# =============================================================================


class TestOverflowBoundary:
    """Максимальная precision без переполнения"""

    def test_reference_separate_boundary(self, reference_params):
        config = SeriesEvaluatorConfig(ordering=A)
        assert find_overflow_boundary(reference_params, config, limit=400) == 18

    def test_reference_fused_has_no_boundary_in_range(self, reference_params):
        config = SeriesEvaluatorConfig(ordering=B)
        assert find_overflow_boundary(reference_params, config, limit=400) == 400

    @pytest.mark.parametrize(
        "k,a,expected_separate",
        [
            (2**200, 250, 7),
            (2**250, 250, 1),
            (10**18, 365, 21),
        ],
    )
    def test_fused_boundary_not_below_separate(self, k, a, expected_separate):
        params = SeriesParameters(k=k, x=2, a=a, b=365, precision=0)
        separate = find_overflow_boundary(params, SeriesEvaluatorConfig(ordering=A), limit=400)
        fused = find_overflow_boundary(params, SeriesEvaluatorConfig(ordering=B), limit=400)
        assert separate == expected_separate
        assert fused >= separate

    def test_boundary_is_exact(self, reference_params):
        """Граница: precision вычислима, precision + 1 — нет"""
        config = SeriesEvaluatorConfig(ordering=A)
        boundary = find_overflow_boundary(reference_params, config, limit=100)
        comparison = compare_orderings(reference_params.with_precision(boundary + 1))
        assert comparison.baseline_result is None
        assert compare_orderings(reference_params.with_precision(boundary)).baseline_result is not None

    def test_zero_limit(self, reference_params):
        assert find_overflow_boundary(reference_params, limit=0) == 0

    def test_negative_limit(self, reference_params):
        with pytest.raises(ValueError, match="limit must be non-negative"):
            find_overflow_boundary(reference_params, limit=-1)


# =============================================================================
# ТЕСТЫ: precision_sweep
# =============================================================================


class TestPrecisionSweep:
    """Сравнение по диапазону precision"""

    def test_sweep_rows(self, reference_params):
        rows = precision_sweep(reference_params, range(1, 24))
        assert [row.params.precision for row in rows] == list(range(1, 24))

        succeeded = [row for row in rows if row.both_succeeded]
        assert [row.params.precision for row in succeeded] == list(range(1, 19))
        assert all(row.within_tolerance for row in succeeded)

        overflowed = [row for row in rows if not row.both_succeeded]
        assert all(row.baseline_result is None for row in overflowed)
        assert all(row.candidate_result is not None for row in overflowed)

    def test_empty_sweep(self, reference_params):
        assert precision_sweep(reference_params, []) == []
