"""Binomial Series Evaluator — публичная точка входа.

Вычисляет усечённый ряд Маклорена

    k · (1 + 1/x)^(a/b) ≈ Σ_{n=0}^{precision-1} k · C(a/b, n) · x^(-n)

только беззнаковой целочисленной арифметикой фиксированной ширины.

Поток данных:
1. Проверка входов: DivisionByZero (b == 0 или x == 0), SeriesDomainViolation (a > b)
2. precision <= 3 → закрытая формула (special_cases)
3. иначе → RecurrenceEngine + SeriesAccumulator, precision - 3 шагов
   (члены 1 и 2 вычисляются, только если precision их включает)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Переполнение (CHECKED) фатально для всего вызова, частичный результат не возвращается
2. Вызовы независимы: состояние не переживает один вызов
3. Результат детерминирован для (параметры, конфигурация)
"""

import logging
from dataclasses import dataclass, field
from typing import Final

from src.core.domain.series_parameters import (
    SeriesEvaluationResult,
    SeriesParameters,
    TermOrdering,
)
from src.core.math.fixed_width import (
    DEFAULT_WIDTH_BITS,
    DivisionByZero,
    FixedWidthArithmetic,
    OverflowPolicy,
)
from src.series.accumulator import SeriesAccumulator
from src.series.recurrence import RecurrenceEngine
from src.series.special_cases import SPECIAL_CASE_MAX_PRECISION, evaluate_special_case

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Расхождение ordering A и B: не больше одной единицы на шаг рекуррентности
ORDERING_DIVERGENCE_PER_STEP: Final[int] = 1


def ordering_divergence_bound(precision: int) -> int:
    """
    Верхняя граница |A − B| для precision членов ряда (обе стороны без переполнения).

    Члены 0..2 у обоих orderings совпадают. Для n ≥ 3 ordering A даёт floor
    точного члена T(n), а ошибка ordering B e(n) = T(n) − term_B(n)
    подчиняется e(n) = r(n)·e(n-1) + δ(n), где δ(n) ∈ [0, 1) и
    r(n) = ((n-1)·b − a) / (n·b·x) < 1 при x ≥ 1.

    Вклад каждой δ в знакочередующуюся сумму образует знакочередующийся ряд
    с невозрастающими модулями и по модулю не превосходит δ. Поэтому
    |A − B| < 1 + (precision − 3), то есть не больше одной единицы на шаг.

    Examples:
        >>> ordering_divergence_bound(3)
        0
        >>> ordering_divergence_bound(18)
        15
    """
    return ORDERING_DIVERGENCE_PER_STEP * max(0, precision - SPECIAL_CASE_MAX_PRECISION)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SeriesDomainViolation(ValueError):
    """
    a > b: показатель a/b вне области, где справедлива знаковая схема ряда.

    Проверяется явно до начала вычислений. Повтор вызова бессмысленен,
    входы должны быть исправлены вызывающей стороной.
    """

    pass


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SeriesEvaluatorConfig:
    """Конфигурация evaluator.

    ordering: порядок mul/div в рекуррентности (A или B)
    width_bits: ширина слова (эталон: 256)
    overflow_policy: CHECKED (abort) или WRAPPING (усечение)
    use_fast_paths: закрытые формулы для precision <= 3
    """

    ordering: TermOrdering = TermOrdering.FUSED_DIVIDE_THEN_MULTIPLY
    width_bits: int = DEFAULT_WIDTH_BITS
    overflow_policy: OverflowPolicy = OverflowPolicy.CHECKED
    use_fast_paths: bool = True
    arithmetic: FixedWidthArithmetic = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "arithmetic",
            FixedWidthArithmetic(self.width_bits, self.overflow_policy),
        )


# =============================================================================
# EVALUATOR
# =============================================================================


class BinomialSeriesEvaluator:
    """Evaluator ряда (1 + 1/x)^(a/b) · k.

    Экземпляр не хранит состояния вычислений, только конфигурацию, и может
    использоваться конкурентно.
    """

    def __init__(self, config: SeriesEvaluatorConfig | None = None):
        """
        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or SeriesEvaluatorConfig()

    def validate(self, k: int, x: int, a: int, b: int, precision: int) -> None:
        """
        Проверка входов до вычислений.

        Порядок проверок:
        1. Типы и ширина (ValueError)
        2. b == 0 или x == 0 → DivisionByZero (при любой precision)
        3. a > b → SeriesDomainViolation
        """
        ops = self.config.arithmetic
        for name, value in (("k", k), ("x", x), ("a", a), ("b", b), ("precision", precision)):
            ops.validate(value, name)

        if b == 0 or x == 0:
            raise DivisionByZero(f"b and x must be non-zero, got b={b}, x={x}")

        if a > b:
            raise SeriesDomainViolation(
                f"Series domain violation: a={a} > b={b}. "
                f"Alternating sign scheme requires a/b <= 1."
            )

    def evaluate_values(self, k: int, x: int, a: int, b: int, precision: int) -> int:
        """
        Частичная сумма первых precision членов ряда.

        Raises:
            DivisionByZero: b == 0 или x == 0
            SeriesDomainViolation: a > b
            ArithmeticOverflow: выход за ширину при политике CHECKED
            ValueError: вход не помещается в ширину
        """
        self.validate(k, x, a, b, precision)
        config = self.config

        if precision == 0:
            result = 0
        elif config.use_fast_paths and precision <= SPECIAL_CASE_MAX_PRECISION:
            result = evaluate_special_case(k, x, a, b, precision, config.arithmetic)
        else:
            result = self._evaluate_recurrence(k, x, a, b, precision)

        logger.debug(
            "series k=%d x=%d a=%d b=%d precision=%d ordering=%s -> %d",
            k,
            x,
            a,
            b,
            precision,
            config.ordering.value,
            result,
        )
        return result

    def _evaluate_recurrence(self, k: int, x: int, a: int, b: int, precision: int) -> int:
        config = self.config
        engine = RecurrenceEngine(k, x, a, b, config.ordering, config.arithmetic)
        accumulator = SeriesAccumulator(config.arithmetic)

        for index, term in engine.leading_terms(precision):
            accumulator.fold(index, term)

        for i, term in engine.terms(precision):
            accumulator.fold_step(i, term)

        return accumulator.total

    def evaluate(self, params: SeriesParameters) -> int:
        """evaluate_values() для SeriesParameters."""
        return self.evaluate_values(*params.as_tuple())

    def evaluate_with_report(self, params: SeriesParameters) -> SeriesEvaluationResult:
        """Вычисление с результатом в форме контракта series_result."""
        value = self.evaluate(params)
        return SeriesEvaluationResult(
            parameters=params,
            ordering=self.config.ordering,
            width_bits=self.config.width_bits,
            value=value,
        )


_DEFAULT_EVALUATORS: Final[dict[TermOrdering, BinomialSeriesEvaluator]] = {
    ordering: BinomialSeriesEvaluator(SeriesEvaluatorConfig(ordering=ordering))
    for ordering in TermOrdering
}


def evaluate(
    k: int,
    x: int,
    a: int,
    b: int,
    precision: int,
    ordering: TermOrdering = TermOrdering.FUSED_DIVIDE_THEN_MULTIPLY,
    config: SeriesEvaluatorConfig | None = None,
) -> int:
    """
    k · (1 + 1/x)^(a/b), усечённый до precision членов ряда.

    Args:
        k: fixed-point масштаб (например, 10**18)
        x: обратная величина y = 1/x
        a, b: показатель a/b (a <= b, b > 0)
        precision: количество членов ряда
        ordering: порядок mul/div (игнорируется, если передан config)
        config: полная конфигурация evaluator

    Returns:
        Частичная сумма ряда, масштабированная на k

    Examples:
        >>> evaluate(10**18, 2, 250, 365, 3)
        1315490711202852318
        >>> evaluate(1000, 1, 1, 2, 5)
        1399
    """
    if config is None:
        evaluator = _DEFAULT_EVALUATORS[ordering]
    else:
        evaluator = BinomialSeriesEvaluator(config)
    return evaluator.evaluate_values(k, x, a, b, precision)
