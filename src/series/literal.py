"""Literal Baseline — вычисление биномиального ряда без рекуррентности.

Каждый член строится заново:

    term(n) = k · a · Π_{j=1}^{n-1} (j·b − a) // (n! · b^n · x^n)

Эталон сложности O(precision²), с которым сверяется рекуррентность:
ordering A обязан совпадать с ним везде, где обе стороны вычислимы.
Приращение коэффициента j·b − a — checked вычитание, поэтому a > b
приводит к underflow и без явной проверки области в evaluator.
"""

from src.core.math.fixed_width import UINT256, DivisionByZero, FixedWidthArithmetic
from src.series.accumulator import SeriesAccumulator


def literal_term(
    k: int,
    x: int,
    a: int,
    b: int,
    n: int,
    arithmetic: FixedWidthArithmetic = UINT256,
) -> int:
    """Модуль n-го члена ряда, вычисленный без рекуррентности."""
    ops = arithmetic
    numerator = k
    denominator = 1
    for j in range(n):
        coefficient = a if j == 0 else ops.sub(ops.mul(j, b), a)
        numerator = ops.mul(numerator, coefficient)
        denominator = ops.mul(denominator, ops.mul(ops.mul(j + 1, b), x))
    return ops.div(numerator, denominator)


def evaluate_literal(
    k: int,
    x: int,
    a: int,
    b: int,
    precision: int,
    arithmetic: FixedWidthArithmetic = UINT256,
) -> int:
    """
    Частичная сумма первых precision членов, каждый член вычисляется заново.

    Raises:
        DivisionByZero: b == 0 или x == 0
        ArithmeticOverflow: промежуточное значение вышло за ширину,
            включая underflow j·b − a при a > b
    """
    if b == 0 or x == 0:
        raise DivisionByZero(f"b and x must be non-zero, got b={b}, x={x}")

    accumulator = SeriesAccumulator(arithmetic)
    for n in range(precision):
        accumulator.fold(n, literal_term(k, x, a, b, n, arithmetic))
    return accumulator.total
