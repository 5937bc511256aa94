"""Special-Case Evaluator — закрытые формулы для precision 0..3.

Для малых precision состояние рекуррентности не создаётся:

    precision 0 → 0
    precision 1 → k
    precision 2 → k + k·a // (b·x)
    precision 3 → (precision 2) − k·a·(b − a) // (b·x · 2·b·x)

Операции и их порядок совпадают с инициализацией RecurrenceEngine, поэтому
результат совпадает с рекуррентностью, развёрнутой на ту же precision.
"""

from typing import Final

from src.core.math.fixed_width import UINT256, FixedWidthArithmetic

# Наибольшая precision, вычисляемая закрытой формулой
SPECIAL_CASE_MAX_PRECISION: Final[int] = 3


def evaluate_special_case(
    k: int,
    x: int,
    a: int,
    b: int,
    precision: int,
    arithmetic: FixedWidthArithmetic = UINT256,
) -> int:
    """
    Частичная сумма ряда для precision ∈ {0, 1, 2, 3}.

    Raises:
        ValueError: Если precision > SPECIAL_CASE_MAX_PRECISION
        ArithmeticOverflow: при выходе за ширину
        DivisionByZero: при b·x == 0
    """
    if precision < 0 or precision > SPECIAL_CASE_MAX_PRECISION:
        raise ValueError(
            f"precision must be in 0..{SPECIAL_CASE_MAX_PRECISION}, got {precision}"
        )

    if precision == 0:
        return 0
    if precision == 1:
        return k

    ops = arithmetic
    bx = ops.mul(b, x)
    ka = ops.mul(k, a)
    total = ops.add(k, ops.div(ka, bx))
    if precision == 2:
        return total

    third = ops.div(ops.mul(ka, ops.sub(b, a)), ops.mul(bx, ops.add(bx, bx)))
    return ops.sub(total, third)
