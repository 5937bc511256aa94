"""
Fixed-Width Arithmetic — Checked Unsigned Integer Primitives

Модуль обеспечивает арифметику беззнаковых целых фиксированной ширины
(по умолчанию 256 бит) для вычисления биномиального ряда:
- Checked сложение/вычитание/умножение с детекцией переполнения
- Деление с явной ошибкой деления на ноль
- Опциональная политика WRAPPING (усечение по модулю 2**width)
- Валидация входов (неотрицательность, попадание в ширину)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат операции всегда в диапазоне [0, 2**width_bits - 1]
2. При политике CHECKED выход за диапазон → ArithmeticOverflow (без частичного результата)
3. Деление на ноль → DivisionByZero при любой политике
4. Все операции детерминированы и воспроизводимы
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ ШИРИНЫ
# =============================================================================

# Эталонная ширина машинного слова
DEFAULT_WIDTH_BITS: Final[int] = 256

# Максимальное значение uint256
UINT256_MAX: Final[int] = (1 << DEFAULT_WIDTH_BITS) - 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ArithmeticOverflow(OverflowError):
    """
    Результат операции не представим в заданной ширине.

    Фатальная ошибка для всего вычисления: частичный результат не
    возвращается, повтор вызова воспроизведёт ту же ошибку.
    Underflow при вычитании тоже относится к этому классу.
    """

    pass


class DivisionByZero(ZeroDivisionError):
    """
    Деление на ноль (b == 0 или x == 0 во входах ряда).

    Фатальная ошибка, не зависит от политики переполнения.
    """

    pass


class OverflowPolicy(str, Enum):
    """Поведение при выходе результата за ширину слова."""

    CHECKED = "checked"  # abort
    WRAPPING = "wrapping"  # mod 2**width


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def max_unsigned(width_bits: int) -> int:
    """
    Максимальное значение беззнакового целого заданной ширины.

    Raises:
        ValueError: Если width_bits <= 0
    """
    if width_bits <= 0:
        raise ValueError(f"width_bits must be positive, got {width_bits}")
    return (1 << width_bits) - 1


def validate_unsigned(value: int, name: str, width_bits: int = DEFAULT_WIDTH_BITS) -> None:
    """
    Валидация, что значение — беззнаковое целое, помещающееся в ширину.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        width_bits: Ширина слова в битах

    Raises:
        ValueError: Если value не int, отрицательное или шире width_bits
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > max_unsigned(width_bits):
        raise ValueError(f"{name} does not fit in uint{width_bits}: {value}")


# =============================================================================
# FIXED-WIDTH ARITHMETIC
# =============================================================================


@dataclass(frozen=True)
class FixedWidthArithmetic:
    """
    Набор примитивов беззнаковой арифметики фиксированной ширины.

    Immutable: один экземпляр можно разделять между вызовами и потоками.

    Examples:
        >>> UINT256.add(2, 3)
        5
        >>> UINT256.sub(2, 3)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflow: ...
        >>> FixedWidthArithmetic(8, OverflowPolicy.WRAPPING).mul(16, 17)
        16
    """

    width_bits: int = DEFAULT_WIDTH_BITS
    policy: OverflowPolicy = OverflowPolicy.CHECKED

    def __post_init__(self) -> None:
        # Валидирует ширину сразу при создании
        max_unsigned(self.width_bits)

    @property
    def max_value(self) -> int:
        return max_unsigned(self.width_bits)

    def _fit(self, value: int, op: str, lhs: int, rhs: int) -> int:
        """
        Приведение математического результата к ширине слова.

        CHECKED: выход за [0, max_value] → ArithmeticOverflow.
        WRAPPING: результат по модулю 2**width_bits.
        """
        if 0 <= value <= self.max_value:
            return value

        if self.policy is OverflowPolicy.WRAPPING:
            wrapped = value & self.max_value
            logger.warning(
                "uint%d %s wrapped: %d %s %d -> %d",
                self.width_bits,
                op,
                lhs,
                op,
                rhs,
                wrapped,
            )
            return wrapped

        kind = "underflow" if value < 0 else "overflow"
        raise ArithmeticOverflow(
            f"uint{self.width_bits} {kind}: {lhs} {op} {rhs} is not representable"
        )

    def add(self, lhs: int, rhs: int) -> int:
        return self._fit(lhs + rhs, "+", lhs, rhs)

    def sub(self, lhs: int, rhs: int) -> int:
        return self._fit(lhs - rhs, "-", lhs, rhs)

    def mul(self, lhs: int, rhs: int) -> int:
        return self._fit(lhs * rhs, "*", lhs, rhs)

    def div(self, lhs: int, rhs: int) -> int:
        """
        Целочисленное деление с усечением (floor для неотрицательных).

        Raises:
            DivisionByZero: Если rhs == 0 (при любой политике)
        """
        if rhs == 0:
            raise DivisionByZero(f"uint{self.width_bits} division by zero: {lhs} / 0")
        return lhs // rhs

    def validate(self, value: int, name: str) -> None:
        """Проверка, что value — корректный операнд этой ширины."""
        validate_unsigned(value, name, self.width_bits)


# Эталонный экземпляр: uint256, переполнение фатально
UINT256: Final[FixedWidthArithmetic] = FixedWidthArithmetic()
