"""Accumulator — знакочередующаяся сумма членов ряда в фиксированной ширине.

Знаки членов биномиального ряда при 0 < a/b < 1:

    term(0): +    term(1): +    term(2): −    term(3): +    term(4): −  ...

В терминах шага цикла i = index + 1 (i ≥ 2): «+» при чётном i, «−» при нечётном.
Корректно только при a <= b.
"""

from src.core.math.fixed_width import UINT256, FixedWidthArithmetic


def is_added(index: int) -> bool:
    """True, если член ряда с индексом index прибавляется к сумме."""
    if index < 0:
        raise ValueError(f"term index must be non-negative, got {index}")
    return index == 0 or index % 2 == 1


def is_added_at_step(i: int) -> bool:
    """Знак члена для шага цикла i (член с индексом i - 1)."""
    return is_added(i - 1)


class SeriesAccumulator:
    """Бегущая сумма одного вычисления.

    Не разделяется между вызовами. Вычитание, уводящее сумму ниже нуля,
    является ArithmeticOverflow (underflow) при политике CHECKED.
    """

    def __init__(self, arithmetic: FixedWidthArithmetic = UINT256, seed: int = 0):
        self.arithmetic = arithmetic
        self.total = seed

    def fold(self, index: int, term: int) -> int:
        """
        Добавление члена с индексом index (со знаком по индексу).

        Returns:
            Новое значение суммы
        """
        if is_added(index):
            self.total = self.arithmetic.add(self.total, term)
        else:
            self.total = self.arithmetic.sub(self.total, term)
        return self.total

    def fold_step(self, i: int, term: int) -> int:
        """fold() для шага цикла i."""
        return self.fold(i - 1, term)
