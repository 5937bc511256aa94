"""Recurrence Engine — инкрементальное вычисление членов биномиального ряда.

Ряд (1 + y)^α при y = 1/x, α = a/b:

    term(0) = k
    term(1) = k·a / (b·x)
    term(n) = term(n-1) · ((n-1)·b − a) / (n·b·x)      (по модулю, n ≥ 2)

Вместо пересчёта степеней и факториалов движок хранит два счётчика:

    factor_numerator   = (n-1)·b − a    (шаг +b)
    factor_denominator = n·b·x          (шаг +b·x)

Третий член (n = 2) формируется один раз «с нуля» и только по запросу, все
последующие выводятся из предыдущего. Порядок mul/div задаётся TermOrdering.
"""

from typing import Iterator

from src.core.domain.series_parameters import TermOrdering
from src.core.math.fixed_width import UINT256, FixedWidthArithmetic


class RecurrenceEngine:
    """Состояние рекуррентности для одного вычисления.

    Создаётся на один вызов и не переиспользуется: итерация по членам
    конечна и не перезапускается.

    Конструктор арифметики не выполняет. Члены 1 и 2 и стартовые
    произведения формируются при первом обращении, поэтому precision 1
    не трогает ничего, кроме k.

    Ordering A (NUMERATOR_DENOMINATOR_SEPARATE) хранит неподелённые
    произведения числителя и знаменателя, term = numerator // denominator.
    Ordering B (FUSED_DIVIDE_THEN_MULTIPLY) хранит только уже поделённый term.
    """

    def __init__(
        self,
        k: int,
        x: int,
        a: int,
        b: int,
        ordering: TermOrdering = TermOrdering.FUSED_DIVIDE_THEN_MULTIPLY,
        arithmetic: FixedWidthArithmetic = UINT256,
    ):
        """
        Args:
            k: fixed-point масштаб
            x: обратная величина y (x > 0)
            a: числитель показателя (a <= b)
            b: знаменатель показателя (b > 0)
            ordering: порядок умножения/деления
            arithmetic: примитивы фиксированной ширины
        """
        self.k = k
        self.x = x
        self.a = a
        self.b = b
        self.ordering = ordering
        self.arithmetic = arithmetic

        self.bx: int | None = None
        self.term_one: int | None = None
        self.factor_numerator: int | None = None
        self.factor_denominator: int | None = None
        self.numerator: int | None = None
        self.denominator: int | None = None
        self.term: int | None = None

        self._consumed = False

    def _seed_term_one(self) -> int:
        if self.term_one is None:
            ops = self.arithmetic
            self.bx = ops.mul(self.b, self.x)
            self.term_one = ops.div(ops.mul(self.k, self.a), self.bx)
        return self.term_one

    def _seed_third_term(self) -> int:
        if self.term is None:
            self._seed_term_one()
            ops = self.arithmetic
            self.factor_numerator = ops.sub(self.b, self.a)
            self.factor_denominator = ops.add(self.bx, self.bx)

            # Единственное место, где произведения формируются с нуля
            self.numerator = ops.mul(ops.mul(self.k, self.a), self.factor_numerator)
            self.denominator = ops.mul(self.bx, self.factor_denominator)
            self.term = ops.div(self.numerator, self.denominator)
        return self.term

    def leading_terms(self, precision: int = 3) -> Iterator[tuple[int, int]]:
        """
        (index, term) для членов 0, 1, 2, но не дальше index = precision - 1.

        Raises:
            ArithmeticOverflow: если запрошенный член не помещается в ширину
            DivisionByZero: если b·x == 0
        """
        if precision >= 1:
            yield 0, self.k
        if precision >= 2:
            yield 1, self._seed_term_one()
        if precision >= 3:
            yield 2, self._seed_third_term()

    def _advance(self) -> int:
        ops = self.arithmetic
        self.factor_numerator = ops.add(self.factor_numerator, self.b)
        self.factor_denominator = ops.add(self.factor_denominator, self.bx)

        if self.ordering is TermOrdering.NUMERATOR_DENOMINATOR_SEPARATE:
            self.numerator = ops.mul(self.numerator, self.factor_numerator)
            self.denominator = ops.mul(self.denominator, self.factor_denominator)
            self.term = ops.div(self.numerator, self.denominator)
        else:
            self.term = ops.div(
                ops.mul(self.term, self.factor_numerator),
                self.factor_denominator,
            )
        return self.term

    def terms(self, precision: int) -> Iterator[tuple[int, int]]:
        """
        Ленивая последовательность (i, term) для i = 4..precision.

        i — номер шага цикла; член имеет индекс i - 1 в ряду.
        Последовательность одноразовая.

        Raises:
            RuntimeError: при повторной итерации
        """
        if self._consumed:
            raise RuntimeError("RecurrenceEngine terms are not restartable")
        self._consumed = True

        if precision < 4:
            return
        self._seed_third_term()

        for i in range(4, precision + 1):
            yield i, self._advance()
