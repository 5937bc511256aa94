"""
SeriesParameters — Входы и результат вычисления биномиального ряда

Immutable Pydantic модели:
- SeriesParameters: (k, x, a, b, precision) для ряда (1 + 1/x)^(a/b) * k
- SeriesEvaluationResult: значение ряда вместе с входами и выбранным ordering

Модели описывают только форму данных (беззнаковые целые uint256).
Инварианты b > 0, x > 0, a <= b проверяет evaluator, а не модель:
деление на ноль должно приходить как DivisionByZero, а не как ValidationError.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.math.fixed_width import UINT256_MAX


# =============================================================================
# ENUMS
# =============================================================================


class TermOrdering(str, Enum):
    """
    Порядок умножения/деления при переходе от term(i-1) к term(i).

    NUMERATOR_DENOMINATOR_SEPARATE (A): числитель и знаменатель копятся
    отдельно, деление один раз на шаг. Совпадает с литеральным рядом,
    но переполняется раньше.

    FUSED_DIVIDE_THEN_MULTIPLY (B): term = term * num // den на каждом шаге.
    Больше запас по ширине, ограниченная ошибка усечения.
    """

    NUMERATOR_DENOMINATOR_SEPARATE = "numerator_denominator_separate"
    FUSED_DIVIDE_THEN_MULTIPLY = "fused_divide_then_multiply"


# =============================================================================
# SERIES PARAMETERS
# =============================================================================


class SeriesParameters(BaseModel):
    """
    Параметры вычисления (1 + 1/x)^(a/b), масштабированного на k.

    Immutable модель (frozen=True), все поля — uint256.
    """

    k: int = Field(..., ge=0, description="Fixed-point масштаб (например, 10**18)")
    x: int = Field(..., ge=0, description="Обратная величина ставки: y = 1/x")
    a: int = Field(..., ge=0, description="Числитель показателя a/b")
    b: int = Field(..., ge=0, description="Знаменатель показателя a/b")
    precision: int = Field(..., ge=0, description="Количество членов ряда")

    model_config = {"frozen": True, "strict": True}  # Immutable, без приведения типов

    @field_validator("k", "x", "a", "b", "precision")
    @classmethod
    def validate_uint256(cls, v: int) -> int:
        """Все поля должны помещаться в uint256."""
        if v > UINT256_MAX:
            raise ValueError(f"value {v} does not fit in uint256")
        return v

    def with_precision(self, precision: int) -> "SeriesParameters":
        """Копия параметров с другим количеством членов ряда."""
        return self.model_copy(update={"precision": precision})

    def as_tuple(self) -> tuple[int, int, int, int, int]:
        """(k, x, a, b, precision) в порядке аргументов evaluate()."""
        return (self.k, self.x, self.a, self.b, self.precision)


# =============================================================================
# EVALUATION RESULT
# =============================================================================


class SeriesEvaluationResult(BaseModel):
    """
    Результат вычисления ряда.

    Соответствует контракту contracts/schema/series_result.json.
    """

    parameters: SeriesParameters = Field(..., description="Входы вычисления")
    ordering: TermOrdering = Field(..., description="Использованный порядок mul/div")
    width_bits: int = Field(..., gt=0, description="Ширина слова арифметики")
    value: int = Field(..., ge=0, description="Частичная сумма ряда (масштабированная на k)")

    model_config = {"frozen": True}
