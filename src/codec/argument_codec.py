"""
Argument Codec — упаковка параметров ряда в одно машинное слово

Раскладка, начиная с младших бит:

    bits   0..15   precision  (16 бит)
    bits  16..31   b          (16 бит)
    bits  32..47   a          (16 бит)
    bits  48..63   x          (16 бит)
    bits  64..191  k          (128 бит)
    bits 192..255  не используются

Кодек чистый и без состояния; с численным ядром связан только формой
SeriesParameters.
"""

from typing import Final

from src.core.domain.series_parameters import SeriesParameters
from src.core.math.fixed_width import UINT256_MAX
from src.series.evaluator import BinomialSeriesEvaluator

# =============================================================================
# РАСКЛАДКА ПОЛЕЙ
# =============================================================================

PRECISION_BITS: Final[int] = 16
B_BITS: Final[int] = 16
A_BITS: Final[int] = 16
X_BITS: Final[int] = 16
K_BITS: Final[int] = 128

# (имя поля, ширина) от младших бит к старшим
FIELD_LAYOUT: Final[tuple[tuple[str, int], ...]] = (
    ("precision", PRECISION_BITS),
    ("b", B_BITS),
    ("a", A_BITS),
    ("x", X_BITS),
    ("k", K_BITS),
)

PACKED_BITS: Final[int] = sum(width for _, width in FIELD_LAYOUT)


class ArgumentCodecError(ValueError):
    """Поле не помещается в отведённые биты или слово некорректно."""

    pass


# =============================================================================
# ENCODE / DECODE
# =============================================================================


def encode_arguments(k: int, x: int, a: int, b: int, precision: int) -> int:
    """
    Упаковка (k, x, a, b, precision) в одно слово.

    Поля пишутся слева направо, k — самое старшее.

    Raises:
        ArgumentCodecError: Если поле отрицательное или шире своей ширины

    Examples:
        >>> encode_arguments(1, 2, 3, 4, 5) == (1 << 64) | (2 << 48) | (3 << 32) | (4 << 16) | 5
        True
    """
    values = {"k": k, "x": x, "a": a, "b": b, "precision": precision}

    word = 0
    for name, width in reversed(FIELD_LAYOUT):
        value = values[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ArgumentCodecError(f"{name} must be an integer, got {type(value).__name__}")
        if value < 0 or value >> width:
            raise ArgumentCodecError(f"{name}={value} does not fit in {width} bits")
        word = (word << width) | value
    return word


def encode_parameters(params: SeriesParameters) -> int:
    """encode_arguments() для SeriesParameters."""
    return encode_arguments(*params.as_tuple())


def decode_arguments(word: int) -> SeriesParameters:
    """
    Распаковка слова: сдвиг вправо и маска, от precision к k.

    Старшие неиспользуемые биты игнорируются.

    Raises:
        ArgumentCodecError: Если word отрицательное или шире uint256
    """
    if isinstance(word, bool) or not isinstance(word, int):
        raise ArgumentCodecError(f"packed word must be an integer, got {type(word).__name__}")
    if word < 0 or word > UINT256_MAX:
        raise ArgumentCodecError(f"packed word does not fit in uint256: {word}")

    fields: dict[str, int] = {}
    for name, width in FIELD_LAYOUT:
        fields[name] = word & ((1 << width) - 1)
        word >>= width

    return SeriesParameters(**fields)


def evaluate_packed(word: int, evaluator: BinomialSeriesEvaluator | None = None) -> int:
    """
    Вычисление ряда по упакованному слову.

    Args:
        word: Слово в раскладке FIELD_LAYOUT
        evaluator: Evaluator (опционально, default-конфигурация)

    Returns:
        Частичная сумма ряда
    """
    evaluator = evaluator or BinomialSeriesEvaluator()
    return evaluator.evaluate(decode_arguments(word))
