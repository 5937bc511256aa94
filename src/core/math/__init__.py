"""
Core math modules

Арифметические примитивы фиксированной ширины с гарантией детерминизма.
"""

from src.core.math.fixed_width import (
    DEFAULT_WIDTH_BITS,
    UINT256,
    UINT256_MAX,
    ArithmeticOverflow,
    DivisionByZero,
    FixedWidthArithmetic,
    OverflowPolicy,
    max_unsigned,
    validate_unsigned,
)

__all__ = [
    # Width constants
    "DEFAULT_WIDTH_BITS",
    "UINT256_MAX",
    "UINT256",
    # Errors
    "ArithmeticOverflow",
    "DivisionByZero",
    # Arithmetic
    "OverflowPolicy",
    "FixedWidthArithmetic",
    # Validation
    "max_unsigned",
    "validate_unsigned",
]
