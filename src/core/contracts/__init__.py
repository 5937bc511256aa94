"""
Contract Validation Module

Модуль для валидации JSON контрактов evaluator биномиального ряда.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    SeriesParametersValidator,
    SeriesResultValidator,
    validate_series_parameters,
    validate_series_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SeriesParametersValidator",
    "SeriesResultValidator",
    # Functions
    "validate_series_parameters",
    "validate_series_result",
]
