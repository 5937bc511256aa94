"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints (min/max/enum)
- Интеграция с Pydantic моделями и evaluator
"""

import json

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    SchemaLoader,
    SeriesParametersValidator,
    SeriesResultValidator,
    validate_series_parameters,
    validate_series_result,
)
from src.core.domain import SeriesParameters, TermOrdering
from src.core.math.fixed_width import UINT256_MAX
from src.series.evaluator import BinomialSeriesEvaluator, SeriesEvaluatorConfig


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_series_parameters():
    """Валидный series_parameters для тестирования."""
    return {"k": 10**18, "x": 2, "a": 250, "b": 365, "precision": 18}


@pytest.fixture
def valid_series_result(valid_series_parameters):
    """Валидный series_result для тестирования."""
    return {
        "parameters": valid_series_parameters,
        "ordering": "fused_divide_then_multiply",
        "width_bits": 256,
        "value": 1320111009630163047,
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузки схем."""

    @pytest.mark.parametrize("name", ["series_parameters", "series_result"])
    def test_schemas_load(self, name):
        schema = SchemaLoader().load_schema(name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("series_parameters") is loader.load_schema("series_parameters")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# SERIES PARAMETERS CONTRACT
# =============================================================================


class TestSeriesParametersContract:
    """Тесты контракта series_parameters."""

    def test_valid(self, valid_series_parameters):
        validate_series_parameters(valid_series_parameters)

    def test_uint256_max_allowed(self, valid_series_parameters):
        valid_series_parameters["k"] = UINT256_MAX
        validate_series_parameters(valid_series_parameters)

    def test_uint256_overflow_rejected(self, valid_series_parameters):
        valid_series_parameters["k"] = UINT256_MAX + 1
        with pytest.raises(ValidationError):
            validate_series_parameters(valid_series_parameters)

    @pytest.mark.parametrize("field", ["k", "x", "a", "b", "precision"])
    def test_required_fields(self, valid_series_parameters, field):
        del valid_series_parameters[field]
        with pytest.raises(ValidationError):
            validate_series_parameters(valid_series_parameters)

    def test_negative_rejected(self, valid_series_parameters):
        valid_series_parameters["precision"] = -1
        assert not SeriesParametersValidator().is_valid(valid_series_parameters)

    def test_type_violation(self, valid_series_parameters):
        valid_series_parameters["x"] = "2"
        errors = list(SeriesParametersValidator().iter_errors(valid_series_parameters))
        assert len(errors) == 1

    def test_additional_properties_rejected(self, valid_series_parameters):
        valid_series_parameters["extra"] = 1
        with pytest.raises(ValidationError):
            validate_series_parameters(valid_series_parameters)

    def test_pydantic_model_matches_contract(self):
        params = SeriesParameters(k=10**18, x=2, a=250, b=365, precision=18)
        validate_series_parameters(params.model_dump(mode="json"))


# =============================================================================
# SERIES RESULT CONTRACT
# =============================================================================


class TestSeriesResultContract:
    """Тесты контракта series_result."""

    def test_valid(self, valid_series_result):
        validate_series_result(valid_series_result)

    def test_unknown_ordering(self, valid_series_result):
        valid_series_result["ordering"] = "divide_first"
        with pytest.raises(ValidationError):
            validate_series_result(valid_series_result)

    def test_nested_parameters_checked(self, valid_series_result):
        valid_series_result["parameters"]["b"] = -1
        assert not SeriesResultValidator().is_valid(valid_series_result)

    @pytest.mark.parametrize("ordering", list(TermOrdering))
    def test_evaluator_report_matches_contract(self, ordering):
        evaluator = BinomialSeriesEvaluator(SeriesEvaluatorConfig(ordering=ordering))
        report = evaluator.evaluate_with_report(
            SeriesParameters(k=10**18, x=2, a=250, b=365, precision=18)
        )
        validate_series_result(report.model_dump(mode="json"))
