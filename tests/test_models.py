"""Tests for formgen data models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from formgen.models.field import Field, FieldType
from formgen.models.validation_result import (
    ValidationError,
    ValidationResult,
)


class TestField:
    """Tests for Field model."""

    def test_defaults(self):
        """Test a field with only a name."""
        field = Field(name="Email")
        assert field.type == "text"
        assert field.value == ""
        assert field.items == {}
        assert field.errors == []
        assert not field.has_errors

    def test_name_required(self):
        """Test that an empty name is rejected."""
        with pytest.raises(PydanticValidationError):
            Field(name="")

    def test_kind_helpers(self):
        """Test hidden and choice helpers."""
        assert Field(name="t", type=FieldType.HIDDEN.value).is_hidden()
        assert Field(name="s", type="select").is_choice()
        assert Field(name="c", type="checkbox").is_choice()
        assert not Field(name="x", type="email").is_choice()


class TestValidationError:
    """Tests for ValidationError messages."""

    def test_override_wins(self):
        """Test that an override is used verbatim."""
        error = ValidationError(field="Email", type="email", override="Adresse invalide")
        assert error.message == "Adresse invalide"

    def test_known_kinds(self):
        """Test the fixed message vocabulary."""
        assert ValidationError(field="f", type="email").message == "Invalid Email"
        assert ValidationError(field="f", type="alpha").message == "Letters Only"
        assert ValidationError(field="f", type="len", param=5).message == "Invalid Length, needs: 5"
        assert ValidationError(field="f", type="min", param=3).message == "Too Short, needs at least: 3"
        assert ValidationError(field="f", type="max", param=9).message == "Too Long, at most: 9"

    def test_unknown_kind_is_capitalized(self):
        """Test fallback to the capitalized kind."""
        assert ValidationError(field="f", type="required").message == "Required"
        assert ValidationError(field="f", type="uuid_parsing").message == "Uuid_parsing"

    def test_str(self):
        """Test that str() gives the message."""
        assert str(ValidationError(field="f", type="email")) == "Invalid Email"


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_valid_result(self):
        """Test valid validation result."""
        result = ValidationResult(is_valid=True)
        assert result.is_valid
        assert result.failed_fields == []
        assert result.record is None

    def test_invalid_result(self):
        """Test invalid validation result with errors."""
        result = ValidationResult(
            is_valid=False,
            errors=[ValidationError(field="Email", type="email", value="nope")],
        )
        assert not result.is_valid
        assert result.failed_fields == ["Email"]
        assert len(result.errors_for("Email")) == 1
        assert result.errors_for("Name") == []

    def test_messages_grouped_by_field(self):
        """Test grouping messages under their field."""
        result = ValidationResult(
            is_valid=False,
            errors=[
                ValidationError(field="Email", type="email"),
                ValidationError(field="Email", type="required"),
                ValidationError(field="Address.Zip", type="len", param=5),
            ],
        )
        error_dict = result.messages()
        assert error_dict["Email"] == ["Invalid Email", "Required"]
        assert error_dict["Address.Zip"] == ["Invalid Length, needs: 5"]
        assert list(error_dict) == ["Email", "Address.Zip"]
        assert result.failed_fields == ["Email", "Address.Zip"]
