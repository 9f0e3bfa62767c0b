"""
Data models for formgen.

This module contains Pydantic models for:
- Field descriptors handed to the renderer
- Validation errors and results
"""

from formgen.models.field import (
    CHOICE_TYPES,
    Field,
    FieldType,
    SelectItems,
    SelectValue,
    TagValue,
)
from formgen.models.validation_result import (
    ValidationError,
    ValidationResult,
)

__all__ = [
    # Field descriptors
    "Field",
    "FieldType",
    "CHOICE_TYPES",
    "TagValue",
    "SelectValue",
    "SelectItems",
    # Validation
    "ValidationError",
    "ValidationResult",
]
