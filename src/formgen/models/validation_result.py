"""
Validation result models for submitted form data.

These models carry the outcome of `formgen.validation.validate` back to
the caller and into the rendered form.
"""

from collections import defaultdict
from typing import Any

from pydantic import BaseModel, Field


class ValidationError(BaseModel):
    """A single failed check on a field."""

    field: str = Field(..., description="Dotted name of the field with the error")
    type: str = Field(..., description="Failure kind, e.g. required, email, len")
    value: str = Field(default="", description="Submitted value, stringified")
    override: str = Field(default="", description="Message used verbatim instead of the default")
    param: Any | None = Field(default=None, description="Constraint parameter, e.g. the length")

    @property
    def message(self) -> str:
        """Human-readable message for this failure."""
        if self.override:
            return self.override

        if self.type == "email":
            return "Invalid Email"
        if self.type == "len":
            return f"Invalid Length, needs: {self.param}"
        if self.type == "alpha":
            return "Letters Only"
        if self.type == "min":
            return f"Too Short, needs at least: {self.param}"
        if self.type == "max":
            return f"Too Long, at most: {self.param}"

        return self.type[:1].upper() + self.type[1:]

    def __str__(self) -> str:
        return self.message


class ValidationResult(BaseModel):
    """Result of validating a record."""

    is_valid: bool = Field(..., description="Whether the data is valid")
    errors: list[ValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    record: Any | None = Field(
        default=None,
        description="Validated record, or the unvalidated submission when invalid",
    )

    @property
    def failed_fields(self) -> list[str]:
        """Dotted names with at least one failure, in reporting order."""
        return list(dict.fromkeys(error.field for error in self.errors))

    def errors_for(self, name: str) -> list[ValidationError]:
        return [error for error in self.errors if error.field == name]

    def messages(self) -> dict[str, list[str]]:
        """Rendered messages grouped under the field they belong to."""
        grouped: defaultdict[str, list[str]] = defaultdict(list)
        for error in self.errors:
            grouped[error.field].append(error.message)
        return dict(grouped)
