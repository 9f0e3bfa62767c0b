"""
Field descriptor models.

A `Field` carries everything a template needs to render one input
control. Fields are produced by the extractor and then enriched by the
presentation adapter before being handed to a renderer.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field as ModelField


# Parsed tag option values: plain options are strings, flags are True.
TagValue = Union[str, int, float, bool, dict]

# Option value stored behind a select/checkbox label.
SelectValue = Union[str, int, float, bool]

# Registered select/checkbox options, display label -> option value.
SelectItems = dict[str, SelectValue]


class FieldType(str, Enum):
    """Input types understood by the default template."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    DATE = "date"
    DATETIME_LOCAL = "datetime-local"
    TIME = "time"
    CHECKBOX = "checkbox"
    SELECT = "select"
    TEXTAREA = "textarea"
    HIDDEN = "hidden"


# Types that take a registered select map.
CHOICE_TYPES = frozenset({FieldType.CHECKBOX.value, FieldType.SELECT.value})


class Field(BaseModel):
    """Descriptor for a single rendered input."""

    name: str = ModelField(..., min_length=1, description="Dotted field path, used as the HTML name")
    id: str = ModelField(default="", description="DOM identifier")
    label: str = ModelField(default="", description="Label text")
    placeholder: str = ModelField(default="", description="Placeholder text")
    footer: str = ModelField(default="", description="Help text shown under the input")
    type: str = ModelField(default=FieldType.TEXT.value, description="HTML input type")
    value: str = ModelField(default="", description="Current value, stringified")

    items: SelectItems = ModelField(
        default_factory=dict,
        description="Select/checkbox options, label -> option value",
    )
    select_value: str = ModelField(default="", description="Label matching the current value")
    options: dict[str, str] = ModelField(
        default_factory=dict,
        description="Options as rendered, label -> submitted value",
    )
    errors: list[str] = ModelField(default_factory=list, description="Validation messages")

    attrs: str = ModelField(default="", description="Extra HTML attributes")
    prefix: str = ModelField(default="", description="Namespace prefix of the owning form")

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def is_hidden(self) -> bool:
        """Check if this is a hidden input."""
        return self.type == FieldType.HIDDEN.value

    def is_choice(self) -> bool:
        """Check if this field takes a select map."""
        return self.type in CHOICE_TYPES
