"""
formgen: HTML forms from pydantic records.

Declare a record, render it, validate what comes back.

Simple Usage:
    from pydantic import BaseModel
    from formgen import Form, form_field

    class Address(BaseModel):
        Street1: str = form_field("label=Street", default="")
        State: str = form_field("type=select", default="")

    class Customer(BaseModel):
        Name: str = ""
        Address: Address | None = None

    form = Form()
    form.select("Address.State", {"California": "CA", "New York": "NY"})
    html = form.render(Customer())

Submitting:
    data = await form.decode_post(request)
    result = form.validate(Customer, data)
    if not result.is_valid:
        html = form.render(result.record, result.errors)

Field descriptors only:
    from formgen import extract, present, PresentationConfig

    fields = present(extract(customer), PresentationConfig(skip=["Address."]))
"""

from formgen.config import get_config, setup_logging, update_config
from formgen.decoding import bind, decode_post, unflatten
from formgen.errors import (
    FormError,
    InvalidMethodError,
    InvalidValidationTargetError,
    NotARecordError,
    TemplateLoadError,
)
from formgen.extraction import (
    FormTag,
    extract,
    form_field,
    parse_tag,
    resolve_name,
    schema_for,
)
from formgen.form import Form
from formgen.models import (
    Field,
    FieldType,
    SelectItems,
    TagValue,
    ValidationError,
    ValidationResult,
)
from formgen.presentation import PresentationConfig, present
from formgen.rendering import Renderer, TemplateRenderer
from formgen.validation import Alpha, Email, Required, length, validate

__all__ = [
    # Main interface
    "Form",
    "form_field",
    "FormTag",
    # Extraction
    "extract",
    "parse_tag",
    "resolve_name",
    "schema_for",
    # Presentation
    "present",
    "PresentationConfig",
    # Models
    "Field",
    "FieldType",
    "SelectItems",
    "TagValue",
    # Validation
    "validate",
    "ValidationError",
    "ValidationResult",
    "Required",
    "Email",
    "Alpha",
    "length",
    # Decoding
    "decode_post",
    "unflatten",
    "bind",
    # Rendering
    "Renderer",
    "TemplateRenderer",
    # Errors
    "FormError",
    "NotARecordError",
    "InvalidValidationTargetError",
    "InvalidMethodError",
    "TemplateLoadError",
    # Config
    "get_config",
    "update_config",
    "setup_logging",
]

__version__ = "0.1.0"
