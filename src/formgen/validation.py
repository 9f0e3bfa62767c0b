"""
Validation of records and submitted form data.

Validation is delegated to pydantic. Its errors are translated into
`ValidationError` objects keyed by the same dotted names the extractor
produces, so they can be attached to the rendered fields.

The annotated types below raise failures with the kinds the default
messages know about:

    class Signup(BaseModel):
        name: Required
        email: Email
        initials: Annotated[Alpha, length(2)]
"""

import logging
import re
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from formgen.errors import InvalidValidationTargetError
from formgen.extraction.extractor import MemberKind, schema_for
from formgen.models.validation_result import ValidationError, ValidationResult

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# pydantic error types renamed to the kinds used in messages
KIND_ALIASES = {
    "missing": "required",
    "string_too_short": "min",
    "string_too_long": "max",
    "too_short": "min",
    "too_long": "max",
}

# ctx keys holding the constraint parameter of a pydantic error
PARAM_KEYS = ("param", "min_length", "max_length", "ge", "gt", "le", "lt", "pattern")


def _check_required(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("required", "Required")
    return value


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email", "Invalid Email")
    return value


def _check_alpha(value: str) -> str:
    if not value.isalpha():
        raise PydanticCustomError("alpha", "Letters Only")
    return value


def length(size: int) -> AfterValidator:
    """Validator requiring a string of exactly `size` characters."""

    def check(value: str) -> str:
        if len(value) != size:
            raise PydanticCustomError(
                "len", "Invalid Length, needs: {param}", {"param": size}
            )
        return value

    return AfterValidator(check)


Required = Annotated[str, AfterValidator(_check_required)]
Email = Annotated[str, AfterValidator(_check_email)]
Alpha = Annotated[str, AfterValidator(_check_alpha)]


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def _param(ctx: Mapping[str, Any] | None) -> Any:
    if not ctx:
        return None
    for key in PARAM_KEYS:
        if key in ctx:
            return ctx[key]
    return None


def _value(raw: Any) -> str:
    if raw is None or isinstance(raw, (Mapping, BaseModel)):
        return ""
    return str(raw)


def convert_errors(exc: PydanticValidationError) -> list[ValidationError]:
    """Translate a pydantic ValidationError into formgen validation errors."""
    errors = []
    for err in exc.errors():
        kind = KIND_ALIASES.get(err["type"], err["type"])
        errors.append(
            ValidationError(
                field=_field_name(err["loc"]),
                type=kind,
                value=_value(err.get("input")),
                param=_param(err.get("ctx")),
            )
        )
    return errors


def construct(model: type[BaseModel], data: Any) -> BaseModel:
    """
    Build a model instance from raw data without validating it.

    Nested records are constructed recursively so the result can be
    handed to the extractor to re-render a rejected submission.
    """
    if isinstance(data, model):
        return data
    if not isinstance(data, Mapping):
        data = {}

    values: dict[str, Any] = {}
    for member in schema_for(model).members:
        if member.name in data:
            raw = data[member.name]
        elif member.attr in data:
            raw = data[member.attr]
        else:
            continue

        if member.kind is MemberKind.RECORD and raw is not None:
            raw = construct(member.model, raw)
        elif member.kind is MemberKind.RECORD_LIST:
            if isinstance(raw, Mapping):
                raw = [raw[k] for k in sorted(raw, key=_index_key)]
            raw = [construct(member.model, item) for item in raw or ()]
        values[member.attr] = raw
    return model.model_construct(**values)


def drop_blanks(model: type[BaseModel], data: Any) -> Any:
    """
    Remove empty strings submitted for members that cannot hold one.

    Untouched number, date, time and checkbox inputs post "". Dropping
    them lets the member fall back to its default, or be reported as
    required when it has none.
    """
    if not isinstance(data, Mapping):
        return data

    cleaned = dict(data)
    for member in schema_for(model).members:
        key = member.name if member.name in cleaned else member.attr
        if key not in cleaned:
            continue
        raw = cleaned[key]
        if member.kind is MemberKind.LEAF:
            if raw == "" and not member.accepts_blank:
                del cleaned[key]
        elif member.kind is MemberKind.RECORD:
            cleaned[key] = drop_blanks(member.model, raw)
        elif isinstance(raw, Mapping):
            cleaned[key] = {k: drop_blanks(member.model, v) for k, v in raw.items()}
        elif isinstance(raw, list):
            cleaned[key] = [drop_blanks(member.model, item) for item in raw]
    return cleaned


def _index_key(key: Any) -> tuple[int, Any]:
    text = str(key)
    return (int(text), "") if text.isdigit() else (1 << 30, text)


def validate(target: Any, data: Mapping[str, Any] | None = None) -> ValidationResult:
    """
    Validate a record or submitted data.

    Args:
        target: A model class (validates `data`) or a model instance
            (re-validates its current content).
        data: Nested submitted data, required when target is a class.

    Returns:
        A ValidationResult; `record` holds the validated model, or the
        unvalidated submission when validation failed.

    Raises:
        InvalidValidationTargetError: If target is neither a model class
            nor a model instance.
    """
    if isinstance(target, BaseModel):
        model = type(target)
        payload: Any = target.model_dump(by_alias=True, exclude_unset=True, warnings=False)
    elif isinstance(target, type) and issubclass(target, BaseModel):
        model = target
        payload = data if data is not None else {}
    else:
        raise InvalidValidationTargetError(
            f"cannot validate {type(target).__name__}; expected a pydantic model or model class"
        )

    if not isinstance(payload, Mapping):
        raise InvalidValidationTargetError(
            f"cannot validate {type(payload).__name__} data against {model.__name__}"
        )
    if not isinstance(target, BaseModel):
        payload = drop_blanks(model, payload)

    try:
        record = model.model_validate(payload)
    except PydanticValidationError as e:
        errors = convert_errors(e)
        logger.debug(f"{model.__name__} failed validation with {len(errors)} errors")
        submitted = target if isinstance(target, BaseModel) else construct(model, payload)
        return ValidationResult(is_valid=False, errors=errors, record=submitted)

    return ValidationResult(is_valid=True, record=record)
