"""
Record introspection for formgen.

Turns pydantic records into ordered `Field` descriptors.
"""

from formgen.extraction.extractor import (
    MemberKind,
    MemberSpec,
    RecordSchema,
    extract,
    infer_type,
    schema_for,
    stringify,
)
from formgen.extraction.paths import field_id, humanize, resolve_name
from formgen.extraction.tags import FormTag, form_field, parse_tag

__all__ = [
    "extract",
    "schema_for",
    "infer_type",
    "stringify",
    "MemberKind",
    "MemberSpec",
    "RecordSchema",
    "resolve_name",
    "humanize",
    "field_id",
    "FormTag",
    "form_field",
    "parse_tag",
]
