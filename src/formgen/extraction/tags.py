"""
Form tags attached to model fields.

A tag is a semicolon-delimited option string such as
``"label=Postal Code;type=email;required"``. Options without ``=`` are
flags. Tags are attached either through `form_field`:

    class Address(BaseModel):
        zip: str = form_field("label=Postal Code", default="")

or as ``Annotated`` metadata:

    zip: Annotated[str, FormTag("label=Postal Code")] = ""
"""

from dataclasses import dataclass
from typing import Any

from pydantic import Field
from pydantic.fields import FieldInfo

from formgen.models.field import TagValue

# Key under json_schema_extra holding the raw tag string.
TAG_KEY = "form"

# Tag that removes a member from the form entirely.
OMIT_TAG = "-"


@dataclass(frozen=True)
class FormTag:
    """Annotated marker carrying a raw tag string."""

    raw: str


def parse_tag(raw: str | None) -> dict[str, TagValue]:
    """Parse a raw tag string into an option map."""
    options: dict[str, TagValue] = {}
    if not raw:
        return options

    for part in raw.split(";"):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        key = key.strip()
        if not key:
            continue
        options[key] = value.strip() if sep else True
    return options


def form_field(tag: str = "", default: Any = ..., **kwargs: Any) -> Any:
    """Declare a pydantic field carrying a form tag."""
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[TAG_KEY] = tag
    return Field(default, json_schema_extra=extra, **kwargs)


def raw_tag(info: FieldInfo) -> str:
    """Return the raw tag string declared on a model field, or an empty string."""
    for meta in info.metadata:
        if isinstance(meta, FormTag):
            return meta.raw

    extra = info.json_schema_extra
    if isinstance(extra, dict):
        tag = extra.get(TAG_KEY)
        if isinstance(tag, str):
            return tag
    return ""


def is_omitted(raw: str, options: dict[str, TagValue]) -> bool:
    """Check whether a tag removes its member from the form."""
    return raw.strip() == OMIT_TAG or options.get("skip") is True
