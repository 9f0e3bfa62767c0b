"""
Field extraction.

Walks a pydantic record and produces one `Field` per leaf member, in
declaration order, depth-first through nested records. The member layout
of each model class is read once into a `RecordSchema` and cached; only
the values are read on every call.
"""

import functools
import logging
import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel, SecretStr
from pydantic.fields import FieldInfo

from formgen.errors import NotARecordError
from formgen.extraction.paths import field_id, humanize, resolve_name
from formgen.extraction.tags import is_omitted, parse_tag, raw_tag
from formgen.models.field import Field, FieldType, TagValue

logger = logging.getLogger(__name__)

KNOWN_OPTIONS = frozenset(
    {"label", "placeholder", "type", "footer", "attrs", "id", "date", "skip"}
)


class MemberKind(str, Enum):
    LEAF = "leaf"
    RECORD = "record"
    RECORD_LIST = "record_list"


@dataclass(frozen=True)
class MemberSpec:
    """One declared member of a record type."""

    attr: str
    name: str
    kind: MemberKind
    input_type: str
    label: str
    footer: str = ""
    options: dict[str, TagValue] = field(default_factory=dict)
    model: type[BaseModel] | None = None
    omitted: bool = False
    accepts_blank: bool = True


@dataclass(frozen=True)
class RecordSchema:
    """Ordered member layout of a record type."""

    model: type[BaseModel]
    members: tuple[MemberSpec, ...]

    @property
    def visible(self) -> tuple[MemberSpec, ...]:
        """Members that take part in the form."""
        return tuple(m for m in self.members if not m.omitted)


def _unwrap(annotation: Any) -> Any:
    """Strip Annotated and Optional wrappers."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _unwrap(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
    return annotation


def _is_class(tp: Any) -> bool:
    # list[int] and friends pass isinstance(tp, type) on some versions
    return isinstance(tp, type) and get_origin(tp) is None


def _is_model(tp: Any) -> bool:
    return _is_class(tp) and issubclass(tp, BaseModel)


def _list_item_model(tp: Any) -> type[BaseModel] | None:
    origin = get_origin(tp)
    if origin in (list, tuple, Sequence):
        args = [a for a in get_args(tp) if a is not Ellipsis]
        if len(args) == 1:
            item = _unwrap(args[0])
            if _is_model(item):
                return item
    return None


def _accepts_blank(tp: Any) -> bool:
    # "" is what an untouched number, date or checkbox input posts
    if not _is_class(tp):
        return True
    if issubclass(tp, Enum):
        return False
    return issubclass(tp, (str, SecretStr))


def infer_type(tp: Any) -> str:
    """Map a declared Python type to its default input type."""
    tp = _unwrap(tp)
    if not _is_class(tp):
        return FieldType.TEXT.value
    if issubclass(tp, bool):
        return FieldType.CHECKBOX.value
    if issubclass(tp, datetime):
        return FieldType.DATETIME_LOCAL.value
    if issubclass(tp, date):
        return FieldType.DATE.value
    if issubclass(tp, time):
        return FieldType.TIME.value
    if issubclass(tp, Enum):
        return FieldType.TEXT.value
    if issubclass(tp, (int, float, Decimal)):
        return FieldType.NUMBER.value
    if issubclass(tp, SecretStr):
        return FieldType.PASSWORD.value
    return FieldType.TEXT.value


def _member_spec(attr: str, info: FieldInfo) -> MemberSpec:
    tag = raw_tag(info)
    options = parse_tag(tag)

    unknown = set(options) - KNOWN_OPTIONS
    if unknown:
        logger.debug(f"Ignoring unknown tag options on {attr}: {sorted(unknown)}")

    name = info.alias or attr
    tp = _unwrap(info.annotation)
    item_model = _list_item_model(tp)

    if _is_model(tp):
        kind, model = MemberKind.RECORD, tp
    elif item_model is not None:
        kind, model = MemberKind.RECORD_LIST, item_model
    else:
        kind, model = MemberKind.LEAF, None

    return MemberSpec(
        attr=attr,
        name=name,
        kind=kind,
        input_type=infer_type(tp),
        label=info.title or humanize(name),
        footer=info.description or "",
        options=options,
        model=model,
        omitted=is_omitted(tag, options),
        accepts_blank=kind is not MemberKind.LEAF or _accepts_blank(tp),
    )


@functools.lru_cache(maxsize=None)
def schema_for(model: type[BaseModel]) -> RecordSchema:
    """Build (once per model class) the ordered member layout."""
    members = tuple(_member_spec(attr, info) for attr, info in model.model_fields.items())
    logger.debug(f"Built schema for {model.__name__} with {len(members)} members")
    return RecordSchema(model=model, members=members)


def stringify(value: Any, input_type: str = "") -> str:
    """Render a member value the way it is written into an input."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else ""
    if isinstance(value, (int, float, Decimal)) and value == 0:
        return ""
    if isinstance(value, SecretStr):
        return ""
    if isinstance(value, datetime):
        if input_type == FieldType.DATE.value:
            return value.date().isoformat()
        return value.strftime("%Y-%m-%dT%H:%M")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, Enum):
        return stringify(value.value, input_type)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(stringify(v) for v in value)
    return str(value)


def _option(options: dict[str, TagValue], key: str, default: str) -> str:
    value = options.get(key)
    if isinstance(value, str):
        return value
    return default


def _member_value(record: Any, member: MemberSpec) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(member.name, record.get(member.attr))
    return getattr(record, member.attr, None)


def _leaf(member: MemberSpec, value: Any, ancestors: Sequence[str]) -> Field:
    options = member.options
    name = resolve_name(ancestors, member.name)

    input_type = _option(options, "type", member.input_type)
    if input_type == FieldType.DATETIME_LOCAL.value and options.get("date") is True:
        input_type = FieldType.DATE.value

    return Field(
        name=name,
        id=_option(options, "id", field_id(name)),
        label=_option(options, "label", member.label),
        placeholder=_option(options, "placeholder", member.label),
        footer=_option(options, "footer", member.footer),
        type=input_type,
        value=stringify(value, input_type),
        attrs=_option(options, "attrs", ""),
    )


def _walk(
    schema: RecordSchema,
    record: Any,
    ancestors: tuple[str, ...],
    stack: tuple[type[BaseModel], ...],
    out: list[Field],
) -> None:
    for member in schema.visible:
        value = _member_value(record, member)

        if member.kind is MemberKind.RECORD:
            if value is None and member.model in stack:
                # An unset self-referencing member would recurse forever.
                logger.debug(f"Stopping at unset recursive member {member.name}")
                continue
            if value is None:
                value = member.model.model_construct()
            _walk(
                schema_for(member.model),
                value,
                (*ancestors, member.name),
                (*stack, member.model),
                out,
            )
        elif member.kind is MemberKind.RECORD_LIST:
            for index, item in enumerate(value or ()):
                _walk(
                    schema_for(member.model),
                    item,
                    (*ancestors, member.name, str(index)),
                    (*stack, member.model),
                    out,
                )
        else:
            out.append(_leaf(member, value, ancestors))


def extract(record: BaseModel) -> list[Field]:
    """
    Extract the ordered field descriptors of a record.

    Args:
        record: A pydantic model instance. It is only read.

    Returns:
        One Field per leaf member, nested records flattened in place.

    Raises:
        NotARecordError: If record is not a model instance.
    """
    if not isinstance(record, BaseModel):
        raise NotARecordError(record)

    model = type(record)
    fields: list[Field] = []
    _walk(schema_for(model), record, (), (model,), fields)
    logger.debug(f"Extracted {len(fields)} fields from {model.__name__}")
    return fields
