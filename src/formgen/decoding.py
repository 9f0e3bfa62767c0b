"""
Decoding submitted forms and binding records.

Submitted field names are the dotted paths produced by the extractor;
`unflatten` turns them back into the nested shape pydantic validates.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel
from starlette.requests import Request

from formgen.errors import InvalidMethodError
from formgen.extraction.extractor import MemberKind, schema_for
from formgen.extraction.paths import SEPARATOR

logger = logging.getLogger(__name__)


def _set_path(target: dict, parts: list[str], value: Any) -> None:
    node = target
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child

    leaf = parts[-1]
    if leaf in node and not isinstance(node[leaf], dict):
        existing = node[leaf]
        node[leaf] = [*existing, value] if isinstance(existing, list) else [existing, value]
    else:
        node[leaf] = value


def _listify(node: Any) -> Any:
    """Turn dicts keyed only by indexes into lists, bottom-up."""
    if not isinstance(node, dict):
        return node
    converted = {k: _listify(v) for k, v in node.items()}
    if converted and all(k.isdigit() for k in converted):
        return [converted[k] for k in sorted(converted, key=int)]
    return converted


def unflatten(pairs: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """
    Turn dotted form keys into nested data.

    ``{"Address.Street1": "1 Main", "Phones.0.Number": "555"}`` becomes
    ``{"Address": {"Street1": "1 Main"}, "Phones": [{"Number": "555"}]}``.
    Repeated keys collect into a list.
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    nested: dict[str, Any] = {}
    for key, value in items:
        parts = [p for p in key.split(SEPARATOR) if p]
        if parts:
            _set_path(nested, parts, value)
    return _listify(nested)


async def decode_post(request: Request, prefix: str = "") -> dict[str, Any]:
    """
    Read a POSTed form into nested data.

    Args:
        request: The incoming Starlette request.
        prefix: Namespace prefix to strip from field names.

    Raises:
        InvalidMethodError: If the request is not a POST.
    """
    if request.method != "POST":
        raise InvalidMethodError(request.method)

    form = await request.form()
    pairs = []
    for key, value in form.multi_items():
        if prefix:
            if not key.startswith(prefix):
                continue
            key = key[len(prefix):]
        pairs.append((key, value))

    logger.debug(f"Decoded {len(pairs)} form values from {request.url.path}")
    return unflatten(pairs)


def _read(source: Any, attr: str, name: str) -> tuple[bool, Any]:
    if isinstance(source, Mapping):
        for key in (name, attr):
            if key in source:
                return True, source[key]
        return False, None
    for key in (attr, name):
        if hasattr(source, key):
            return True, getattr(source, key)
    return False, None


def bind(source: Any, target: type[BaseModel]) -> BaseModel:
    """
    Copy same-named members from `source` into a new `target` instance.

    The source may be any object or mapping, e.g. a database row. Values
    are copied without validation; nested records are bound recursively.
    """
    values: dict[str, Any] = {}
    for member in schema_for(target).members:
        found, value = _read(source, member.attr, member.name)
        if not found:
            continue
        if member.kind is MemberKind.RECORD and value is not None:
            value = value if isinstance(value, member.model) else bind(value, member.model)
        elif member.kind is MemberKind.RECORD_LIST and value is not None:
            value = [
                item if isinstance(item, member.model) else bind(item, member.model)
                for item in value
            ]
        values[member.attr] = value
    return target.model_construct(**values)
