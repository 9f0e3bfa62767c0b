"""
Field name resolution.

Names are dotted paths (``Address.Street1``, ``Phones.0.Number``) so a
submitted form can be unflattened back into the same nested shape.
"""

import re
from collections.abc import Sequence

SEPARATOR = "."

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def resolve_name(ancestors: Sequence[str], member: str) -> str:
    """Join the ancestor chain and the member name into a field name."""
    if not ancestors:
        return member
    return SEPARATOR.join([*ancestors, member])


def humanize(name: str) -> str:
    """
    Turn a member name into a display label.

    ``first_name`` and ``FirstName`` both become ``First Name``; words
    that are already upper case (``ZIP``) are left alone.
    """
    words: list[str] = []
    for chunk in name.replace("-", "_").split("_"):
        if chunk:
            words.extend(_CAMEL_BOUNDARY.sub(" ", chunk).split())
    return " ".join(w if w.isupper() else w[:1].upper() + w[1:] for w in words)


def field_id(name: str) -> str:
    """Sanitize a field name into a DOM id."""
    return _NON_ID_CHARS.sub("_", name)
