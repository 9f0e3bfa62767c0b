"""
Field presentation.

Applies a form's runtime configuration to freshly extracted fields:
skip filters, select/checkbox options, validation messages and the
namespace prefix. Inputs are never modified; enriched copies are returned.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from formgen.extraction.extractor import stringify
from formgen.extraction.paths import SEPARATOR, field_id
from formgen.models.field import Field, SelectItems
from formgen.models.validation_result import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class PresentationConfig:
    """Runtime configuration read by `present`."""

    skip: Sequence[str] = field(default_factory=list)
    selects: Mapping[str, SelectItems] = field(default_factory=dict)
    prefix: str = ""
    errors: Sequence[ValidationError] = field(default_factory=list)


def is_skipped(name: str, skip: Iterable[str]) -> bool:
    """
    Check a field name against the skip entries.

    An entry matches its exact name. An entry ending in the path
    separator hides a whole nested section: it matches names starting
    with it, and names where it follows a separator (``Address.`` also
    hides ``Order.Address.Street1`` but not ``BillingAddress.Street1``).
    """
    for entry in skip:
        if not entry:
            continue
        if entry == name:
            return True
        if entry.endswith(SEPARATOR):
            if name.startswith(entry) or (SEPARATOR + entry) in name:
                return True
    return False


def resolve_options(value: str, items: SelectItems) -> tuple[dict[str, str], str]:
    """
    Orient a select map for rendering and find the label of a value.

    Maps are label -> value. When no option matches the stored value but
    the value is itself a key, the map was registered code -> label and
    is flipped, so the rendered options submit the code.

    Returns:
        The options as label -> submitted value, and the selected label
        ("" when nothing matches).
    """
    options = {label: stringify(option) for label, option in items.items()}
    for label, option in options.items():
        if option == value:
            return options, label
    if value in items:
        flipped = {stringify(label): code for code, label in items.items()}
        return flipped, stringify(items[value])
    return options, ""


def resolve_select_value(value: str, items: SelectItems) -> str:
    """Find the display label for a stored value."""
    return resolve_options(value, items)[1]


def present(fields: Iterable[Field], config: PresentationConfig) -> list[Field]:
    """
    Produce the final field sequence handed to rendering.

    Args:
        fields: Raw fields from extraction.
        config: Skip entries, select maps, prefix and validation errors.

    Returns:
        Enriched copies of the fields that were not skipped, in order.
    """
    result: list[Field] = []
    for raw in fields:
        if is_skipped(raw.name, config.skip):
            logger.debug(f"Skipping field {raw.name}")
            continue

        update: dict = {}

        if raw.is_choice():
            items = config.selects.get(raw.name)
            if items is not None:
                options, selected = resolve_options(raw.value, items)
                update["items"] = dict(items)
                update["options"] = options
                update["select_value"] = selected
            else:
                logger.debug(f"No select map registered for {raw.type} field {raw.name}")

        messages = [e.message for e in config.errors if e.field == raw.name]
        if messages:
            update["errors"] = [*raw.errors, *messages]

        update["prefix"] = config.prefix
        if config.prefix:
            update["name"] = config.prefix + raw.name
            update["id"] = field_id(config.prefix) + raw.id if raw.id else ""

        result.append(raw.model_copy(update=update, deep=True))
    return result
