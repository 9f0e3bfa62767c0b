"""
Form descriptor.

This is the main entry point for formgen. A `Form` holds the runtime
configuration of one logical form (template, select maps, skip entries,
prefix) and renders records through it.
"""

import logging
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from markupsafe import Markup
from pydantic import BaseModel
from starlette.requests import Request

from formgen.config import get_config
from formgen.decoding import bind, decode_post
from formgen.extraction.extractor import extract
from formgen.models.field import Field, SelectItems
from formgen.models.validation_result import ValidationError, ValidationResult
from formgen.presentation import PresentationConfig, present
from formgen.rendering.renderer import Renderer, TemplateRenderer
from formgen.validation import validate

logger = logging.getLogger(__name__)


class Form:
    """
    Render pydantic records as HTML forms.

    Usage:
        form = Form(prefix="billing.")
        form.select("State", {"California": "CA", "New York": "NY"})
        form.skip_field("Internal.")

        html = form.render(customer)

        # On submit
        data = await form.decode_post(request)
        result = form.validate(Customer, data)
        if not result.is_valid:
            html = form.render(result.record, result.errors)

    A Form is owned by one logical request at a time. Code sharing an
    instance across threads must hold `form.lock` around registration
    and rendering.
    """

    def __init__(
        self,
        template: str | Path | None = None,
        *,
        prefix: str | None = None,
        action: str = "",
        method: str | None = None,
        renderer: Renderer | None = None,
    ):
        """
        Initialize the form.

        Args:
            template: Template file for a single field. Relative paths are
                resolved against config.template_dir. If None, uses
                config.default_template, then the built-in template.
            prefix: Namespace prepended to every field name and id. If None,
                uses config.default_prefix.
            action: Form action URL, for the caller's outer template.
            method: Form method. If None, uses config.default_method.
            renderer: Callable rendering one Field; overrides template.

        Raises:
            TemplateLoadError: If a template file was requested but cannot be read.
        """
        config = get_config()
        self.prefix = config.default_prefix if prefix is None else prefix
        self.action = action
        self.method = method or config.default_method
        self.skip: list[str] = []
        self.selects: dict[str, SelectItems] = {}
        self.lock = threading.RLock()

        template = template or config.default_template or None
        if renderer is not None:
            self.renderer = renderer
        elif template is not None:
            self.renderer = TemplateRenderer.from_file(
                template, base_dir=config.template_dir or None
            )
        else:
            self.renderer = TemplateRenderer()

    def select(self, name: str, items: SelectItems) -> None:
        """Register the options of a select/checkbox field, label -> value."""
        if name in self.selects:
            logger.debug(f"Replacing select map for {name}")
        self.selects[name] = dict(items)

    def skip_field(self, name: str) -> None:
        """Hide a field, or a nested section when name ends with '.'."""
        if not name:
            logger.warning("Ignoring empty skip entry")
            return
        self.skip.append(name)

    def fields(
        self,
        record: BaseModel,
        errors: Sequence[ValidationError] | None = None,
    ) -> list[Field]:
        """Extract and enrich the fields of a record."""
        errors = list(errors or ())
        raw = extract(record)

        if errors and logger.isEnabledFor(logging.DEBUG):
            known = {f.name for f in raw}
            for error in errors:
                if error.field not in known:
                    logger.debug(f"No field named {error.field} for {error.type} error")

        config = PresentationConfig(
            skip=list(self.skip),
            selects=dict(self.selects),
            prefix=self.prefix,
            errors=errors,
        )
        return present(raw, config)

    def _render_fields(self, fields: list[Field]) -> Markup:
        parts = [self.renderer(field) for field in fields]
        return Markup("".join(parts))

    def render(
        self,
        record: BaseModel,
        errors: Sequence[ValidationError] | None = None,
    ) -> Markup:
        """Render every field of a record."""
        return self._render_fields(self.fields(record, errors))

    def render_field(
        self,
        record: BaseModel,
        name: str,
        errors: Sequence[ValidationError] | None = None,
    ) -> Markup:
        """Render only the field called `name` (unprefixed)."""
        fields = [f for f in self.fields(record, errors) if f.name == self.prefix + name]
        if not fields:
            logger.debug(f"No field named {name} to render")
        return self._render_fields(fields)

    def render_bind(
        self,
        source: Any,
        target: type[BaseModel],
        errors: Sequence[ValidationError] | None = None,
    ) -> Markup:
        """Copy `source` into a new `target` record and render it."""
        return self.render(bind(source, target), errors)

    async def decode_post(self, request: Request) -> dict[str, Any]:
        """Read a POSTed form into nested data, stripping this form's prefix."""
        return await decode_post(request, prefix=self.prefix)

    def validate(self, target: Any, data: dict[str, Any] | None = None) -> ValidationResult:
        """Validate a record, or submitted data against a model class."""
        return validate(target, data)
