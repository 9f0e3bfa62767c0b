"""Jinja2-backed field renderer."""

import logging
from collections.abc import Callable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound

from formgen.errors import TemplateLoadError
from formgen.models.field import Field
from formgen.rendering.templates import DEFAULT_TEMPLATE, FILTERS

logger = logging.getLogger(__name__)

# Anything that turns one field into markup.
Renderer = Callable[[Field], str]


def _environment(loader: FileSystemLoader | None = None) -> Environment:
    env = Environment(autoescape=True, loader=loader, trim_blocks=True, lstrip_blocks=True)
    env.filters.update(FILTERS)
    return env


class TemplateRenderer:
    """
    Render fields through a Jinja2 template.

    Usage:
        render = TemplateRenderer()
        html = render(field)

        render = TemplateRenderer.from_file("field.html", base_dir="templates")
    """

    def __init__(self, template: Template | None = None):
        self.template = template or _environment().from_string(DEFAULT_TEMPLATE)

    @classmethod
    def from_string(cls, source: str) -> "TemplateRenderer":
        return cls(_environment().from_string(source))

    @classmethod
    def from_file(cls, path: str | Path, base_dir: str | Path | None = None) -> "TemplateRenderer":
        """
        Load a template file.

        Args:
            path: Template file, relative to base_dir when one is given.
            base_dir: Directory searched for the template (and its includes).

        Raises:
            TemplateLoadError: If the template cannot be found or read.
        """
        if base_dir:
            search, name = Path(base_dir), str(path)
        else:
            path = Path(path)
            search, name = path.parent, path.name

        env = _environment(FileSystemLoader(str(search)))
        try:
            template = env.get_template(name)
        except (TemplateNotFound, OSError) as e:
            raise TemplateLoadError(f"could not load template {name!r} from {search}: {e}") from e

        logger.info(f"Loaded form template {name} from {search}")
        return cls(template)

    def __call__(self, field: Field) -> str:
        return self.template.render(field=field)
