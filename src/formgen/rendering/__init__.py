"""
Rendering of field descriptors into markup.
"""

from formgen.rendering.renderer import Renderer, TemplateRenderer
from formgen.rendering.templates import DEFAULT_TEMPLATE, FILTERS

__all__ = [
    "Renderer",
    "TemplateRenderer",
    "DEFAULT_TEMPLATE",
    "FILTERS",
]
