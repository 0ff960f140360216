"""
Template rendering interfaces for the add-ons app.

Share buttons are rendered through a ``TemplateRenderer`` so applications
can plug in their own template storage. The default renderer uses Django's
template engine.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

from django.template.loader import render_to_string


class TemplateRenderer(ABC):
    """Abstract base class for template renderers."""

    @abstractmethod
    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template.

        Args:
            template_name: Plugin and integration qualified template name
            context: Template context

        Returns:
            Rendered markup; callers do not parse or validate it
        """
        pass


class DjangoTemplateRenderer(TemplateRenderer):
    """Renders templates with the configured Django template engines."""

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        return render_to_string(template_name, context)


# Global template renderer instance
_template_renderer: TemplateRenderer = DjangoTemplateRenderer()


def set_template_renderer(renderer: TemplateRenderer) -> None:
    """Set the global template renderer."""
    global _template_renderer
    _template_renderer = renderer


def get_template_renderer() -> TemplateRenderer:
    """Get the current template renderer."""
    return _template_renderer
