"""
Share button markup for integrations offering the ``share_button`` feature.
"""
import logging
from typing import Dict, Optional

from .base import AbstractIntegration
from .cache import BuildOnceCache
from .features import FeatureTag
from .registry import IntegrationRegistry
from .rendering import TemplateRenderer, get_template_renderer

logger = logging.getLogger(__name__)

SHARE_SETTINGS_KEY = 'shareButton'


def get_share_template_name(integration: AbstractIntegration, namespace: str) -> str:
    """Template of an integration's share button, e.g. ``social/integration/twitter/share.html``."""
    return f"{namespace}/integration/{integration.get_name().lower()}/share.html"


class ShareButtonBuilder:
    """
    Renders and caches share buttons, keyed by integration name.

    Integrations are taken in alphabetical order. Unpublished integrations
    are skipped.
    """

    def __init__(self, registry: IntegrationRegistry, renderer: Optional[TemplateRenderer] = None):
        self.registry = registry
        self._renderer = renderer
        self._cache: BuildOnceCache[Dict[str, str]] = BuildOnceCache('share_buttons')

    @property
    def renderer(self) -> TemplateRenderer:
        return self._renderer or get_template_renderer()

    def build(self) -> Dict[str, str]:
        return self._cache.get_or_build(self._build)

    def invalidate(self) -> None:
        self._cache.invalidate()

    def _build(self) -> Dict[str, str]:
        integrations = self.registry.get_by_feature(FeatureTag.SHARE_BUTTON)
        buttons = {}

        for name in sorted(integrations):
            integration = integrations[name]
            if not integration.is_published():
                logger.debug(f"Skipping share button of unpublished integration '{name}'")
                continue

            settings = integration.integration_settings
            feature_settings = getattr(settings, 'feature_settings', None) or {}
            share_settings = dict(feature_settings.get(SHARE_SETTINGS_KEY) or {})
            share_settings['keys'] = dict(getattr(settings, 'api_keys', None) or {})

            descriptor = self.registry.get_descriptor(name)
            template_name = get_share_template_name(integration, descriptor.namespace if descriptor else '')
            try:
                buttons[name] = self.renderer.render(template_name, {'settings': share_settings})
            except Exception as e:
                logger.error(f"Failed to render share button for '{name}' ({template_name}): {e}")

        return buttons
