"""
Icon resolution for integrations.
"""
import os
from typing import Optional

from . import conf
from .base import AbstractIntegration
from .locator import INTEGRATION_DIRECTORY


def get_plugin_namespace(integration: AbstractIntegration) -> str:
    """
    Namespace of the plugin that contributes the integration class.

    Taken from the module path ``<plugin package>.integration.<module>``.
    """
    parts = integration.__class__.__module__.split('.')
    if INTEGRATION_DIRECTORY in parts:
        index = parts.index(INTEGRATION_DIRECTORY)
        if index > 0:
            return parts[index - 1]
    return parts[0]


def get_icon_path(integration: AbstractIntegration, root_path: Optional[str] = None) -> str:
    """
    Get the path to the integration's icon relative to the site root.

    Falls back to the generic icon when the plugin ships no icon.
    """
    root_path = root_path if root_path is not None else conf.get_root_path()
    name = integration.get_name()
    settings = integration.integration_settings
    if settings is not None and getattr(settings, 'name', None):
        name = settings.name

    icon = f"plugins/{get_plugin_namespace(integration)}/Assets/img/{name.lower()}.png"
    if os.path.exists(os.path.join(root_path, icon)):
        return icon

    return conf.get_generic_icon()
