"""
Plugin management collaborators.

The registry depends on two operations only: listing the installed plugins
with their enabled status, and resolving a discovered integration to its
class.
"""
import importlib
import importlib.util
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Type
import logging

from . import conf
from .base import (
    AbstractIntegration,
    IntegrationDescriptor,
    PluginDescriptor,
    get_integration_class,
)

logger = logging.getLogger(__name__)


class PluginProvider(ABC):
    """Abstract source of installed plugins."""

    @abstractmethod
    def get_plugins(self) -> List[PluginDescriptor]:
        """Return every installed plugin with its enabled status."""
        pass


class SettingsPluginProvider(PluginProvider):
    """
    Plugins listed in ``ADDONS_PLUGIN_PACKAGES``.

    Enabled status and ids come from the ``Plugin`` model, keyed by the
    package name. Packages without a stored ``Plugin`` row are reported as
    disabled.
    """

    def __init__(self, packages: Optional[List[str]] = None):
        self.packages = list(packages) if packages is not None else conf.get_plugin_packages()

    def get_plugins(self) -> List[PluginDescriptor]:
        from .models import Plugin

        statuses = {plugin.bundle: plugin for plugin in Plugin.objects.filter(bundle__in=self.packages)}
        plugins = []

        for package in self.packages:
            directory = self._get_package_directory(package)
            if directory is None:
                continue

            status = statuses.get(package)
            plugins.append(PluginDescriptor(
                id=status.pk if status else None,
                bundle=package,
                name=status.name if status and status.name else package.rsplit('.', 1)[-1],
                package=package,
                directory=directory,
                is_enabled=bool(status and status.is_enabled),
            ))

        return plugins

    def _get_package_directory(self, package: str) -> Optional[Path]:
        try:
            spec = importlib.util.find_spec(package)
        except (ImportError, ValueError) as e:
            logger.warning(f"Add-on plugin package '{package}' cannot be located: {e}")
            return None

        if spec is None or not spec.submodule_search_locations:
            logger.warning(f"Add-on plugin package '{package}' is not installed or is not a package")
            return None

        return Path(list(spec.submodule_search_locations)[0])


class IntegrationClassResolver:
    """Resolves integration descriptors to their registered classes."""

    def resolve(self, descriptor: IntegrationDescriptor) -> Optional[Type[AbstractIntegration]]:
        """
        Import the integration module and look the class up in the class table.

        Args:
            descriptor: The discovered integration

        Returns:
            The integration class, or None if it cannot be resolved
        """
        try:
            importlib.import_module(descriptor.module_path)
        except Exception as e:
            logger.error(
                f"Failed to import integration module '{descriptor.module_path}': {e}",
                exc_info=True
            )
            return None

        integration_class = get_integration_class(descriptor.module_path, descriptor.name)
        if integration_class is None:
            logger.warning(
                f"No integration named '{descriptor.name}' registered in {descriptor.module_path}"
            )
        return integration_class
