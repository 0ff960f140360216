"""
Plugin locator for discovering integrations contributed by add-on plugins.

The locator only reads the filesystem. Importing and validating the
integration modules is left to the registry.
"""
from pathlib import Path
from typing import Iterable, List
import logging

from .base import IntegrationDescriptor, PluginDescriptor

logger = logging.getLogger(__name__)

INTEGRATION_DIRECTORY = 'integration'
INTEGRATION_FILE_SUFFIX = '_integration.py'


def integration_name_from_file(file_name: str) -> str:
    """
    Convert an integration file name to an integration name.

    ``google_plus_integration.py`` becomes ``GooglePlus``.
    """
    stem = file_name[:-len(INTEGRATION_FILE_SUFFIX)]
    return ''.join(part[:1].upper() + part[1:] for part in stem.split('_') if part)


class PluginLocator:
    """
    Scans enabled plugins for integration modules.

    Each plugin may ship an ``integration/`` directory containing modules
    named ``<name>_integration.py``.
    """

    def __init__(
        self,
        directory_name: str = INTEGRATION_DIRECTORY,
        file_suffix: str = INTEGRATION_FILE_SUFFIX
    ):
        self.directory_name = directory_name
        self.file_suffix = file_suffix

    def discover(
        self,
        plugins: Iterable[PluginDescriptor],
        alphabetical: bool = False
    ) -> List[IntegrationDescriptor]:
        """
        Discover integration descriptors for the enabled plugins.

        Args:
            plugins: Installed plugins with their enabled status
            alphabetical: Sort integration files by name within each plugin

        Returns:
            List of integration descriptors in discovery order
        """
        discovered = []

        for plugin in plugins:
            if not plugin.is_enabled:
                logger.debug(f"Skipping disabled plugin: {plugin.bundle}")
                continue

            integration_dir = Path(plugin.directory) / self.directory_name
            if not integration_dir.is_dir():
                continue

            files = [
                item for item in integration_dir.iterdir()
                if item.is_file() and item.name.endswith(self.file_suffix)
            ]
            if alphabetical:
                files.sort(key=lambda item: item.name)

            for item in files:
                name = integration_name_from_file(item.name)
                if not name:
                    continue

                descriptor = IntegrationDescriptor(
                    name=name,
                    namespace=plugin.namespace,
                    plugin_id=plugin.id,
                    module_path=f"{plugin.package}.{self.directory_name}.{item.stem}",
                    bundle=plugin.bundle,
                )
                discovered.append(descriptor)
                logger.debug(f"Discovered integration: {name} in {plugin.bundle}")

        return discovered
