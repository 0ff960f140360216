"""
Central registry for the integrations contributed by add-on plugins.
"""
import inspect
import logging
from typing import Dict, Iterable, List, Optional, Union

from .base import AbstractIntegration, IntegrationDescriptor
from .cache import BuildOnceCache
from .exceptions import UnsupportedLookupError
from .features import FeatureLike, normalize_features
from .locator import PluginLocator
from .plugins import IntegrationClassResolver, PluginProvider
from .repositories import IntegrationSettingsRepository

logger = logging.getLogger(__name__)


class IntegrationRegistry:
    """
    Registry of instantiated integrations.

    The registry is built once, on first access, from the enabled plugins.
    Later changes to plugins or settings are only picked up after
    ``invalidate()``.
    """

    def __init__(
        self,
        plugin_provider: PluginProvider,
        settings_repository: IntegrationSettingsRepository,
        class_resolver: Optional[IntegrationClassResolver] = None,
        locator: Optional[PluginLocator] = None,
        alphabetical: bool = False
    ):
        self.plugin_provider = plugin_provider
        self.settings_repository = settings_repository
        self.class_resolver = class_resolver or IntegrationClassResolver()
        self.locator = locator or PluginLocator()
        self.alphabetical = alphabetical
        self._cache: BuildOnceCache[Dict[str, AbstractIntegration]] = BuildOnceCache('integrations')
        self._descriptors: List[IntegrationDescriptor] = []
        self._owners: Dict[str, IntegrationDescriptor] = {}

    @property
    def descriptors(self) -> List[IntegrationDescriptor]:
        """Integration descriptors found by the last discovery run."""
        self.get_all()
        return list(self._descriptors)

    def get_all(self) -> Dict[str, AbstractIntegration]:
        """
        Get every registered integration.

        Returns:
            Dictionary mapping integration names to integration objects, in
            priority order (or alphabetical order in alphabetical mode)
        """
        return self._cache.get_or_build(self._build)

    def invalidate(self) -> None:
        """Drop the built registry so the next access rebuilds it."""
        self._cache.invalidate()
        logger.info("Integration registry invalidated")

    def _build(self) -> Dict[str, AbstractIntegration]:
        logger.info("Building integration registry")

        plugins = self.plugin_provider.get_plugins()
        descriptors = self.locator.discover(plugins, alphabetical=self.alphabetical)
        stored_settings = self.settings_repository.get_all()

        integrations: Dict[str, AbstractIntegration] = {}
        owners: Dict[str, IntegrationDescriptor] = {}

        for descriptor in descriptors:
            if descriptor.name in integrations:
                continue

            integration = self._instantiate(descriptor)
            if integration is None:
                continue

            settings = stored_settings.get(descriptor.name)
            if settings is None:
                settings = self.settings_repository.create(descriptor.name)
            # The owning plugin can change between discovery runs
            settings.plugin_id = descriptor.plugin_id

            integration.set_integration_settings(settings)
            integrations[descriptor.name] = integration
            owners[descriptor.name] = descriptor

        self._descriptors = descriptors
        self._owners = owners

        ordered = self._sort(integrations)
        logger.info(f"Registered {len(ordered)} integrations: {', '.join(ordered) or 'none'}")
        return ordered

    def _instantiate(self, descriptor: IntegrationDescriptor) -> Optional[AbstractIntegration]:
        integration_class = self.class_resolver.resolve(descriptor)
        if integration_class is None:
            return None

        if inspect.isabstract(integration_class):
            logger.debug(f"Skipping non-instantiable integration class: {integration_class.__name__}")
            return None

        try:
            return integration_class()
        except Exception as e:
            logger.error(f"Failed to instantiate integration '{descriptor.name}': {e}", exc_info=True)
            return None

    def _sort(self, integrations: Dict[str, AbstractIntegration]) -> Dict[str, AbstractIntegration]:
        if self.alphabetical:
            items = sorted(integrations.items(), key=lambda item: item[0])
        else:
            # sorted() is stable so equal priorities keep discovery order
            items = sorted(integrations.items(), key=lambda item: item[1].get_priority())
        return dict(items)

    def get(self, names: Union[str, Iterable[str], None] = None) -> Dict[str, AbstractIntegration]:
        """
        Get integrations by name.

        Args:
            names: A single integration name, a collection of names, or None
                for every integration

        Returns:
            Dictionary of the matching integrations

        Raises:
            UnsupportedLookupError: If a single name is requested that is not
                registered. Unknown names inside a collection are dropped.
        """
        integrations = self.get_all()

        if not names:
            return dict(integrations)

        if isinstance(names, str):
            if names in integrations:
                return {names: integrations[names]}

            logger.warning(
                f"Unsupported integration lookup '{names}'; "
                f"available descriptors: {self._descriptors}"
            )
            raise UnsupportedLookupError(names, list(self._descriptors))

        return {name: integrations[name] for name in names if name in integrations}

    def get_descriptor(self, name: str) -> Optional[IntegrationDescriptor]:
        """Descriptor the registered integration was instantiated from."""
        self.get_all()
        return self._owners.get(name)

    def get_integration(self, name: str) -> AbstractIntegration:
        """Get a single integration object, raising if it is not registered."""
        return self.get(name)[name]

    def get_by_feature(self, features: Union[FeatureLike, Iterable[FeatureLike]]) -> Dict[str, AbstractIntegration]:
        """
        Get integrations whose settings enable any of the given features.

        Published status is not checked here; consumers acting on the result
        check ``is_published()`` themselves.
        """
        wanted = normalize_features(features)

        return {
            name: integration
            for name, integration in self.get_all().items()
            if wanted.intersection(integration.get_enabled_features())
        }

    def get_by_plugin(self, plugin_id: int) -> Dict[str, AbstractIntegration]:
        """
        Get the integrations a plugin declares, in registry order.

        A name declared by several plugins is listed for each of them; every
        plugin gets the single instance built for that name.
        """
        integrations = self.get_all()
        names = {
            descriptor.name for descriptor in self._descriptors
            if descriptor.plugin_id == plugin_id
        }
        return {name: integration for name, integration in integrations.items() if name in names}
