"""
Mock integrations and in-memory collaborators for testing the add-ons app.
"""
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type

from .base import (
    AbstractIntegration,
    FieldIntrospection,
    IntegrationDescriptor,
    PluginDescriptor,
    PublicActivityCapable,
    PublicProfileCapable,
)
from .features import FeatureTag
from .locator import PluginLocator
from .plugins import IntegrationClassResolver, PluginProvider
from .registry import IntegrationRegistry
from .repositories import IntegrationSettingsRepository, LeadRepository

FIXTURE_PLUGINS_DIR = Path(__file__).resolve().parent / 'tests' / 'fixture_plugins'
FIXTURE_PLUGINS_PACKAGE = 'addons.tests.fixture_plugins'


class MockSocialIntegration(AbstractIntegration, FieldIntrospection, PublicProfileCapable, PublicActivityCapable):
    """Mock integration offering every capability."""

    name = 'MockSocial'
    identifier_fields = 'email'
    profile_data: Optional[Dict[str, Any]] = None
    activity_data: Optional[Dict[str, Any]] = None
    available_fields: Optional[Dict[str, Dict[str, Any]]] = None
    fail_with: Optional[Exception] = None
    sort_alphabetically = True

    def __init__(self):
        super().__init__()
        self.fetched: List[Any] = []
        # Per-instance copies; class-level data stays untouched
        self.profile_data = dict(type(self).profile_data or {})
        self.activity_data = dict(type(self).activity_data or {})
        self.available_fields = dict(type(self).available_fields or {})

    def get_supported_features(self) -> List[str]:
        return [
            FeatureTag.PUBLIC_PROFILE.value,
            FeatureTag.PUBLIC_ACTIVITY.value,
            FeatureTag.SHARE_BUTTON.value,
        ]

    def get_available_fields(self, silence_exceptions: bool = True) -> Dict[str, Dict[str, Any]]:
        return dict(self.available_fields)

    def sort_fields_alphabetically(self) -> bool:
        return self.sort_alphabetically

    def fetch_user_data(self, identifier: Any) -> Dict[str, Any]:
        self.fetched.append(('profile', identifier))
        if self.fail_with is not None:
            raise self.fail_with
        return dict(self.profile_data)

    def fetch_public_activity(self, identifier: Any) -> Dict[str, Any]:
        self.fetched.append(('activity', identifier))
        if self.fail_with is not None:
            raise self.fail_with
        return dict(self.activity_data)


def make_integration_class(
    name: str,
    base: Type[AbstractIntegration] = MockSocialIntegration,
    **attrs
) -> Type[AbstractIntegration]:
    """Create a mock integration class with overridden class attributes."""
    attrs.setdefault('name', name)
    attrs.setdefault('__module__', __name__)
    return type(f"{name}Integration", (base,), attrs)


class InMemoryPluginProvider(PluginProvider):
    """Plugin provider returning a fixed list of plugins."""

    def __init__(self, plugins: Iterable[PluginDescriptor] = ()):
        self.plugins = list(plugins)
        self.calls = 0

    def get_plugins(self) -> List[PluginDescriptor]:
        self.calls += 1
        return list(self.plugins)


class StaticClassResolver(IntegrationClassResolver):
    """Resolves integration names from a fixed table, without importing."""

    def __init__(self, classes: Dict[str, Type[AbstractIntegration]]):
        self.classes = dict(classes)

    def resolve(self, descriptor: IntegrationDescriptor) -> Optional[Type[AbstractIntegration]]:
        return self.classes.get(descriptor.name)


class StaticLocator(PluginLocator):
    """Locator returning fixed descriptors for the enabled plugins."""

    def __init__(self, descriptors: Iterable[IntegrationDescriptor]):
        super().__init__()
        self.descriptors = list(descriptors)

    def discover(self, plugins, alphabetical: bool = False) -> List[IntegrationDescriptor]:
        enabled = {plugin.id for plugin in plugins if plugin.is_enabled}
        descriptors = [d for d in self.descriptors if d.plugin_id in enabled]
        if alphabetical:
            descriptors.sort(key=lambda descriptor: descriptor.name)
        return descriptors


class InMemorySettingsRepository(IntegrationSettingsRepository):
    """Settings repository holding unsaved ``IntegrationSettings`` instances."""

    def __init__(self, records: Iterable = ()):
        self.records = {record.name: record for record in records}
        self.saved = []

    def get_all(self) -> Dict[str, object]:
        return dict(self.records)

    def create(self, name: str):
        from .models import IntegrationSettings

        return IntegrationSettings(name=name, is_published=False)

    def save(self, settings) -> None:
        self.records[settings.name] = settings
        self.saved.append(settings)


class InMemoryLeadRepository(LeadRepository):
    """Lead repository recording saved leads."""

    def __init__(self):
        self.saved = []

    def save(self, lead) -> None:
        self.saved.append((lead, dict(lead.social_cache or {})))


class MockLead:
    """Minimal lead with a social cache."""

    def __init__(self, social_cache: Optional[Dict[str, Any]] = None):
        self.social_cache = social_cache if social_cache is not None else {}


def make_settings(name: str, features: Iterable = (), published: bool = True, priority: int = 0, **kwargs):
    """Build an unsaved settings record."""
    from .models import IntegrationSettings

    return IntegrationSettings(
        name=name,
        is_published=published,
        supported_features=[getattr(f, 'value', f) for f in features],
        priority=priority,
        **kwargs
    )


def make_plugin(plugin_id: int = 1, package: str = 'social', enabled: bool = True, directory: Optional[Path] = None) -> PluginDescriptor:
    return PluginDescriptor(
        id=plugin_id,
        bundle=package,
        name=package.rsplit('.', 1)[-1],
        package=package,
        directory=directory or Path('/nonexistent'),
        is_enabled=enabled,
    )


def make_registry(
    classes: Dict[str, Type[AbstractIntegration]],
    settings: Iterable = (),
    plugin_id: int = 1,
    alphabetical: bool = False,
    namespace: str = 'social'
) -> IntegrationRegistry:
    """
    Build a registry over mock integration classes, discovered in the order given.
    """
    descriptors = [
        IntegrationDescriptor(
            name=name,
            namespace=namespace,
            plugin_id=plugin_id,
            module_path=f"{namespace}.integration.{name.lower()}_integration",
            bundle=namespace,
        )
        for name in classes
    ]
    return IntegrationRegistry(
        InMemoryPluginProvider([make_plugin(plugin_id, namespace)]),
        InMemorySettingsRepository(settings),
        class_resolver=StaticClassResolver(classes),
        locator=StaticLocator(descriptors),
        alphabetical=alphabetical,
    )
