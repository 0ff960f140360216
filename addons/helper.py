"""
High-level entry point for the add-on integration layer.

``IntegrationHelper`` composes the registry, field catalog, profile sync
engine and share buttons around injected collaborators. Application code
uses the process-wide instance returned by ``get_integration_helper()``.
"""
import logging
import threading
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from . import conf
from .base import AbstractIntegration
from .circuit_breaker import CircuitBreakerSet
from .features import FeatureLike
from .fields import FieldCatalogBuilder
from .icons import get_icon_path
from .identifiers import resolve_identifier
from .plugins import PluginProvider, SettingsPluginProvider
from .registry import IntegrationRegistry
from .rendering import TemplateRenderer
from .repositories import (
    DjangoIntegrationSettingsRepository,
    DjangoLeadRepository,
    IntegrationSettingsRepository,
    LeadRepository,
)
from .share import ShareButtonBuilder
from .social import get_social_profile_url_regex
from .sync import ProfileSyncEngine

logger = logging.getLogger(__name__)


class IntegrationHelper:
    """Facade over the add-on integration components."""

    def __init__(
        self,
        registry: IntegrationRegistry,
        lead_repository: LeadRepository,
        renderer: Optional[TemplateRenderer] = None,
        fetch_timeout: Optional[float] = None,
        breakers: Optional[CircuitBreakerSet] = None
    ):
        self.registry = registry
        self.fields = FieldCatalogBuilder(registry)
        self.sync = ProfileSyncEngine(
            registry,
            lead_repository,
            fetch_timeout=fetch_timeout,
            breakers=breakers
        )
        self.share = ShareButtonBuilder(registry, renderer=renderer)

    @classmethod
    def from_collaborators(
        cls,
        plugin_provider: PluginProvider,
        settings_repository: IntegrationSettingsRepository,
        lead_repository: LeadRepository,
        **kwargs
    ) -> 'IntegrationHelper':
        alphabetical = kwargs.pop('alphabetical', False)
        registry = IntegrationRegistry(plugin_provider, settings_repository, alphabetical=alphabetical)
        return cls(registry, lead_repository, **kwargs)

    def get_integration_objects(
        self,
        services: Union[str, Iterable[str], None] = None,
        with_features: Union[FeatureLike, Iterable[FeatureLike], None] = None,
        plugin_id: Optional[int] = None
    ) -> Dict[str, AbstractIntegration]:
        """
        Get integration objects.

        ``services`` takes precedence over ``with_features``, which takes
        precedence over ``plugin_id``.
        """
        if services:
            return self.registry.get(services)
        if with_features:
            return self.registry.get_by_feature(with_features)
        if plugin_id is not None:
            return self.registry.get_by_plugin(plugin_id)
        return self.registry.get_all()

    def get_available_fields(self, service: Optional[str] = None, silence_exceptions: bool = True) -> Dict:
        return self.fields.get(service, silence_field_errors=silence_exceptions)

    def get_social_profile_url_regex(self, find: bool = True) -> Dict:
        return get_social_profile_url_regex(find)

    def get_integration_settings(self) -> Dict[str, Any]:
        return self.registry.settings_repository.get_all()

    def get_user_profiles(
        self,
        lead,
        fields: Optional[Mapping] = None,
        refresh: bool = False,
        specific_integration: Optional[str] = None,
        persist: bool = True,
        return_settings: bool = False
    ):
        return self.sync.get_profiles(
            lead,
            fields,
            refresh=refresh,
            specific_integration=specific_integration,
            persist=persist,
            return_settings=return_settings
        )

    def clear_integration_cache(self, lead, integration: Optional[str] = None) -> Dict[str, Any]:
        return self.sync.clear_cache(lead, integration)

    def get_share_buttons(self) -> Dict[str, str]:
        return self.share.build()

    def get_user_identifier_field(self, integration: AbstractIntegration, fields: Mapping):
        return resolve_identifier(integration.get_identifier_fields(), fields)

    def get_icon_path(self, integration: AbstractIntegration) -> str:
        return get_icon_path(integration)

    def invalidate(self) -> None:
        """Drop every cache so newly enabled plugins are picked up."""
        self.registry.invalidate()
        self.fields.invalidate()
        self.share.invalidate()


_helper: Optional[IntegrationHelper] = None
_helper_lock = threading.Lock()


def build_default_helper() -> IntegrationHelper:
    """Build a helper wired to the Django collaborators and settings."""
    breaker_config = conf.get_circuit_breaker_config()
    return IntegrationHelper.from_collaborators(
        SettingsPluginProvider(),
        DjangoIntegrationSettingsRepository(),
        DjangoLeadRepository(),
        alphabetical=conf.is_alphabetical(),
        fetch_timeout=conf.get_fetch_timeout(),
        breakers=CircuitBreakerSet(
            failure_threshold=breaker_config['failure_threshold'],
            recovery_timeout=breaker_config['recovery_timeout']
        ),
    )


def get_integration_helper() -> IntegrationHelper:
    """Get the process-wide integration helper, building it on first use."""
    global _helper
    if _helper is None:
        with _helper_lock:
            if _helper is None:
                _helper = build_default_helper()
                logger.info("Integration helper initialized")
    return _helper


def reset_integration_helper() -> None:
    """Discard the process-wide helper; the next call builds a fresh one."""
    global _helper
    with _helper_lock:
        _helper = None
