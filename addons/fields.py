"""
Field catalog builder.

Normalizes the field metadata each integration exposes into a flat mapping
of field key to display label, used to build field-mapping choices.
"""
import re
import logging
from typing import Callable, Dict, Optional

from django.utils.translation import gettext

from .base import AbstractIntegration, FieldDescriptor, FieldIntrospection, FieldKind
from .cache import BuildOnceCache
from .registry import IntegrationRegistry
from .social import get_social_profile_url_regex

logger = logging.getLogger(__name__)

URL_FIELD_NAMES = ('urls', 'url')

_DIGITS = re.compile(r'(\d+)')


def natural_sort_key(value: str):
    """Key for natural ordering, so ``field2`` sorts before ``field10``."""
    return [
        (0, int(part), '') if part.isdigit() else (1, 0, part)
        for part in _DIGITS.split(value)
        if part
    ]


class FieldCatalogBuilder:
    """
    Builds and caches the field catalog of every registered integration.
    """

    def __init__(
        self,
        registry: IntegrationRegistry,
        translator: Optional[Callable[[str], str]] = None
    ):
        self.registry = registry
        self.translator = translator or gettext
        self._cache: BuildOnceCache[Dict[str, Dict[str, str]]] = BuildOnceCache('field_catalog')

    def build(self, silence_field_errors: bool = True) -> Dict[str, Dict[str, str]]:
        """
        Get the field catalog, building it on first use.

        Args:
            silence_field_errors: Absorb errors raised by integrations while
                describing their fields

        Returns:
            Dictionary mapping integration names to ``{field_key: label}``
        """
        return self._cache.get_or_build(lambda: self._build(silence_field_errors))

    def get(self, name: Optional[str] = None, silence_field_errors: bool = True) -> Dict:
        """
        Get the catalog of one integration, or the whole catalog.

        Raises:
            UnsupportedLookupError: If ``name`` is not a registered integration
        """
        if name:
            self.registry.get(name)
        catalog = self.build(silence_field_errors)
        if name:
            return catalog.get(name, {})
        return catalog

    def invalidate(self) -> None:
        self._cache.invalidate()

    def _build(self, silence_field_errors: bool) -> Dict[str, Dict[str, str]]:
        catalog = {}
        for name, integration in self.registry.get_all().items():
            catalog[name] = self.build_integration_fields(integration, silence_field_errors)
        return catalog

    def build_integration_fields(
        self,
        integration: AbstractIntegration,
        silence_field_errors: bool = True
    ) -> Dict[str, str]:
        """Normalize the fields of a single integration."""
        if not isinstance(integration, FieldIntrospection):
            return {}

        name = integration.get_name()
        try:
            available = integration.get_available_fields(silence_field_errors)
        except Exception as e:
            if not silence_field_errors:
                raise
            logger.warning(f"Integration '{name}' failed to describe its fields: {e}")
            return {}

        if not available or not isinstance(available, dict):
            logger.debug(f"Integration '{name}' exposes no field metadata")
            return {}

        fields: Dict[str, str] = {}
        for field_name, details in available.items():
            descriptor = FieldDescriptor.from_metadata(field_name, details)
            if descriptor is None:
                logger.debug(f"Skipping field '{field_name}' of '{name}' with unknown metadata: {details!r}")
                continue
            fields.update(self._normalize(integration, descriptor))

        if integration.sort_fields_alphabetically():
            fields = dict(sorted(fields.items(), key=lambda item: natural_sort_key(item[0])))

        return fields

    def _normalize(self, integration: AbstractIntegration, descriptor: FieldDescriptor) -> Dict[str, str]:
        key = integration.match_field_name(descriptor.name)

        if descriptor.kind == FieldKind.SCALAR:
            return {key: self._label(integration, key, descriptor.label)}

        if descriptor.kind == FieldKind.URL_COLLECTION and descriptor.name in URL_FIELD_NAMES:
            entries = {}
            for service in get_social_profile_url_regex():
                handle_key = f"{service}ProfileHandle"
                entries[handle_key] = self._label(integration, handle_key, descriptor.label)
            for sub_field in descriptor.sub_fields:
                urls_key = f"{sub_field}Urls"
                entries[urls_key] = self._label(integration, urls_key, descriptor.label)
            return entries

        if descriptor.sub_fields:
            entries = {}
            for sub_field in descriptor.sub_fields:
                sub_key = integration.match_field_name(descriptor.name, sub_field)
                entries[sub_key] = self._label(integration, sub_key, descriptor.label)
            return entries

        if descriptor.kind == FieldKind.COMPOSITE:
            return {descriptor.name: self._label(integration, key, descriptor.label)}
        return {key: self._label(integration, key, descriptor.label)}

    def _label(self, integration: AbstractIntegration, key: str, label: Optional[str]) -> str:
        if label:
            return label
        return self.translator(f"integration.{integration.get_name()}.{key}")
