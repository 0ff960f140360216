"""
Base integration interfaces and data structures.

Every integration contributed by an add-on plugin subclasses
``AbstractIntegration``. Optional capabilities (field introspection, public
profile and public activity fetching) are expressed as separate interfaces
the integration class may also inherit from.

Integration classes register themselves in a class table when they are
defined, keyed by their module path and integration name. The registry
resolves discovered integrations through that table instead of building class
names from strings.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union
import logging

logger = logging.getLogger(__name__)

INTEGRATION_SUFFIX = 'Integration'

IdentifierSpec = Union[str, Sequence[str]]


@dataclass(frozen=True)
class PluginDescriptor:
    """An installed add-on plugin as reported by the plugin provider."""
    id: Optional[int]
    bundle: str
    name: str
    package: str
    directory: Path
    is_enabled: bool = False

    @property
    def namespace(self) -> str:
        return self.package.rsplit('.', 1)[-1]


@dataclass(frozen=True)
class IntegrationDescriptor:
    """An integration found on disk, not yet imported or instantiated."""
    name: str
    namespace: str
    plugin_id: Optional[int]
    module_path: str
    bundle: str = ''


class FieldKind(Enum):
    """Shapes of field metadata exposed by integrations."""
    SCALAR = "scalar"
    COMPOSITE = "composite"
    URL_COLLECTION = "url_collection"


# Raw metadata type names mapped to field shapes
FIELD_TYPES = {
    'string': FieldKind.SCALAR,
    'boolean': FieldKind.SCALAR,
    'object': FieldKind.COMPOSITE,
    'array_object': FieldKind.URL_COLLECTION,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Normalized description of one field an integration exposes."""
    name: str
    kind: FieldKind
    label: Optional[str] = None
    sub_fields: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_metadata(cls, name: str, details: Any) -> Optional['FieldDescriptor']:
        """
        Build a descriptor from raw integration metadata.

        Args:
            name: The field name
            details: Mapping with ``type`` and optional ``label``/``fields``

        Returns:
            FieldDescriptor, or None when the metadata has an unknown shape
        """
        if not isinstance(details, dict):
            return None

        kind = FIELD_TYPES.get(details.get('type'))
        if kind is None:
            return None

        sub_fields = details.get('fields') or ()
        if isinstance(sub_fields, str):
            sub_fields = (sub_fields,)

        return cls(
            name=name,
            kind=kind,
            label=details.get('label') or None,
            sub_fields=tuple(sub_fields),
        )


# (module path, integration name) -> integration class
_integration_classes: Dict[Tuple[str, str], Type['AbstractIntegration']] = {}


def integration_name_from_class(class_name: str) -> str:
    """Strip the conventional ``Integration`` suffix from a class name."""
    if class_name.endswith(INTEGRATION_SUFFIX) and class_name != INTEGRATION_SUFFIX:
        return class_name[:-len(INTEGRATION_SUFFIX)]
    return class_name


def get_integration_class(module_path: str, name: str) -> Optional[Type['AbstractIntegration']]:
    """Look up a registered integration class."""
    return _integration_classes.get((module_path, name))


class AbstractIntegration(ABC):
    """
    Base class for all integrations.

    Subclasses are added to the class table on definition. The integration
    name defaults to the class name without its ``Integration`` suffix.
    """

    name: str = ''
    identifier_fields: IdentifierSpec = 'email'

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if 'name' not in cls.__dict__:
            cls.name = integration_name_from_class(cls.__name__)

        key = (cls.__module__, cls.name)
        if key in _integration_classes and _integration_classes[key] is not cls:
            logger.debug(f"Replacing registered integration class for {key}")
        _integration_classes[key] = cls

    def __init__(self):
        self._integration_settings = None

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self.name!r}>"

    @abstractmethod
    def get_supported_features(self) -> List[str]:
        """
        Features this integration is able to offer.

        The features actually enabled are stored in the integration settings.
        """
        pass

    @property
    def integration_settings(self):
        return self._integration_settings

    def set_integration_settings(self, settings) -> None:
        self._integration_settings = settings

    def get_name(self) -> str:
        return self.name

    def get_priority(self) -> int:
        if self._integration_settings is None:
            return 0
        return int(getattr(self._integration_settings, 'priority', 0) or 0)

    def is_published(self) -> bool:
        if self._integration_settings is None:
            return False
        return bool(getattr(self._integration_settings, 'is_published', False))

    def get_enabled_features(self) -> List[str]:
        """Features switched on in the integration settings."""
        if self._integration_settings is None:
            return []
        return list(getattr(self._integration_settings, 'supported_features', None) or [])

    def get_identifier_fields(self) -> IdentifierSpec:
        """Field name (or partial names) used to find a lead in the service."""
        return self.identifier_fields

    def match_field_name(self, field_name: str, sub_field: str = '') -> str:
        """
        Build the catalog key for a field or one of its sub-fields.

        ``match_field_name('name', 'given')`` returns ``'givenName'``.
        """
        if field_name and sub_field:
            return f"{sub_field}{field_name[:1].upper()}{field_name[1:]}"
        return field_name

    def sort_fields_alphabetically(self) -> bool:
        return True


class FieldIntrospection(ABC):
    """Capability: the integration describes the fields it can supply."""

    @abstractmethod
    def get_available_fields(self, silence_exceptions: bool = True) -> Dict[str, Dict[str, Any]]:
        """
        Return field metadata keyed by field name.

        Args:
            silence_exceptions: Whether the integration should swallow
                errors raised while contacting the remote service
        """
        pass


class PublicProfileCapable(ABC):
    """Capability: the integration can fetch a public profile."""

    @abstractmethod
    def fetch_user_data(self, identifier: Any) -> Dict[str, Any]:
        """Return profile data for the identifier, or an empty mapping."""
        pass


class PublicActivityCapable(ABC):
    """Capability: the integration can fetch recent public activity."""

    @abstractmethod
    def fetch_public_activity(self, identifier: Any) -> Dict[str, Any]:
        """Return activity data for the identifier, or an empty mapping."""
        pass
