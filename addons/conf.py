"""
Settings access for the add-on integration layer.

All values are read lazily from Django settings so that ``override_settings``
in tests takes effect.
"""
from typing import Any, Dict, List, Optional

from django.conf import settings

from .exceptions import PluginConfigurationError

DEFAULT_GENERIC_ICON = 'app/bundles/AddonBundle/Assets/img/generic.png'

DEFAULT_CIRCUIT_BREAKER = {
    'failure_threshold': 5,
    'recovery_timeout': 60,
}


def get_plugin_packages() -> List[str]:
    """Dotted package names of the installed add-on plugins."""
    packages = getattr(settings, 'ADDONS_PLUGIN_PACKAGES', [])
    if isinstance(packages, str) or not isinstance(packages, (list, tuple)):
        raise PluginConfigurationError(
            "ADDONS_PLUGIN_PACKAGES must be a list of dotted package names"
        )
    return list(packages)


def is_alphabetical() -> bool:
    return bool(getattr(settings, 'ADDONS_ALPHABETICAL', False))


def get_fetch_timeout() -> Optional[float]:
    return getattr(settings, 'ADDONS_FETCH_TIMEOUT', 30)


def get_circuit_breaker_config() -> Dict[str, Any]:
    config = dict(DEFAULT_CIRCUIT_BREAKER)
    config.update(getattr(settings, 'ADDONS_CIRCUIT_BREAKER', {}))
    return config


def get_root_path() -> str:
    """Filesystem root that relative icon paths are resolved against."""
    return str(getattr(settings, 'ADDONS_ROOT_PATH', None) or getattr(settings, 'BASE_DIR', ''))


def get_generic_icon() -> str:
    return getattr(settings, 'ADDONS_GENERIC_ICON', DEFAULT_GENERIC_ICON)
