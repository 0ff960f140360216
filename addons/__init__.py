"""
Add-on Integrations App

Discovers the integrations contributed by add-on plugins and exposes their
capabilities to the rest of the application.

Features:
- Plugin discovery and a build-once integration registry
- Lookup by name, feature tag or owning plugin
- Field catalogs for field-mapping choices
- Per-lead social profile cache refresh with per-integration isolation
- Share button rendering and icon resolution
"""

__version__ = "1.0.0"

from .features import FeatureTag
from .rendering import get_template_renderer, set_template_renderer


# Import the helper on demand so the app registry is ready before models load
def get_integration_helper():
    from .helper import get_integration_helper as _get_integration_helper
    return _get_integration_helper()


__all__ = [
    'FeatureTag',
    'get_integration_helper',
    'get_template_renderer',
    'set_template_renderer',
]
