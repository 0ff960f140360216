"""
Custom exceptions for the add-on integration layer.
"""


class AddonError(Exception):
    """Base exception for add-on integration errors."""
    pass


class UnsupportedLookupError(AddonError):
    """Raised when a single integration is requested that is not registered."""
    
    def __init__(self, name: str, available: list):
        self.name = name
        self.available = available
        available_names = sorted({descriptor.name for descriptor in available})
        super().__init__(
            f"Integration '{name}' is not supported. "
            f"Available: {', '.join(available_names) or 'none'}"
        )


class IntegrationFetchError(AddonError):
    """Raised when an integration fails to return profile or activity data."""
    
    def __init__(self, integration: str, reason: str):
        self.integration = integration
        self.reason = reason
        super().__init__(f"Fetch failed for integration '{integration}': {reason}")


class CircuitBreakerOpenError(IntegrationFetchError):
    """Raised when the circuit breaker of an integration is open."""
    
    def __init__(self, integration: str):
        super().__init__(integration, "circuit breaker is open")


class PluginConfigurationError(AddonError):
    """Raised when the add-on plugin configuration is invalid."""
    pass
