"""
Persistence collaborators.

The registry and the profile sync engine never talk to the ORM directly;
they go through these narrow repository interfaces.
"""
from abc import ABC, abstractmethod
from typing import Dict
import logging

logger = logging.getLogger(__name__)


class IntegrationSettingsRepository(ABC):
    """Storage for integration settings records."""

    @abstractmethod
    def get_all(self) -> Dict[str, object]:
        """Return every stored settings record keyed by integration name."""
        pass

    @abstractmethod
    def create(self, name: str):
        """Return a new, unsaved settings record for the integration."""
        pass

    @abstractmethod
    def save(self, settings) -> None:
        """Persist a settings record."""
        pass


class LeadRepository(ABC):
    """Storage for the lead's social cache."""

    @abstractmethod
    def save(self, lead) -> None:
        """Persist the lead's ``social_cache``."""
        pass


class DjangoIntegrationSettingsRepository(IntegrationSettingsRepository):
    """Settings repository backed by the ``IntegrationSettings`` model."""

    def get_all(self) -> Dict[str, object]:
        from .models import IntegrationSettings

        return {
            settings.name: settings
            for settings in IntegrationSettings.objects.select_related('plugin')
        }

    def create(self, name: str):
        from .models import IntegrationSettings

        return IntegrationSettings(name=name, is_published=False)

    def save(self, settings) -> None:
        settings.save()
        logger.info(f"Saved integration settings: {settings.name}")


class DjangoLeadRepository(LeadRepository):
    """
    Lead repository for Django models exposing a ``social_cache`` JSON field.
    """

    update_fields = ['social_cache']

    def save(self, lead) -> None:
        lead.save(update_fields=self.update_fields)
