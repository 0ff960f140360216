"""
Profile sync engine.

Refreshes the per-lead social cache from the integrations offering public
profile or public activity data. The cache is a mapping of integration name
to ``{'profile': {...}, 'activity': {...}, 'lastRefresh': 'YYYY-MM-DD HH:MM:SS'}``
stored on the lead as ``social_cache``.
"""
import logging
import threading
from collections.abc import Mapping
from datetime import timezone as dt_timezone
from typing import Any, Callable, Dict, Optional, Tuple

from django.utils import timezone

from .base import AbstractIntegration, PublicActivityCapable, PublicProfileCapable
from .circuit_breaker import CircuitBreakerSet
from .exceptions import CircuitBreakerOpenError, IntegrationFetchError
from .features import FeatureTag
from .identifiers import resolve_identifier
from .registry import IntegrationRegistry
from .repositories import LeadRepository

logger = logging.getLogger(__name__)

PROFILE_FEATURES = (FeatureTag.PUBLIC_PROFILE, FeatureTag.PUBLIC_ACTIVITY)

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def utc_timestamp() -> str:
    """Current time as a UTC ``YYYY-MM-DD HH:MM:SS`` string."""
    return timezone.now().astimezone(dt_timezone.utc).strftime(TIMESTAMP_FORMAT)


class FetchThread(threading.Thread):
    """
    Runs one integration fetch on its own daemon thread.

    The caller's timeout starts when the fetch starts, so a hung integration
    only ever costs its own fetches.
    """

    def __init__(self, integration: str, method: Callable, identifier: Any):
        super().__init__(name=f"addons-fetch-{integration}", daemon=True)
        self.method = method
        self.identifier = identifier
        self.result: Any = None
        self.error: Optional[BaseException] = None

    def run(self):
        try:
            self.result = self.method(self.identifier)
        except Exception as e:
            self.error = e

    def get_result(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.result


class ProfileSyncEngine:
    """
    Refreshes and clears lead social caches.

    A failing, timed out or short-circuited integration is treated as having
    returned no data; the rest of the refresh carries on.
    """

    def __init__(
        self,
        registry: IntegrationRegistry,
        lead_repository: LeadRepository,
        fetch_timeout: Optional[float] = None,
        breakers: Optional[CircuitBreakerSet] = None
    ):
        self.registry = registry
        self.lead_repository = lead_repository
        self.fetch_timeout = fetch_timeout
        self.breakers = breakers or CircuitBreakerSet()

    def get_profiles(
        self,
        lead,
        fields: Optional[Mapping] = None,
        refresh: bool = False,
        specific_integration: Optional[str] = None,
        persist: bool = True,
        return_settings: bool = False
    ):
        """
        Get the lead's social profiles from cache, refreshing them if asked.

        Without ``refresh`` nothing is fetched and the cache is untouched;
        ``return_settings`` then only adds the feature settings of the
        profile integrations.
        """
        if refresh:
            return self.refresh(
                lead,
                fields or {},
                specific_integration=specific_integration,
                persist=persist,
                return_settings=return_settings
            )

        social_cache = dict(lead.social_cache or {})
        feature_settings = {}
        if return_settings:
            for name, integration in self._select(specific_integration).items():
                feature_settings[name] = self._feature_settings(integration)

        return self._result(social_cache, feature_settings, specific_integration, return_settings)

    def refresh(
        self,
        lead,
        fields: Mapping,
        specific_integration: Optional[str] = None,
        persist: bool = True,
        return_settings: bool = False
    ):
        """
        Regenerate the lead's social cache from the integrations.

        Args:
            lead: Lead exposing a ``social_cache`` mapping
            fields: Lead field values, flat or grouped
            specific_integration: Only refresh this integration
            persist: Save the lead through the lead repository
            return_settings: Also return each integration's feature settings

        Returns:
            The social cache (only the specific integration's entry when one
            was given), or ``(cache, feature_settings)`` with ``return_settings``

        Raises:
            UnsupportedLookupError: If ``specific_integration`` is not registered
        """
        social_cache = dict(lead.social_cache or {})
        feature_settings = {}

        for name, integration in self._select(specific_integration).items():
            if return_settings:
                feature_settings[name] = self._feature_settings(integration)

            identifier = resolve_identifier(integration.get_identifier_fields(), fields)
            if not identifier or not integration.is_published():
                if social_cache.pop(name, None) is not None:
                    logger.debug(f"Integration '{name}' no longer applies to lead, cache entry removed")
                continue

            profile, activity = self._fetch(integration, identifier)

            if profile or activity:
                entry = {
                    key: value for key, value in (social_cache.get(name) or {}).items()
                    if key not in ('profile', 'activity')
                }
                entry['profile'] = profile
                entry['activity'] = activity
                entry['lastRefresh'] = utc_timestamp()
                social_cache[name] = entry
            else:
                social_cache.pop(name, None)

        if persist:
            lead.social_cache = social_cache
            self.lead_repository.save(lead)

        return self._result(social_cache, feature_settings, specific_integration, return_settings)

    def clear_cache(self, lead, integration: Optional[str] = None) -> Dict[str, Any]:
        """
        Remove one integration's entry, or the whole social cache.

        The lead is always saved.
        """
        social_cache = dict(lead.social_cache or {})
        if integration:
            social_cache.pop(integration, None)
        else:
            social_cache = {}

        lead.social_cache = social_cache
        self.lead_repository.save(lead)
        return social_cache

    def get_breaker_states(self) -> Dict[str, dict]:
        return self.breakers.get_states()

    def _select(self, specific_integration: Optional[str]) -> Dict[str, AbstractIntegration]:
        candidates = self.registry.get_by_feature(PROFILE_FEATURES)
        if not specific_integration:
            return candidates

        # Raises for an unknown name
        self.registry.get(specific_integration)
        if specific_integration in candidates:
            return {specific_integration: candidates[specific_integration]}
        return {}

    def _feature_settings(self, integration: AbstractIntegration) -> Dict[str, Any]:
        settings = integration.integration_settings
        return dict(getattr(settings, 'feature_settings', None) or {})

    def _fetch(self, integration: AbstractIntegration, identifier: Any) -> Tuple[Dict, Dict]:
        features = set(integration.get_enabled_features())
        profile: Dict = {}
        activity: Dict = {}

        if FeatureTag.PUBLIC_PROFILE.value in features and isinstance(integration, PublicProfileCapable):
            profile = self._call(integration, integration.fetch_user_data, identifier)

        if FeatureTag.PUBLIC_ACTIVITY.value in features and isinstance(integration, PublicActivityCapable):
            activity = self._call(integration, integration.fetch_public_activity, identifier)

        return profile, activity

    def _call(self, integration: AbstractIntegration, method: Callable, identifier: Any) -> Dict:
        name = integration.get_name()
        breaker = self.breakers.get(name)

        try:
            with breaker:
                result = self._run(name, method, identifier)
        except CircuitBreakerOpenError as e:
            logger.warning(f"Skipping fetch: {e}")
            return {}
        except Exception as e:
            logger.error(f"Integration '{name}' failed to fetch data: {e}", exc_info=True)
            return {}

        if not isinstance(result, Mapping):
            return {}
        return dict(result)

    def _run(self, name: str, method: Callable, identifier: Any):
        if self.fetch_timeout is None:
            return method(identifier)

        fetch = FetchThread(name, method, identifier)
        fetch.start()
        fetch.join(self.fetch_timeout)
        if fetch.is_alive():
            # The thread is abandoned; it cannot delay fetches of other integrations
            raise IntegrationFetchError(name, f"timed out after {self.fetch_timeout} seconds")
        return fetch.get_result()

    def _result(
        self,
        social_cache: Dict[str, Any],
        feature_settings: Dict[str, Any],
        specific_integration: Optional[str],
        return_settings: bool
    ):
        if specific_integration:
            social_cache = {specific_integration: social_cache.get(specific_integration)}
        if return_settings:
            return social_cache, feature_settings
        return social_cache
