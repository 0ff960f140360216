"""
Celery tasks for the add-ons app.

Refreshing a lead's social profiles calls out to every profile integration,
so views queue it here instead of refreshing inline.
"""
import logging
from typing import Any, Dict, Optional

from celery import shared_task
from django.apps import apps

from .exceptions import UnsupportedLookupError
from .helper import get_integration_helper

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def refresh_social_profiles(
    self,
    lead_model: str,
    lead_id: Any,
    fields: Dict[str, Any],
    specific_integration: Optional[str] = None
):
    """
    Refresh a lead's social cache asynchronously.

    Args:
        lead_model: Model label of the lead, e.g. ``leads.Lead``
        lead_id: Primary key of the lead
        fields: Lead field values used to identify the lead
        specific_integration: Only refresh this integration

    Returns:
        Names of the integrations cached for the lead, or None if the lead
        or integration does not exist
    """
    model = apps.get_model(lead_model)

    try:
        lead = model.objects.get(pk=lead_id)
    except model.DoesNotExist:
        logger.warning(f"Lead {lead_model}:{lead_id} not found for social refresh")
        return None

    try:
        social_cache = get_integration_helper().get_user_profiles(
            lead,
            fields,
            refresh=True,
            specific_integration=specific_integration
        )
    except UnsupportedLookupError as e:
        logger.error(f"Cannot refresh social profiles of lead {lead_id}: {e}")
        return None
    except Exception as exc:
        logger.error(f"Error refreshing social profiles of lead {lead_id}: {exc}")
        raise self.retry(exc=exc)

    cached = sorted(name for name, entry in social_cache.items() if entry)
    logger.debug(f"Refreshed social profiles of lead {lead_id}: {cached}")
    return cached
