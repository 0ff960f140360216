"""
Django app configuration for the add-ons app.
"""
from django.apps import AppConfig


class AddonsConfig(AppConfig):
    """Configuration for the add-ons app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'addons'
    verbose_name = 'Add-on Integrations'
