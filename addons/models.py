"""
Add-on models.

Stores which installed plugins are enabled and the per-integration settings
(published flag, enabled features, feature settings, API keys, priority).
"""
from django.db import models


class PluginQuerySet(models.QuerySet):
    """Custom QuerySet for Plugin."""

    def enabled(self) -> 'PluginQuerySet':
        return self.filter(is_enabled=True)


class Plugin(models.Model):
    """An installed add-on plugin."""

    name = models.CharField(max_length=255)
    bundle = models.CharField(
        max_length=255,
        unique=True,
        help_text="Dotted package name of the plugin"
    )
    description = models.TextField(blank=True)
    version = models.CharField(max_length=50, blank=True)
    is_enabled = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PluginQuerySet.as_manager()

    class Meta:
        db_table = 'addons_plugin'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.bundle})"


class IntegrationSettingsQuerySet(models.QuerySet):
    """Custom QuerySet for IntegrationSettings."""

    def published(self) -> 'IntegrationSettingsQuerySet':
        return self.filter(is_published=True)

    def for_plugin(self, plugin_id: int) -> 'IntegrationSettingsQuerySet':
        return self.filter(plugin_id=plugin_id)


class IntegrationSettings(models.Model):
    """
    Settings for one integration, keyed by integration name.

    A record is created (unsaved) the first time an integration is
    discovered, and persisted when its settings are edited.
    """

    name = models.CharField(max_length=255, unique=True)
    plugin = models.ForeignKey(
        Plugin,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='integrations'
    )
    is_published = models.BooleanField(default=False)
    supported_features = models.JSONField(
        default=list,
        blank=True,
        help_text="Feature tags enabled for this integration"
    )
    feature_settings = models.JSONField(default=dict, blank=True)
    api_keys = models.JSONField(default=dict, blank=True)
    priority = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = IntegrationSettingsQuerySet.as_manager()

    class Meta:
        db_table = 'addons_integration_settings'
        ordering = ['priority', 'name']
        verbose_name_plural = 'integration settings'

    def __str__(self):
        return self.name

    def supports(self, feature: str) -> bool:
        return feature in (self.supported_features or [])
