from abc import abstractmethod

from addons.base import AbstractIntegration, FieldIntrospection


class BaseSocialIntegration(AbstractIntegration, FieldIntrospection):
    """Shared behaviour of the social network integrations."""

    @abstractmethod
    def get_profile_url(self, handle):
        pass

    def get_supported_features(self):
        return ['public_profile', 'public_activity', 'share_button']
