"""
Feature tags integrations can declare support for.
"""
from enum import Enum
from typing import Iterable, Set, Union


class FeatureTag(Enum):
    """Capability labels stored in an integration's settings."""
    PUBLIC_PROFILE = "public_profile"
    PUBLIC_ACTIVITY = "public_activity"
    SHARE_BUTTON = "share_button"
    PUSH_LEAD = "push_lead"
    LOGIN_BUTTON = "login_button"


FeatureLike = Union[FeatureTag, str]


def feature_value(feature: FeatureLike) -> str:
    """Return the stored string value for a tag or plain string."""
    if isinstance(feature, FeatureTag):
        return feature.value
    return str(feature)


def normalize_features(features: Union[FeatureLike, Iterable[FeatureLike], None]) -> Set[str]:
    """
    Normalize a single feature or a collection of features to a set of values.

    Args:
        features: A FeatureTag, a string, or an iterable of either

    Returns:
        Set of feature string values
    """
    if not features:
        return set()
    if isinstance(features, (FeatureTag, str)):
        return {feature_value(features)}
    return {feature_value(feature) for feature in features}
