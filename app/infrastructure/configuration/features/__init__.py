"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.grants import GrantsFeatureSettings

__all__ = [
    "GrantsFeatureSettings",
]
