"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the CritBot
plugin using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    GrantsFeatureSettings: Channel-group grant settings class
    HostSettings: Host plugin metadata settings class

Example:
    ```python
    from infrastructure.configuration import settings

    policy = settings.grants.policy
    timeout = settings.grants.pending_timeout_seconds

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features import GrantsFeatureSettings
from infrastructure.configuration.infrastructure import HostSettings

__all__ = ["Settings", "settings", "GrantsFeatureSettings", "HostSettings"]
