"""CritBot configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.features import GrantsFeatureSettings
from infrastructure.configuration.infrastructure import HostSettings


class Settings(BaseSettings):
    """Top-level plugin configuration.

    Each section reads its own environment variables; this class only holds
    the plugin-wide values and one instance of every section.

    Sections:
        grants: Grant policy, pending timeout and grant retry bound
        host: Name, version and API version reported to the host client

    Environment Variables:
        PREFIX: Non-empty for development or staging builds
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Commit the plugin was built from, added to log entries

    Example:
        ```python
        from infrastructure.configuration import settings

        rule = settings.grants.policy.get(27)
        keyword = settings.host.command_keyword
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    grants: GrantsFeatureSettings
    host: HostSettings

    @property
    def is_production(self) -> bool:
        """A build without PREFIX is a production build."""
        return not self.PREFIX

    def __init__(self, **kwargs):
        """Build any section not passed explicitly from the environment."""
        sections = {
            "grants": GrantsFeatureSettings,
            "host": HostSettings,
        }
        for name, section_class in sections.items():
            if name not in kwargs:
                kwargs[name] = section_class()
        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
