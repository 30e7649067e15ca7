"""Base settings classes shared by every settings section."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Case-sensitive env names; sections accept field names as well as aliases.
SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
    populate_by_name=True,
)


class FeatureSettings(BaseSettings):
    """Settings of a feature module, such as channel-group grants."""

    model_config = SECTION_CONFIG


class InfrastructureSettings(BaseSettings):
    """Settings describing how the plugin presents itself to the host."""

    model_config = SECTION_CONFIG
