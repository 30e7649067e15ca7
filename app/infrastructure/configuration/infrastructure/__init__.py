"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.host import HostSettings

__all__ = [
    "HostSettings",
]
