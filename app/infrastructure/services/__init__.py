"""Plugin services."""
