"""Configuration for the SemOps toolkit."""

from semops.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
