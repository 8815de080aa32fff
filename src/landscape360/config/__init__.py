"""Configuration module for Landscape360."""

from landscape360.config.settings import LOCAL_HOSTS, Settings, get_settings

__all__ = ["LOCAL_HOSTS", "Settings", "get_settings"]
