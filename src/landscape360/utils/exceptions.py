"""Custom exceptions for Landscape360."""


class Landscape360Error(Exception):
    """Base exception for all Landscape360 errors."""

    pass


class ConfigurationError(Landscape360Error):
    """Error in configuration or settings."""

    pass
