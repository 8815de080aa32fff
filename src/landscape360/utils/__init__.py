"""Utility modules for Landscape360."""

from .exceptions import ConfigurationError, Landscape360Error

__all__ = ["ConfigurationError", "Landscape360Error"]
