"""Configuration for the PDF.co action runner."""

from .settings import ClientConfig, ConfigValidationError, Settings, settings

__all__ = [
    "ClientConfig",
    "ConfigValidationError",
    "Settings",
    "settings",
]
