"""Configuration module for Routerisk."""

from routerisk.config.settings import ConfidenceSettings, Settings, get_settings

__all__ = ["Settings", "ConfidenceSettings", "get_settings"]
