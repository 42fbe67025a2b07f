"""
Configuration module for the suggestion builder.

This module provides centralized configuration management using pydantic-settings.
All environment variables and configuration values should be accessed through this module.

Usage:
    from config import get_settings, get_collection_config

    settings = get_settings()
    config = get_collection_config(settings.source_collection)
"""

from config.collections import CollectionConfig, get_collection_config
from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "CollectionConfig", "get_collection_config"]
