"""
Configuration Package
=====================

Environment-driven settings for the service.
"""

from ioc_tracker.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
