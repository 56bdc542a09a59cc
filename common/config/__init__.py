"""
Configuration module - environment-driven settings shared by applications.

Applications subclass BaseAppSettings and add their own fields.
"""

from common.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
