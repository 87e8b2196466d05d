"""Configuration management for hangle.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides with the ``HANGLE_`` prefix.
"""

from hangle.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
