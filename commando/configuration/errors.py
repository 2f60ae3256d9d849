"""Exceptions raised while loading commando settings."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """The config file is unreadable, not valid TOML, or fails validation."""
