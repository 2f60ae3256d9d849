"""Public interface for the commando configuration system."""

from __future__ import annotations

from .errors import ConfigurationError
from .loader import (
    get_config,
    load_config,
    locate_config_file,
    merge_configs,
    reload_config,
)
from .schema import CLIConfig, CommandoConfig, HelpConfig

__all__ = [
    "CLIConfig",
    "CommandoConfig",
    "ConfigurationError",
    "HelpConfig",
    "get_config",
    "load_config",
    "locate_config_file",
    "merge_configs",
    "reload_config",
]
