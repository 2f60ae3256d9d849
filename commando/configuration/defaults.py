"""Built-in default configuration for commando."""

from __future__ import annotations

DEFAULT_CONFIG_DICT = {
    "meta": {
        "version": "1.0",
    },
    "help": {
        "enabled": True,
        "names": "help h --help",
        "description": "Displays usages",
    },
    "cli": {
        "show_usage_on_error": True,
        "error_exit_code": 1,
        "debug": False,
    },
}
