from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# One Dark-inspired palette tuned for Rich output
PALETTE = {
    "fg": "#abb2bf",
    "orange": "#d19a66",
    "red": "#e06c75",
}

_theme = Theme(
    {
        "accent": PALETTE["orange"],
        "error": f"bold {PALETTE['red']}",
    }
)

console = Console(theme=_theme, style=PALETTE["fg"])
err_console = Console(theme=_theme, stderr=True)

LOGGER_NAME = "commando"


def configure_logging(debug: bool = False) -> logging.Logger:
    """Attach a Rich handler to the package logger and set its level."""
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=err_console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger
