"""Expose a :class:`~commando.Dispatcher` as a Typer application.

Click's own option parsing and help are switched off for the command so that
every token, including ``--help`` and negative numbers, reaches the
dispatcher untouched.
"""

from __future__ import annotations

from typing import Optional, Sequence

import typer
from rich.markup import escape

from commando import __version__
from commando.configuration import CommandoConfig, get_config
from commando.dispatcher import Dispatcher
from commando.errors import ArityMismatch, DispatchError, TypeMismatch
from commando.logging import configure_logging, console, err_console

COMMAND_CONTEXT = {
    "help_option_names": [],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}

VERSION_TOKEN = "--version"


def usage_hint(dispatcher: Dispatcher, error: DispatchError) -> str:
    """Return the usage text most relevant to ``error``.

    Errors tied to a known command get that command's line; everything else
    gets the full listing.
    """
    if isinstance(error, (ArityMismatch, TypeMismatch)):
        command = dispatcher.registry.lookup(error.command)
        if command is not None:
            return f"{command.usage_line()}\n"
    return dispatcher.usage()


def run(
    dispatcher: Dispatcher,
    tokens: Sequence[str],
    *,
    config: Optional[CommandoConfig] = None,
) -> None:
    """Execute ``tokens`` and turn a returned error into a non-zero exit."""
    config = config or get_config()
    configure_logging(config.cli.debug)
    error = dispatcher.execute(*tokens)
    if error is None:
        return
    err_console.print(f"[error]{escape(str(error))}[/]")
    if config.cli.show_usage_on_error:
        typer.echo(usage_hint(dispatcher, error), err=True, nl=False)
    raise typer.Exit(code=config.cli.error_exit_code)


def print_version(prog_name: str) -> None:
    console.print(f"[bold]{prog_name}[/bold] [accent]v{__version__}[/]")


def build_app(
    dispatcher: Optional[Dispatcher] = None,
    *,
    prog_name: str = "commando",
    config: Optional[CommandoConfig] = None,
) -> typer.Typer:
    """Wrap ``dispatcher`` in a single-command Typer app.

    Without a dispatcher one is built with :meth:`Dispatcher.from_config`, so
    the ``[help]`` settings apply. ``--version`` is only recognised as the
    first token; anywhere else it is passed to the dispatched command.
    """
    if dispatcher is None:
        dispatcher = Dispatcher.from_config(config)
    app = typer.Typer(add_completion=False, rich_markup_mode="rich")

    @app.command(context_settings=COMMAND_CONTEXT)
    def dispatch(ctx: typer.Context) -> None:
        tokens = list(ctx.args)
        if tokens[:1] == [VERSION_TOKEN]:
            print_version(prog_name)
            raise typer.Exit()
        run(dispatcher, tokens, config=config)

    return app


__all__ = [
    "COMMAND_CONTEXT",
    "VERSION_TOKEN",
    "build_app",
    "print_version",
    "run",
    "usage_hint",
]
