from __future__ import annotations

import pytest

from commando import Dispatcher, Int8, __version__
from commando.cli import build_app, usage_hint
from commando.configuration import CommandoConfig


@pytest.fixture
def calls() -> list:
    return []


@pytest.fixture
def dispatcher(calls) -> Dispatcher:
    mux = Dispatcher()

    def add(a: int, b: int) -> None:
        calls.append(a + b)

    def tiny(value: Int8) -> None:
        calls.append(value)

    mux.add("add", "adds 2 numbers", add)
    mux.add("tiny", "stores a small number", tiny)
    return mux


def test_dispatches_tokens(runner, dispatcher, calls):
    """Tokens after the program name reach the matching handler."""
    app = build_app(dispatcher)

    result = runner.invoke(app, ["add", "2", "4"])

    assert result.exit_code == 0
    assert calls == [6]


def test_help_token_reaches_dispatcher(runner, dispatcher):
    """--help is handled by the dispatcher, not by Click."""
    app = build_app(dispatcher)

    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert result.stdout == dispatcher.usage()


def test_version_flag(runner, dispatcher):
    """--version as the first token prints the program version."""
    app = build_app(dispatcher, prog_name="calc")

    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "calc" in result.stdout
    assert __version__ in result.stdout


def test_unknown_command_shows_full_usage(runner, dispatcher):
    """Unknown commands exit non-zero and list every command."""
    app = build_app(dispatcher)

    result = runner.invoke(app, ["sub", "1"])

    assert result.exit_code == 1
    assert '"sub" is not a recognized command' in result.output
    assert "Usage:" in result.output
    assert "add [int, int]" in result.output


def test_empty_input_fails(runner, dispatcher):
    """Running with no tokens exits non-zero."""
    app = build_app(dispatcher)

    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "not enough arguments" in result.output


def test_type_mismatch_shows_command_usage(runner, dispatcher, calls):
    """Bad argument values show only the failing command's usage line."""
    app = build_app(dispatcher)

    result = runner.invoke(app, ["tiny", "300"])

    assert result.exit_code == 1
    assert '"tiny" expects int8 but got 300' in result.output
    assert "tiny [int8]" in result.output
    assert "add [int, int]" not in result.output
    assert calls == []


def test_configured_exit_code_and_quiet_usage(runner, dispatcher):
    """cli settings control the exit code and the usage hint."""
    config = CommandoConfig.from_dict(
        {"cli": {"error_exit_code": 3, "show_usage_on_error": False}}
    )
    app = build_app(dispatcher, config=config)

    result = runner.invoke(app, ["add", "1"])

    assert result.exit_code == 3
    assert '"add" expects 2 arguments but got 1' in result.output
    assert "Usage:" not in result.output


def test_usage_hint_falls_back_to_full_listing(dispatcher):
    """usage_hint picks one line for command errors and the listing otherwise."""
    error = dispatcher.execute("missing")

    assert usage_hint(dispatcher, error) == dispatcher.usage()
    assert usage_hint(dispatcher, dispatcher.execute("add", "x", "1")) == (
        "add [int, int]\tadds 2 numbers\n"
    )


def test_error_usage_keeps_tab_separator(runner, dispatcher):
    """Usage shown on error keeps the tab between signature and description."""
    app = build_app(dispatcher)

    result = runner.invoke(app, ["add", "1"])

    assert result.exit_code == 1
    assert "add [int, int]\tadds 2 numbers\n" in result.output


def test_version_token_after_command_is_an_argument(runner, calls):
    """--version after a command name is passed to that command."""
    mux = Dispatcher()

    def echo(text: str) -> None:
        calls.append(text)

    mux.add("echo", "repeats its argument", echo)
    app = build_app(mux, prog_name="calc")

    result = runner.invoke(app, ["echo", "--version"])

    assert result.exit_code == 0
    assert calls == ["--version"]
    assert "calc" not in result.output


def test_app_without_dispatcher_uses_config_file(runner, tmp_path, monkeypatch):
    """build_app() without a dispatcher takes help aliases from the config file."""
    path = tmp_path / "commando.toml"
    path.write_text(
        '[help]\nnames = "? usage"\ndescription = "Lists commands"\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("COMMANDO_CONFIG", str(path))

    app = build_app()
    result = runner.invoke(app, ["usage"])

    assert result.exit_code == 0
    assert result.stdout == "Usage:\n?, usage\tLists commands\n"
