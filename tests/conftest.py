from __future__ import annotations

import pytest
from typer.testing import CliRunner

import commando
from commando.configuration import loader


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Keep user configuration files out of every test."""

    monkeypatch.delenv(loader.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setattr(loader, "_CONFIG_INSTANCE", None)
    loader.locate_config_file.cache_clear()
    yield
    loader.locate_config_file.cache_clear()


@pytest.fixture
def mux() -> commando.Dispatcher:
    return commando.new()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
