from __future__ import annotations

import pytest
from pydantic import ValidationError

from commando.configuration import (
    CLIConfig,
    CommandoConfig,
    ConfigurationError,
    get_config,
    load_config,
    locate_config_file,
    merge_configs,
    reload_config,
)
from commando.configuration import loader as loader_module
from commando.configuration.defaults import DEFAULT_CONFIG_DICT


def test_defaults_without_config_file():
    """Built-in defaults apply when no config file exists."""
    config = load_config()

    assert config.help.names == "help h --help"
    assert config.help.description == "Displays usages"
    assert config.cli.error_exit_code == 1
    assert config.to_dict()["help"] == DEFAULT_CONFIG_DICT["help"]


def test_env_override_is_merged_over_defaults(tmp_path, monkeypatch):
    """COMMANDO_CONFIG values are merged over the defaults."""
    path = tmp_path / "commando.toml"
    path.write_text('[cli]\nerror_exit_code = 2\n', encoding="utf-8")
    monkeypatch.setenv(loader_module.CONFIG_ENV_VAR, str(path))

    config = reload_config()

    assert locate_config_file() == path.resolve()
    assert config.cli.error_exit_code == 2
    assert config.cli.show_usage_on_error is True
    assert config.help.enabled is True


def test_xdg_config_location(tmp_path, monkeypatch):
    """The config file is found under XDG_CONFIG_HOME."""
    path = tmp_path / "xdg" / "commando" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text('[help]\ndescription = "Lists commands"\n', encoding="utf-8")

    assert locate_config_file() == path.resolve()
    assert get_config().help.description == "Lists commands"


def test_missing_env_file_raises(tmp_path, monkeypatch):
    """COMMANDO_CONFIG pointing at a missing file is an error."""
    monkeypatch.setenv(loader_module.CONFIG_ENV_VAR, str(tmp_path / "absent.toml"))

    with pytest.raises(ConfigurationError):
        locate_config_file()


def test_invalid_toml_raises(tmp_path, monkeypatch):
    """Malformed TOML surfaces as ConfigurationError."""
    path = tmp_path / "broken.toml"
    path.write_text("[cli\n", encoding="utf-8")
    monkeypatch.setenv(loader_module.CONFIG_ENV_VAR, str(path))

    with pytest.raises(ConfigurationError, match="Invalid TOML"):
        load_config()


def test_unknown_keys_are_rejected(tmp_path, monkeypatch):
    """Unknown settings fail validation."""
    path = tmp_path / "extra.toml"
    path.write_text("[cli]\ncolour = true\n", encoding="utf-8")
    monkeypatch.setenv(loader_module.CONFIG_ENV_VAR, str(path))

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config()


def test_get_config_is_cached():
    """get_config returns the same object until reloaded."""
    assert get_config() is get_config()


def test_error_exit_code_bounds():
    """error_exit_code must be a valid non-zero exit status."""
    CLIConfig(error_exit_code=1)
    CLIConfig(error_exit_code=255)

    with pytest.raises(ValidationError):
        CLIConfig(error_exit_code=0)

    with pytest.raises(ValidationError):
        CLIConfig(error_exit_code=256)


def test_blank_help_names_rejected():
    """help.names needs at least one alias."""
    with pytest.raises(ValidationError):
        CommandoConfig.from_dict({"help": {"names": "  "}})


def test_merge_configs_is_deep_and_non_mutating():
    """merge_configs merges nested tables and leaves inputs alone."""
    base = {"help": {"names": "help", "enabled": True}}
    override = {"help": {"names": "?"}}

    merged = merge_configs(base, override)

    assert merged == {"help": {"names": "?", "enabled": True}}
    assert base["help"]["names"] == "help"
