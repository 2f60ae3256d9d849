"""Pydantic models describing the configuration file."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class MetaConfig(_Section):
    version: str = "1.0"


class HelpConfig(_Section):
    """Settings for the built-in help command."""

    enabled: bool = True
    names: str = "help h --help"
    description: str = "Displays usages"

    @field_validator("names")
    @classmethod
    def _names_not_blank(cls, value: str) -> str:
        if not value.split():
            raise ValueError("help.names must contain at least one alias")
        return value


class CLIConfig(_Section):
    show_usage_on_error: bool = True
    error_exit_code: int = Field(default=1, ge=1, le=255)
    debug: bool = False


class CommandoConfig(_Section):
    meta: MetaConfig = Field(default_factory=MetaConfig)
    help: HelpConfig = Field(default_factory=HelpConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandoConfig":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
