"""Application configuration stored as TOML under the user's home directory."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli_w

CONFIG_DIR_NAME = ".agentic"
CONFIG_FILE_NAME = "config.toml"
DATABASE_FILE_NAME = "history.db"
OPENAI_KEY_ENV = "OPENAI_API_KEY"


def _home() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return Path(".")


def default_config_path() -> Path:
    """Return the location of the configuration file in the home directory."""
    return _home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _default_database_path() -> Path:
    return _home() / CONFIG_DIR_NAME / DATABASE_FILE_NAME


def _build(cls: type, data: Any, section: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"config section '{section}' must be a table")
    values = {}
    for spec in fields(cls):
        if spec.name not in data:
            raise ValueError(f"missing field '{spec.name}' in config section '{section}'")
        values[spec.name] = data[spec.name]
    return cls(**values)


@dataclass
class Theme:
    """Colour scheme of the interface."""

    dark_mode: bool = True
    primary_color: str = "#61dafb"
    secondary_color: str = "#282c34"
    accent_color: str = "#98c379"
    background_color: str = "#1e1e1e"
    text_color: str = "#ffffff"


@dataclass
class AgentConfig:
    """Settings for the language-model agent."""

    model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout_seconds: int = 30
    preferred_provider: str = "ollama"


@dataclass
class Config:
    """Top-level application configuration."""

    database_path: Path = field(default_factory=_default_database_path)
    openai_api_key: str | None = None
    theme: Theme = field(default_factory=Theme)
    agent: AgentConfig = field(default_factory=AgentConfig)
    aliases: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Config:
        """Read the configuration file, creating it with defaults when absent."""
        config_path = Path(path) if path is not None else default_config_path()
        if config_path.exists():
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
            return cls.from_dict(data)
        config = cls()
        config.save(config_path)
        return config

    def save(self, path: str | os.PathLike[str] | None = None) -> None:
        """Write the configuration as TOML, creating parent directories."""
        config_path = Path(path) if path is not None else default_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(tomli_w.dumps(self.to_dict()), encoding="utf-8")

    def resolve_openai_api_key(self) -> str | None:
        """Return the configured key, falling back to the environment."""
        if self.openai_api_key is not None:
            return self.openai_api_key
        return os.environ.get(OPENAI_KEY_ENV)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"database_path": str(self.database_path)}
        if self.openai_api_key is not None:
            data["openai_api_key"] = self.openai_api_key
        data["theme"] = asdict(self.theme)
        data["agent"] = asdict(self.agent)
        data["aliases"] = dict(self.aliases)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        for key in ("database_path", "theme", "agent", "aliases"):
            if key not in data:
                raise ValueError(f"missing field '{key}' in config")
        aliases = data["aliases"]
        if not isinstance(aliases, Mapping):
            raise ValueError("config section 'aliases' must be a table")
        return cls(
            database_path=Path(data["database_path"]),
            openai_api_key=data.get("openai_api_key"),
            theme=_build(Theme, data["theme"], "theme"),
            agent=_build(AgentConfig, data["agent"], "agent"),
            aliases={str(k): str(v) for k, v in aliases.items()},
        )