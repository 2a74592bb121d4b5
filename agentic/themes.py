"""Colour themes loaded from YAML files in a set of directories."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

THEME_SUFFIXES = (".yaml", ".yml")

_CATEGORY_TAGS = (
    ("dark", "Dark"),
    ("light", "Light"),
    ("popular", "Popular"),
    ("minimal", "Minimal"),
)


class ThemeNotFoundError(LookupError):
    """Raised when a theme name is not among the loaded themes."""


def _require_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field '{key}' in theme")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"theme field '{key}' must be a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"theme field '{key}' must be a string")
    return value


def _color_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    if key not in data:
        raise ValueError(f"missing field '{key}' in terminal_colors")
    value = data[key]
    if not isinstance(value, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ValueError(f"terminal_colors '{key}' must map names to colours")
    return dict(value)


@dataclass
class TerminalColors:
    """The sixteen ANSI colours, split into normal and bright variants."""

    normal: dict[str, str] = field(default_factory=dict)
    bright: dict[str, str] = field(default_factory=dict)


@dataclass
class Theme:
    """A named colour scheme."""

    name: str
    accent: str
    background: str
    details: str
    foreground: str
    terminal_colors: TerminalColors
    author: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Theme:
        """Build a theme from parsed YAML, raising ValueError on bad structure."""
        if not isinstance(data, Mapping):
            raise ValueError("theme must be a mapping")
        colors = data.get("terminal_colors")
        if colors is None:
            raise ValueError("missing field 'terminal_colors' in theme")
        if not isinstance(colors, Mapping):
            raise ValueError("theme field 'terminal_colors' must be a mapping")
        tags = data.get("tags")
        if tags is None:
            tags = []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError("theme field 'tags' must be a list of strings")
        return cls(
            name=_require_str(data, "name"),
            accent=_require_str(data, "accent"),
            background=_require_str(data, "background"),
            details=_require_str(data, "details"),
            foreground=_require_str(data, "foreground"),
            terminal_colors=TerminalColors(
                normal=_color_map(colors, "normal"),
                bright=_color_map(colors, "bright"),
            ),
            author=_optional_str(data, "author"),
            description=_optional_str(data, "description"),
            tags=list(tags),
        )


def _load_theme_file(path: Path) -> Theme:
    theme = Theme.from_dict(yaml.safe_load(path.read_text(encoding="utf-8")))
    if not theme.name:
        theme.name = path.stem
    return theme


class ThemeManager:
    """Collects themes from its directories and tracks the one in use."""

    def __init__(self) -> None:
        self.themes: dict[str, Theme] = {}
        self.theme_directories: list[Path] = [
            Path("themes"),
            Path("~/.agentic/themes"),
        ]
        self._current_theme: str | None = None

    def add_theme_directory(self, path: str | os.PathLike[str]) -> None:
        self.theme_directories.append(Path(path))

    def load_themes(self) -> None:
        """Load every theme file found under the existing theme directories."""
        for directory in list(self.theme_directories):
            if directory.exists():
                self._load_directory(directory)

    def _load_directory(self, directory: Path) -> None:
        for path in sorted(directory.iterdir()):
            if path.is_dir():
                self._load_directory(path)
            elif path.suffix in THEME_SUFFIXES:
                try:
                    theme = _load_theme_file(path)
                except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError):
                    continue
                self.themes[theme.name] = theme

    def get_theme(self, name: str) -> Theme | None:
        return self.themes.get(name)

    def list_themes(self) -> list[Theme]:
        return list(self.themes.values())

    def list_themes_by_tag(self, tag: str) -> list[Theme]:
        return [theme for theme in self.themes.values() if tag in theme.tags]

    def set_current_theme(self, name: str) -> None:
        if name not in self.themes:
            raise ThemeNotFoundError(f"Theme '{name}' not found")
        self._current_theme = name

    @property
    def current_theme(self) -> Theme | None:
        if self._current_theme is None:
            return None
        return self.themes.get(self._current_theme)

    def reload_themes(self) -> None:
        self.themes.clear()
        self.load_themes()

    def search_themes(self, query: str) -> list[Theme]:
        """Themes whose name, description or a tag contains ``query``, ignoring case."""
        needle = query.lower()
        return [
            theme
            for theme in self.themes.values()
            if needle in theme.name.lower()
            or (theme.description is not None and needle in theme.description.lower())
            or any(needle in tag.lower() for tag in theme.tags)
        ]

    def theme_categories(self) -> dict[str, list[Theme]]:
        """Group themes under Dark, Light, Popular and Minimal by their tags."""
        categories: dict[str, list[Theme]] = {}
        for theme in self.themes.values():
            for tag, category in _CATEGORY_TAGS:
                if tag in theme.tags:
                    categories.setdefault(category, []).append(theme)
        return categories