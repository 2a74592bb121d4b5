"""Key bindings: parsing key strings and mapping keys to commands via YAML keysets."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Flag, auto
from pathlib import Path

import yaml


class KeyBindingError(ValueError):
    """Raised for an unparsable key string or an unusable keyset."""


class KeyModifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


_MODIFIER_NAMES = {
    "ctrl": KeyModifiers.CONTROL,
    "alt": KeyModifiers.ALT,
    "shift": KeyModifiers.SHIFT,
    "cmd": KeyModifiers.CONTROL,
    "meta": KeyModifiers.ALT,
}

# Keys are named by these strings; any other key is a single-character string.
_KEY_NAMES = {
    "enter": "enter",
    "escape": "esc",
    "esc": "esc",
    "space": " ",
    "tab": "tab",
    "backspace": "backspace",
    "delete": "delete",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "home": "home",
    "end": "end",
    "pageup": "pageup",
    "pagedown": "pagedown",
    **{f"f{n}": f"f{n}" for n in range(1, 13)},
    "grave": "`",
    "slash": "/",
    "comma": ",",
    "period": ".",
}

_KEY_LABELS = {
    "enter": "enter",
    "esc": "escape",
    " ": "space",
    "`": "grave",
    "/": "slash",
    ",": "comma",
    ".": "period",
    "tab": "tab",
    "backspace": "backspace",
    "delete": "delete",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "home": "home",
    "end": "end",
    "pageup": "pageup",
    "pagedown": "pagedown",
}


def _is_function_key(key: str) -> bool:
    return key.startswith("f") and key[1:].isdigit()


@dataclass(frozen=True)
class KeyBinding:
    """A key together with the modifiers held with it."""

    key: str
    modifiers: KeyModifiers = KeyModifiers.NONE

    @classmethod
    def from_string(cls, key_str: str) -> KeyBinding:
        """Parse strings such as ``ctrl-shift-k`` or ``alt-enter``."""
        *modifier_parts, key_part = key_str.split("-")
        modifiers = KeyModifiers.NONE
        for part in modifier_parts:
            try:
                modifiers |= _MODIFIER_NAMES[part.lower()]
            except KeyError:
                raise KeyBindingError(f"Unknown modifier: {part}") from None

        name = key_part.lower()
        if name in _KEY_NAMES:
            key = _KEY_NAMES[name]
        elif len(name.encode("utf-8")) == 1:
            key = name
        else:
            raise KeyBindingError(f"Unknown key: {key_part}")
        return cls(key, modifiers)

    def matches(self, key: str, modifiers: KeyModifiers = KeyModifiers.NONE) -> bool:
        return self.key == key and self.modifiers == modifiers

    def to_string(self) -> str:
        parts = [
            label
            for flag, label in (
                (KeyModifiers.CONTROL, "ctrl"),
                (KeyModifiers.ALT, "alt"),
                (KeyModifiers.SHIFT, "shift"),
            )
            if flag in self.modifiers
        ]
        if self.key in _KEY_LABELS:
            parts.append(_KEY_LABELS[self.key])
        elif len(self.key) == 1 or _is_function_key(self.key):
            parts.append(self.key)
        else:
            parts.append("unknown")
        return "-".join(parts)

    def __str__(self) -> str:
        return self.to_string()


class KeyBindingManager:
    """Two-way map between commands and key bindings, loadable from keyset files."""

    def __init__(self) -> None:
        self._bindings: dict[str, KeyBinding] = {}
        self._reverse: dict[KeyBinding, str] = {}
        self.keyset_directories: list[Path] = [
            Path("keysets"),
            Path("~/.agentic/keysets"),
        ]
        self._current_keyset: str | None = None

    def add_keyset_directory(self, path: str | os.PathLike[str]) -> None:
        self.keyset_directories.append(Path(path))

    def load_keyset(self, keyset_name: str) -> None:
        """Replace all bindings with those of ``<keyset_name>.yaml``; bad keys are skipped."""
        path = next(
            (
                candidate
                for candidate in (d / f"{keyset_name}.yaml" for d in self.keyset_directories)
                if candidate.exists()
            ),
            None,
        )
        if path is None:
            raise KeyBindingError(f"Keyset '{keyset_name}' not found")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise KeyBindingError(f"Failed to read keyset file: {path}") from exc
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise KeyBindingError(f"Failed to parse keyset YAML: {path}") from exc
        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise KeyBindingError(f"Failed to parse keyset YAML: {path}")

        self._bindings.clear()
        self._reverse.clear()
        for command, key_str in data.items():
            try:
                binding = KeyBinding.from_string(key_str)
            except KeyBindingError:
                continue
            self._bindings[command] = binding
            self._reverse[binding] = command

        self._current_keyset = keyset_name

    def command_for_key(
        self, key: str, modifiers: KeyModifiers = KeyModifiers.NONE
    ) -> str | None:
        return self._reverse.get(KeyBinding(key, modifiers))

    def key_for_command(self, command: str) -> KeyBinding | None:
        return self._bindings.get(command)

    def add_binding(self, command: str, key_binding: KeyBinding) -> None:
        """Bind ``command`` to ``key_binding``, dropping whatever either was bound to."""
        old_command = self._reverse.pop(key_binding, None)
        if old_command is not None:
            self._bindings.pop(old_command, None)
        old_key = self._bindings.get(command)
        if old_key is not None:
            self._reverse.pop(old_key, None)
        self._bindings[command] = key_binding
        self._reverse[key_binding] = command

    def remove_binding(self, command: str) -> None:
        binding = self._bindings.pop(command, None)
        if binding is not None:
            self._reverse.pop(binding, None)

    def list_bindings(self) -> list[tuple[str, KeyBinding]]:
        return list(self._bindings.items())

    def bindings_by_category(self) -> dict[str, list[tuple[str, KeyBinding]]]:
        """Group bindings by the command prefix before ``:``, else ``general``."""
        categories: dict[str, list[tuple[str, KeyBinding]]] = {}
        for command, binding in self._bindings.items():
            category, sep, _ = command.partition(":")
            if not sep:
                category = "general"
            categories.setdefault(category, []).append((command, binding))
        return categories

    def search_bindings(self, query: str) -> list[tuple[str, KeyBinding]]:
        needle = query.lower()
        return [
            (command, binding)
            for command, binding in self._bindings.items()
            if needle in command.lower()
        ]

    def export_keyset(self, path: str | os.PathLike[str]) -> None:
        data = {command: binding.to_string() for command, binding in self._bindings.items()}
        try:
            text = yaml.safe_dump(data, allow_unicode=True)
        except yaml.YAMLError as exc:
            raise KeyBindingError("Failed to serialize keyset to YAML") from exc
        try:
            Path(path).write_text(text, encoding="utf-8")
        except OSError as exc:
            raise KeyBindingError(f"Failed to write keyset to: {path}") from exc

    @property
    def current_keyset(self) -> str | None:
        return self._current_keyset

    def has_binding(self, command: str) -> bool:
        return command in self._bindings

    @staticmethod
    def validate_key_string(key_str: str) -> bool:
        try:
            KeyBinding.from_string(key_str)
        except KeyBindingError:
            return False
        return True