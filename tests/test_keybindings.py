import pytest

from agentic.keybindings import (
    KeyBinding,
    KeyBindingError,
    KeyBindingManager,
    KeyModifiers,
)


def test_parse_modifiers_and_char():
    binding = KeyBinding.from_string("ctrl-shift-k")
    assert binding.key == "k"
    assert binding.modifiers == KeyModifiers.CONTROL | KeyModifiers.SHIFT


def test_cmd_and_meta_aliases():
    assert KeyBinding.from_string("cmd-a") == KeyBinding.from_string("ctrl-a")
    assert KeyBinding.from_string("meta-a") == KeyBinding.from_string("alt-a")


def test_key_is_lowercased():
    assert KeyBinding.from_string("CTRL-A") == KeyBinding.from_string("ctrl-a")


def test_esc_alias():
    assert KeyBinding.from_string("esc") == KeyBinding.from_string("escape")


@pytest.mark.parametrize("text", ["hyper-k", "ctrl-nokey", "", "ctrl--", "ctrl-é"])
def test_invalid_strings_raise(text):
    with pytest.raises(KeyBindingError):
        KeyBinding.from_string(text)
    assert KeyBindingManager.validate_key_string(text) is False


@pytest.mark.parametrize(
    "text",
    ["enter", "escape", "space", "grave", "slash", "comma", "period", "tab",
     "ctrl-alt-shift-f12", "alt-pagedown", "shift-up", "x", "ctrl-f1"],
)
def test_to_string_round_trip(text):
    binding = KeyBinding.from_string(text)
    assert binding.to_string() == text
    assert KeyBinding.from_string(binding.to_string()) == binding


def test_to_string_modifier_order():
    assert KeyBinding.from_string("shift-alt-cmd-enter").to_string() == "ctrl-alt-shift-enter"


def test_matches():
    binding = KeyBinding.from_string("ctrl-s")
    assert binding.matches("s", KeyModifiers.CONTROL)
    assert not binding.matches("s", KeyModifiers.NONE)
    assert not binding.matches("x", KeyModifiers.CONTROL)


def test_add_and_lookup():
    manager = KeyBindingManager()
    binding = KeyBinding.from_string("ctrl-s")
    manager.add_binding("file:save", binding)
    assert manager.key_for_command("file:save") == binding
    assert manager.command_for_key("s", KeyModifiers.CONTROL) == "file:save"
    assert manager.has_binding("file:save")


def test_add_binding_replaces_both_directions():
    manager = KeyBindingManager()
    first = KeyBinding.from_string("ctrl-a")
    second = KeyBinding.from_string("ctrl-b")
    manager.add_binding("one", first)
    manager.add_binding("two", first)
    assert not manager.has_binding("one")
    assert manager.command_for_key("a", KeyModifiers.CONTROL) == "two"
    manager.add_binding("two", second)
    assert manager.command_for_key("a", KeyModifiers.CONTROL) is None
    assert manager.list_bindings() == [("two", second)]


def test_remove_binding():
    manager = KeyBindingManager()
    manager.add_binding("quit", KeyBinding.from_string("ctrl-q"))
    manager.remove_binding("quit")
    manager.remove_binding("missing")
    assert not manager.has_binding("quit")
    assert manager.command_for_key("q", KeyModifiers.CONTROL) is None


def test_categories_and_search():
    manager = KeyBindingManager()
    manager.add_binding("editor:copy", KeyBinding.from_string("ctrl-c"))
    manager.add_binding("editor:paste", KeyBinding.from_string("ctrl-v"))
    manager.add_binding("quit", KeyBinding.from_string("ctrl-q"))
    categories = manager.bindings_by_category()
    assert sorted(categories) == ["editor", "general"]
    assert sorted(c for c, _ in categories["editor"]) == ["editor:copy", "editor:paste"]
    assert [c for c, _ in categories["general"]] == ["quit"]
    assert sorted(c for c, _ in manager.search_bindings("PASTE")) == ["editor:paste"]


def test_load_keyset_skips_invalid_keys(tmp_path):
    (tmp_path / "mine.yaml").write_text(
        "save: ctrl-s\nbroken: hyper-x\nquit: ctrl-q\n", encoding="utf-8"
    )
    manager = KeyBindingManager()
    manager.add_keyset_directory(tmp_path)
    manager.add_binding("old", KeyBinding.from_string("ctrl-o"))
    manager.load_keyset("mine")
    assert manager.current_keyset == "mine"
    assert not manager.has_binding("old")
    assert not manager.has_binding("broken")
    assert manager.command_for_key("s", KeyModifiers.CONTROL) == "save"


def test_load_missing_keyset_raises(tmp_path):
    manager = KeyBindingManager()
    manager.add_keyset_directory(tmp_path)
    with pytest.raises(KeyBindingError, match="not found"):
        manager.load_keyset("absent")
    assert manager.current_keyset is None


def test_load_malformed_keyset_raises(tmp_path):
    (tmp_path / "bad.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    manager = KeyBindingManager()
    manager.add_keyset_directory(tmp_path)
    with pytest.raises(KeyBindingError):
        manager.load_keyset("bad")


def test_export_then_load_round_trip(tmp_path):
    manager = KeyBindingManager()
    manager.add_binding("editor:comment", KeyBinding.from_string("ctrl-slash"))
    manager.add_binding("palette", KeyBinding.from_string("alt-shift-space"))
    manager.export_keyset(tmp_path / "exported.yaml")

    other = KeyBindingManager()
    other.add_keyset_directory(tmp_path)
    other.load_keyset("exported")
    assert dict(other.list_bindings()) == dict(manager.list_bindings())