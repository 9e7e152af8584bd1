import pytest

from dotstrap.config import DockItem, ProvisionConfig, load_config
from dotstrap.errors import ConfigError


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "dotstrap.yaml")

    assert cfg.required_tools == ["brew", "stow"]
    assert cfg.variants == ["shell/dot-gitconfig", "homebrew/dot-Brewfile"]
    assert cfg.customizer_scripts == [("os", "shell/macos-setup.sh"), ("dock", "shell/dock-setup.sh")]
    assert cfg.dock_add[0] == DockItem(name="Obsidian", path="/Applications/Obsidian.app", position=4)
    assert "App Store" in cfg.dock_remove


def test_yaml_overrides(tmp_path):
    path = tmp_path / "dotstrap.yaml"
    path.write_text(
        "tools:\n"
        "  required: [stow, brew, gh]\n"
        "packages:\n"
        "  exclude: [scratch]\n"
        "dock:\n"
        "  remove: []\n"
        "  add:\n"
        "    - {name: Ghostty, path: /Applications/Ghostty.app, position: 2}\n"
    )

    cfg = load_config(path)

    assert cfg.required_tools == ["brew", "stow", "gh"]
    assert cfg.excluded_packages == ["scratch"]
    assert cfg.dock_remove == []
    assert cfg.dock_add == [DockItem(name="Ghostty", path="/Applications/Ghostty.app", position=2)]


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "dotstrap.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError):
        load_config(path)


def test_bad_defaults_entry_is_rejected():
    cfg = ProvisionConfig(raw={"defaults": [{"domain": "com.example.App", "key": "Flag"}]})

    try:
        cfg.defaults_entries
    except ConfigError as exc:
        assert "value" in str(exc)
    else:
        raise AssertionError("expected ConfigError to be raised")
