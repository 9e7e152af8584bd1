import pytest

from dotstrap.errors import NoPackagesError
from dotstrap.lib.packages import discover_packages


def test_discover_packages_returns_non_dot_directories_sorted(tmp_path):
    for name in ["vscode", "shell", ".git", "homebrew", ".github"]:
        (tmp_path / name).mkdir()
    (tmp_path / "README.md").write_text("docs\n")

    packages = discover_packages(tmp_path)

    assert [p.name for p in packages] == ["homebrew", "shell", "vscode"]
    assert packages[0].path == tmp_path / "homebrew"


def test_discover_packages_honours_exclude_list(tmp_path):
    (tmp_path / "shell").mkdir()
    (tmp_path / "scratch").mkdir()

    packages = discover_packages(tmp_path, exclude=["scratch"])

    assert [p.name for p in packages] == ["shell"]


def test_discover_packages_without_packages_is_fatal_with_layout_hint(tmp_path):
    (tmp_path / ".git").mkdir()
    (tmp_path / "install.sh").write_text("#!/bin/bash\n")

    with pytest.raises(NoPackagesError) as excinfo:
        discover_packages(tmp_path)

    message = str(excinfo.value)
    assert "No stow packages found" in message
    assert "dot-zshrc" in message
    assert "stow --dotfiles -t $HOME" in message


def test_discover_packages_missing_root_is_fatal(tmp_path):
    with pytest.raises(NoPackagesError):
        discover_packages(tmp_path / "nope")
