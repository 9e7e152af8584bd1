from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_NAME = "dotstrap.yaml"

DEFAULT_VARIANTS = ["shell/dot-gitconfig", "homebrew/dot-Brewfile"]

DEFAULT_DOCK_REMOVE = [
    "Maps",
    "Photos",
    "FaceTime",
    "Contacts",
    "Freeform",
    "TV",
    "News",
    "Keynote",
    "Numbers",
    "Pages",
    "App Store",
]

DEFAULT_DOCK_ADD = [
    {"name": "Obsidian", "path": "/Applications/Obsidian.app", "position": 4},
    {"name": "Visual Studio Code", "path": "/Applications/Visual Studio Code.app", "position": 5},
    {"name": "Xcode", "path": "/Applications/Xcode.app", "position": 6},
    {"name": "Slack", "path": "/Applications/Slack.app", "position": 7},
]

DOCKUTIL_PKG_URL = "https://github.com/kcrawford/dockutil/releases/download/3.1.3/dockutil-3.1.3.pkg"


@dataclass(frozen=True)
class DockItem:
    name: str
    path: str
    position: int


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        value = self.raw.get(name) or {}
        if not isinstance(value, dict):
            raise ConfigError(f"config section '{name}' must be a mapping")
        return value

    @property
    def required_tools(self) -> List[str]:
        tools = [str(t) for t in (self._section("tools").get("required") or ["stow"])]
        # Homebrew installs everything else, so it always goes first.
        return ["brew"] + [t for t in tools if t != "brew"]

    @property
    def homebrew_install_url(self) -> str:
        return str(
            self._section("tools").get("homebrew_install_url")
            or "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
        )

    @property
    def shell_profile(self) -> str:
        return str(self._section("tools").get("shell_profile") or ".zprofile")

    @property
    def excluded_packages(self) -> List[str]:
        return [str(p) for p in (self._section("packages").get("exclude") or [])]

    @property
    def variants(self) -> List[str]:
        return [str(v) for v in (self.raw.get("variants") or DEFAULT_VARIANTS)]

    @property
    def backup_prefix(self) -> str:
        return str(self._section("backup").get("prefix") or "dotfiles_backup_")

    @property
    def manifest_name(self) -> str:
        return str(self._section("brew").get("manifest") or "dot-Brewfile")

    @property
    def shared_manifest(self) -> str:
        return str(self._section("brew").get("shared") or "homebrew/dot-Brewfile-shared")

    @property
    def home_manifest(self) -> str:
        return str(self._section("brew").get("home") or ".Brewfile")

    @property
    def env_rc_file(self) -> str:
        return str(self._section("environment").get("rc_file") or ".zshrc")

    @property
    def env_marker(self) -> str:
        return str(self._section("environment").get("marker") or "DISABLE_AUTOUPDATER")

    @property
    def env_block(self) -> List[str]:
        block = self._section("environment").get("personal")
        if block:
            return [str(line) for line in block]
        return ["# Personal mode - disable auto-updater", "export DISABLE_AUTOUPDATER=1"]

    @property
    def customizer_scripts(self) -> List[Tuple[str, str]]:
        """(kind, relative script path) in execution order."""

        section = self._section("customizers")
        return [
            ("os", str(section.get("os") or "shell/macos-setup.sh")),
            ("dock", str(section.get("dock") or "shell/dock-setup.sh")),
        ]

    @property
    def dock_remove(self) -> List[str]:
        items = self._section("dock").get("remove")
        return [str(i) for i in (DEFAULT_DOCK_REMOVE if items is None else items)]

    @property
    def dock_add(self) -> List[DockItem]:
        items = self._section("dock").get("add")
        out: List[DockItem] = []
        for item in DEFAULT_DOCK_ADD if items is None else items:
            try:
                out.append(DockItem(name=str(item["name"]), path=str(item["path"]), position=int(item["position"])))
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigError(f"invalid dock.add entry {item!r}: {e}") from e
        return out

    @property
    def dockutil_pkg_url(self) -> str:
        return str(self._section("dock").get("dockutil_pkg_url") or DOCKUTIL_PKG_URL)

    @property
    def defaults_entries(self) -> List[Dict[str, Any]]:
        entries = self.raw.get("defaults") or []
        if not isinstance(entries, list):
            raise ConfigError("config key 'defaults' must be a list")
        for e in entries:
            if not isinstance(e, dict) or "domain" not in e or "key" not in e:
                raise ConfigError(f"defaults entry needs 'domain' and 'key': {e!r}")
            if "value" not in e and not e.get("delete"):
                raise ConfigError(f"defaults entry needs 'value' or 'delete: true': {e!r}")
        return entries

    @property
    def defaults_restart(self) -> List[str]:
        return [str(a) for a in (self._section("preferences").get("restart") or [])]

    @property
    def vm_user(self) -> str:
        return str(self._section("vm").get("user") or "admin")

    @property
    def vm_image(self) -> Optional[str]:
        image = self._section("vm").get("image")
        return str(image) if image else None

    @property
    def vm_ip_wait(self) -> int:
        return int(self._section("vm").get("ip_wait") or 60)

    @property
    def vm_no_graphics(self) -> bool:
        return bool(self._section("vm").get("no_graphics", True))


def load_config(path: str | Path | None) -> ProvisionConfig:
    """Load dotstrap.yaml; a missing file means every default applies."""

    if path is None:
        return ProvisionConfig()
    p = Path(path)
    if not p.exists():
        return ProvisionConfig()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError(f"config must be YAML: {p}")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{p} must contain a mapping/object")

    return ProvisionConfig(raw=raw)
