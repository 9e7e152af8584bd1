import pytest
from conftest import FakeCommands

from dotstrap import dock
from dotstrap.config import ProvisionConfig
from dotstrap.errors import ToolInstallError


@pytest.fixture
def dock_cmds(monkeypatch):
    cmds = FakeCommands()
    monkeypatch.setattr("dotstrap.lib.dockutil.run_cmd", cmds)
    monkeypatch.setattr("dotstrap.lib.dockutil.which", lambda tool: "/usr/local/bin/dockutil")
    return cmds


def test_layout_removes_adds_and_restarts(dock_cmds, tmp_path):
    app = tmp_path / "Obsidian.app"
    app.mkdir()
    cfg = ProvisionConfig(
        raw={
            "dock": {
                "remove": ["Maps", "News"],
                "add": [
                    {"name": "Obsidian", "path": str(app), "position": 4},
                    {"name": "Ghost", "path": str(tmp_path / "Ghost.app"), "position": 5},
                ],
            }
        }
    )

    failed = dock.configure_dock(cfg)

    assert failed == []
    assert dock_cmds.calls == [
        ["dockutil", "--remove", "Maps", "--no-restart"],
        ["dockutil", "--remove", "News", "--no-restart"],
        ["dockutil", "--remove", "Obsidian", "--no-restart"],
        ["dockutil", "--add", str(app), "--position", "4", "--no-restart"],
        ["killall", "Dock"],
    ]


def test_failed_add_is_reported_but_dock_still_restarts(dock_cmds, tmp_path):
    app = tmp_path / "Slack.app"
    app.mkdir()
    dock_cmds.returncodes[("dockutil", "--add")] = 1
    cfg = ProvisionConfig(raw={"dock": {"remove": [], "add": [{"name": "Slack", "path": str(app), "position": 7}]}})

    failed = dock.configure_dock(cfg)

    assert failed == ["Slack"]
    assert dock_cmds.calls[-1] == ["killall", "Dock"]


def test_missing_dockutil_after_install_is_fatal(monkeypatch):
    cmds = FakeCommands()
    monkeypatch.setattr("dotstrap.lib.dockutil.run_cmd", cmds)
    monkeypatch.setattr("dotstrap.lib.dockutil.which", lambda tool: None)

    with pytest.raises(ToolInstallError):
        dock.ensure_dockutil("https://example.invalid/dockutil.pkg")

    assert cmds.calls[0][:3] == ["curl", "-L", "-o"]
    assert cmds.calls[1][:3] == ["sudo", "installer", "-pkg"]


def test_main_returns_one_when_dockutil_cannot_be_installed(monkeypatch, tmp_path):
    monkeypatch.setattr("dotstrap.lib.dockutil.run_cmd", FakeCommands())
    monkeypatch.setattr("dotstrap.lib.dockutil.which", lambda tool: None)

    code = dock.main(["--config", str(tmp_path / "none.yaml"), "--log", str(tmp_path / "dock.log")])

    assert code == 1
