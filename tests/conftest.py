import logging
import os
from pathlib import Path
from typing import Dict, List, Set

import pytest

from dotstrap.config import ProvisionConfig
from dotstrap.lib.command import CmdResult
from dotstrap.run_state import Mode, RunContext


def _target_name(part: str) -> str:
    return "." + part[len("dot-"):] if part.startswith("dot-") else part


class FakeStow:
    """Stand-in for `stow --dotfiles` that really creates symlinks.

    Good enough to exercise conflict detection and idempotency: a regular file
    in the way is a conflict, a symlink already pointing at the package file
    is left alone.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.failing: Set[str] = set()

    def _plan(self, root: Path, home: Path, package: str):
        pkg_dir = root / package
        links, conflicts = [], []
        for src in sorted(pkg_dir.rglob("*")):
            if src.is_dir() and not src.is_symlink():
                continue
            rel = Path(*[_target_name(p) for p in src.relative_to(pkg_dir).parts])
            dst = home / rel
            if dst.is_symlink():
                if os.readlink(dst) == str(src):
                    continue
                conflicts.append(f"  * existing target is not owned by stow: {rel}")
            elif dst.exists():
                conflicts.append(
                    f"  * cannot stow {src.name} over existing target {rel} "
                    "since neither a link nor a directory and --adopt not specified"
                )
            else:
                links.append((src, dst))
        return links, conflicts

    def __call__(self, argv, *, check=True, dry_run=False, **kwargs) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        root = Path(argv[argv.index("-d") + 1])
        home = Path(argv[argv.index("-t") + 1])
        package = argv[-1]
        simulate = "-n" in argv

        links, conflicts = self._plan(root, home, package)
        if conflicts:
            stderr = (
                f"WARNING! stowing {package} would cause conflicts:\n"
                + "\n".join(conflicts)
                + "\nAll operations aborted.\n"
            )
            return CmdResult(argv=argv, returncode=1, stdout="", stderr=stderr)

        if not simulate and package in self.failing:
            return CmdResult(argv=argv, returncode=2, stdout="", stderr=f"stow: cannot stow {package}\n")

        lines = [f"LINK: {dst.relative_to(home)} => {src}" for src, dst in links]
        if not simulate:
            for src, dst in links:
                dst.parent.mkdir(parents=True, exist_ok=True)
                os.symlink(str(src), dst)
        return CmdResult(argv=argv, returncode=0, stdout="", stderr="\n".join(lines))

    def real_runs(self) -> List[str]:
        return [c[-1] for c in self.calls if "-n" not in c]


class FakeCommands:
    """Records every other command; results configurable by a prefix match."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.returncodes: Dict[tuple, int] = {}
        self.stdout: Dict[tuple, str] = {}

    def __call__(self, argv, *, check=True, dry_run=False, **kwargs) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        rc, out = 0, ""
        for prefix, code in self.returncodes.items():
            if tuple(argv[: len(prefix)]) == prefix:
                rc = code
        for prefix, text in self.stdout.items():
            if tuple(argv[: len(prefix)]) == prefix:
                out = text
        if dry_run:
            rc = 0
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")

    def matching(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for attr in ("_dotstrap_configured", "_dotstrap_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def fake_stow(monkeypatch):
    stow = FakeStow()
    monkeypatch.setattr("dotstrap.lib.stow.run_cmd", stow)
    return stow


@pytest.fixture
def fake_cmds(monkeypatch):
    cmds = FakeCommands()
    monkeypatch.setattr("dotstrap.lib.brew.run_cmd", cmds)
    monkeypatch.setattr("dotstrap.steps.step_70_customize_os.run_cmd", cmds)
    monkeypatch.setattr("dotstrap.steps.step_10_probe_tools.which", lambda tool: f"/usr/local/bin/{tool}")
    return cmds


@pytest.fixture
def home(tmp_path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def dotfiles(tmp_path) -> Path:
    """shell/ and homebrew/ packages with personal and work variants."""

    root = tmp_path / "dotfiles"
    shell = root / "shell"
    brew = root / "homebrew"
    shell.mkdir(parents=True)
    brew.mkdir()
    (root / ".git").mkdir()
    (shell / "dot-zshrc").write_text("export EDITOR=vim\n")
    (shell / "dot-gitconfig-personal").write_text("[user]\n\temail = me@example.com\n")
    (shell / "dot-gitconfig-work").write_text("[user]\n\temail = me@corp.example\n")
    (brew / "dot-Brewfile-personal").write_text('brew "ripgrep"\n')
    (brew / "dot-Brewfile-work").write_text('brew "awscli"\n')
    return root


def make_ctx(root: Path, home: Path, *, mode: Mode = Mode.PERSONAL, dry_run: bool = False, raw=None) -> RunContext:
    return RunContext(
        root=root,
        home=home,
        mode=mode,
        dry_run=dry_run,
        config=ProvisionConfig(raw=raw or {}),
        assume_yes=True,
    )


def snapshot(*dirs: Path) -> Dict[str, tuple]:
    state: Dict[str, tuple] = {}
    for d in dirs:
        for p in sorted(d.rglob("*")):
            if p.is_symlink():
                state[str(p)] = ("link", os.readlink(p))
            elif p.is_dir():
                state[str(p)] = ("dir",)
            else:
                state[str(p)] = ("file", p.read_bytes())
    return state
