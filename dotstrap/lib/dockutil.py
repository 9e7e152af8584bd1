from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from .command import run_cmd, which

logger = logging.getLogger(__name__)


def is_installed() -> bool:
    return which("dockutil") is not None


def install_from_pkg(url: str, *, dry_run: bool = False) -> None:
    """Download the dockutil installer package and install it system-wide."""

    if dry_run:
        logger.info("Would download %s and install it with installer(8)", url)
        return

    with tempfile.TemporaryDirectory(prefix="dockutil-") as tmp:
        pkg = Path(tmp) / "dockutil.pkg"
        run_cmd(["curl", "-L", "-o", str(pkg), url])
        run_cmd(["sudo", "installer", "-pkg", str(pkg), "-target", "/"], capture=False)


def remove(name: str, *, dry_run: bool = False) -> bool:
    r = run_cmd(["dockutil", "--remove", name, "--no-restart"], check=False, dry_run=dry_run)
    return r.ok


def add(path: str, position: int, *, dry_run: bool = False) -> bool:
    r = run_cmd(
        ["dockutil", "--add", path, "--position", str(position), "--no-restart"],
        check=False,
        dry_run=dry_run,
    )
    return r.ok


def restart_dock(*, dry_run: bool = False) -> None:
    run_cmd(["killall", "Dock"], check=False, dry_run=dry_run)
