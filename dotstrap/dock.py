"""Dock layout customizer (`dotstrap-dock`)."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_CONFIG_NAME, ProvisionConfig, load_config
from .console import StatusPrinter
from .errors import DotstrapError, ToolInstallError
from .lib import dockutil
from .logging_utils import DEFAULT_LOG_PATH, configure_logging

logger = logging.getLogger(__name__)

out = StatusPrinter(label="DOCK")


def ensure_dockutil(url: str, *, dry_run: bool = False) -> None:
    out.info("Installing dockutil...")
    if dockutil.is_installed():
        out.success("dockutil is already installed")
        return

    if dry_run:
        out.info(f"Would download and install dockutil from {url}")
        return

    out.info("Downloading dockutil...")
    dockutil.install_from_pkg(url)
    if not dockutil.is_installed():
        raise ToolInstallError("dockutil installation failed or not in PATH")
    out.success("dockutil installed successfully")


def configure_dock(config: ProvisionConfig, *, dry_run: bool = False) -> List[str]:
    """Apply the configured layout; returns the names that could not be added."""

    out.info("Starting dock configuration...")
    ensure_dockutil(config.dockutil_pkg_url, dry_run=dry_run)

    out.info("Removing unwanted dock items...")
    for name in config.dock_remove:
        out.info(f"Removing: {name}")
        if dockutil.remove(name, dry_run=dry_run):
            out.success(f"Removed: {name}")
        else:
            out.warning(f"Could not remove: {name} (may not be present)")

    out.info("Adding new dock items...")
    failed: List[str] = []
    for item in config.dock_add:
        out.info(f"Adding: {item.name} at position {item.position}")
        if not Path(item.path).is_dir():
            out.warning(f"Application not found: {item.path}")
            out.warning(f"Skipping: {item.name}")
            continue

        # Drop any existing tile first so the app lands exactly at `position`.
        dockutil.remove(item.name, dry_run=dry_run)
        if dockutil.add(item.path, item.position, dry_run=dry_run):
            out.success(f"Added: {item.name} at position {item.position}")
        else:
            out.error(f"Failed to add: {item.name}")
            failed.append(item.name)

    out.info("Restarting Dock to apply changes...")
    dockutil.restart_dock(dry_run=dry_run)
    out.success("Dock configuration completed successfully!")
    return failed


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="dotstrap-dock", description="Customize the macOS Dock with dockutil.")
    p.add_argument("--config", default=DEFAULT_CONFIG_NAME)
    p.add_argument("--log", default=DEFAULT_LOG_PATH)
    p.add_argument("--dry-run", action="store_true")
    args = p.parse_args(argv)

    configure_logging(log_path=None if args.dry_run else os.path.expanduser(args.log))

    try:
        configure_dock(load_config(args.config), dry_run=bool(args.dry_run))
    except DotstrapError as e:
        logger.exception("Dock configuration failed")
        out.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
