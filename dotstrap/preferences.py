"""Apply `defaults` entries from dotstrap.yaml (`dotstrap-defaults`).

Example config:

    defaults:
      - domain: com.example.MenubarAgent
        key: LaunchAtLogin
        value: true
      - domain: com.example.MenubarAgent
        key: LegacyHotkey
        delete: true
    preferences:
      restart: [MenubarAgent]
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config import DEFAULT_CONFIG_NAME, ProvisionConfig, load_config
from .console import out
from .errors import CommandError, DotstrapError
from .lib.command import run_cmd
from .lib.defaults import defaults_delete, defaults_read, defaults_write, read_back
from .logging_utils import DEFAULT_LOG_PATH, configure_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreferenceChange:
    domain: str
    key: str
    action: str  # write | delete | unchanged | failed


def apply_entry(entry: Dict[str, Any], *, dry_run: bool = False) -> PreferenceChange:
    domain = str(entry["domain"])
    key = str(entry["key"])

    if entry.get("delete"):
        if defaults_read(domain, key) is None:
            return PreferenceChange(domain, key, "unchanged")
        defaults_delete(domain, key, dry_run=dry_run)
        return PreferenceChange(domain, key, "delete")

    value = entry["value"]
    if defaults_read(domain, key) == read_back(value):
        return PreferenceChange(domain, key, "unchanged")
    try:
        defaults_write(domain, key, value, dry_run=dry_run)
    except (CommandError, TypeError) as e:
        logger.error("defaults write %s %s failed: %s", domain, key, e)
        return PreferenceChange(domain, key, "failed")
    return PreferenceChange(domain, key, "write")


def apply_preferences(config: ProvisionConfig, *, dry_run: bool = False) -> List[PreferenceChange]:
    changes = []
    for entry in config.defaults_entries:
        change = apply_entry(entry, dry_run=dry_run)
        label = f"{change.domain} {change.key}"
        if change.action == "unchanged":
            out.info(f"Already set: {label}")
        elif change.action == "failed":
            out.warning(f"Could not set: {label}")
        elif dry_run:
            out.dry_run(f"Would {change.action}: {label}")
        else:
            out.success(f"{change.action.capitalize()}: {label}")
        changes.append(change)

    if any(c.action in {"write", "delete"} for c in changes):
        for app in config.defaults_restart:
            run_cmd(["killall", app], check=False, dry_run=dry_run)
    return changes


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="dotstrap-defaults", description="Write macOS preference values.")
    p.add_argument("--config", default=DEFAULT_CONFIG_NAME)
    p.add_argument("--log", default=DEFAULT_LOG_PATH)
    p.add_argument("--dry-run", action="store_true")
    args = p.parse_args(argv)

    configure_logging(log_path=None if args.dry_run else os.path.expanduser(args.log))

    try:
        changes = apply_preferences(load_config(args.config), dry_run=bool(args.dry_run))
    except DotstrapError as e:
        out.error(str(e))
        return 1
    return 1 if any(c.action == "failed" for c in changes) else 0


if __name__ == "__main__":
    raise SystemExit(main())
