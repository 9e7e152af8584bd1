from __future__ import annotations

import logging
from typing import List

from ..console import out
from ..lib.backup import ensure_backup_dir, is_backupable, move_into_backup
from ..lib.stow import simulate
from ..run_state import RunContext, RunReport

logger = logging.getLogger(__name__)


class DetectConflictsStep:
    """Simulate every package; back up plain files that would block stow.

    One backup directory is shared by the whole run and only created on the
    first conflict. Conflicts that are not plain files (foreign symlinks,
    directories, unparseable stow output) are reported and left alone.
    """

    step_id = "40_detect_conflicts"

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        out.info("Checking for conflicts...")

        if report.tool_missing("stow"):
            out.dry_run("Cannot simulate: stow not installed; conflicts not checked")
            return report

        backup_dir = report.backup_dir
        conflicted: List[str] = []
        backed_up: List[str] = []
        unresolved: List[str] = []

        for package in report.packages:
            out.info(f"Checking package: {package.name}")
            sim = simulate(ctx.root, ctx.home, package.name)
            if sim.ok:
                continue

            out.warning(f"Conflicts detected for package: {package.name}")
            conflicted.append(package.name)

            backup_dir, fresh = ensure_backup_dir(
                backup_dir, ctx.home, ctx.config.backup_prefix, dry_run=ctx.dry_run
            )
            if fresh and ctx.dry_run:
                out.dry_run(f"Would create backup directory: {backup_dir}")

            movable = [rel for rel in sim.conflicts if is_backupable(ctx.home, rel)]
            for rel in movable:
                if ctx.dry_run:
                    out.dry_run(f"Would back up ~/{rel} to {backup_dir}")
                else:
                    try:
                        move_into_backup(ctx.home, rel, backup_dir)
                    except OSError as e:
                        out.error(f"Could not back up ~/{rel}: {e}")
                        unresolved.append(f"{package.name}:{rel}")
                        continue
                    out.info(f"Backed up ~/{rel}")
                backed_up.append(rel)

            leftover = [rel for rel in sim.conflicts if rel not in movable]
            if leftover or not sim.conflicts:
                unresolved.extend(f"{package.name}:{rel}" for rel in leftover or ["?"])
                out.warning(f"You may need to manually resolve conflicts for package: {package.name}")

        if not conflicted:
            out.success("No conflicts found")

        return report.with_(
            conflicted_packages=tuple(conflicted),
            backup_dir=backup_dir,
            backed_up=tuple(backed_up),
            unresolved_conflicts=tuple(unresolved),
        )
