from __future__ import annotations

import logging

from ..console import out
from ..lib.backup import ensure_backup_dir, move_into_backup
from ..lib.variants import activate_variant, shadows_variant, variant_path
from ..run_state import RunContext, RunReport

logger = logging.getLogger(__name__)

# Files moved out of the dotfiles repo land under this name in the backup dir.
REPO_BACKUP_SUBDIR = "dotfiles"


class ResolveModeStep:
    """Point each canonical config name at its mode-specific variant.

    A regular file sitting at the canonical name would otherwise be stowed
    instead of the variant, so it is moved into the run's backup directory
    first.
    """

    step_id = "30_resolve_mode"

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        suffix = ctx.mode.suffix
        out.info(f"Setting up configuration files for {suffix} mode...")

        outcomes = []
        displaced = []
        backup_dir = report.backup_dir
        for rel in ctx.config.variants:
            canonical = ctx.root / rel
            name = canonical.name
            try:
                if shadows_variant(canonical, ctx.mode):
                    backup_dir, fresh = ensure_backup_dir(
                        backup_dir, ctx.home, ctx.config.backup_prefix, dry_run=ctx.dry_run
                    )
                    if fresh and ctx.dry_run:
                        out.dry_run(f"Would create backup directory: {backup_dir}")
                    if ctx.dry_run:
                        out.dry_run(f"Would move regular file {rel} to {backup_dir}")
                    else:
                        move_into_backup(ctx.root, rel, backup_dir / REPO_BACKUP_SUBDIR)
                        out.warning(f"Moved regular file {rel} to {backup_dir}")
                    displaced.append(rel)
                outcome = activate_variant(canonical, ctx.mode, dry_run=ctx.dry_run)
            except OSError as e:
                out.warning(f"Could not link {name} for {suffix} mode: {e}")
                continue

            if outcome.status == "would_activate":
                out.dry_run(f"Would symlink {variant_path(canonical, ctx.mode).name} to {name}")
            elif outcome.status == "activated":
                out.success(f"Configured {name} for {suffix} mode")
            elif outcome.status == "default":
                out.info(f"Using default {name} (no {suffix}-specific config found)")
            else:
                out.warning(f"No {name} found for {suffix} mode")
            outcomes.append(outcome)

        return report.with_(
            variants=tuple(outcomes),
            backup_dir=backup_dir,
            displaced_files=tuple(displaced),
        )
