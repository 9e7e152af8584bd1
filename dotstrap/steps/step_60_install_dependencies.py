from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..console import out
from ..lib.brew import bundle_check, bundle_install, bundle_list
from ..lib.variants import resolve_variant
from ..run_state import RunContext, RunReport

logger = logging.getLogger(__name__)


def find_manifests(ctx: RunContext, report: RunReport) -> List[Path]:
    """Manifests to process, in order.

    The shared manifest always comes first. Then the one in $HOME (usually
    the stowed, mode-resolved alias) or, failing that, the first package that
    carries one.
    """

    found: List[Path] = []
    shared = ctx.root / ctx.config.shared_manifest
    if shared.is_file():
        found.append(shared)

    home = ctx.home / ctx.config.home_manifest
    if home.is_file():
        found.append(home)
        return found

    # Mode file first; the alias only exists after a real run.
    for package in report.packages:
        candidate = resolve_variant(package.path / ctx.config.manifest_name, ctx.mode)
        if candidate is not None:
            found.append(candidate)
            break
    return found


class InstallDependenciesStep:
    step_id = "60_install_dependencies"

    def _check(self, manifest: Path) -> None:
        out.dry_run(f"Checking packages in {manifest}...")
        if bundle_check(manifest):
            out.success(f"All packages from {manifest.name} are already installed")
            return
        out.warning(f"Some packages from {manifest.name} are missing and would be installed")
        for line in bundle_list(manifest):
            out.line(f"    {line}")

    def _install(self, manifest: Path) -> bool:
        out.info(f"Installing packages from {manifest}...")
        if bundle_install(manifest):
            out.success(f"{manifest.name} packages installed successfully")
            return True
        out.error(f"Some packages from {manifest} failed to install")
        out.warning("Continuing with remaining setup tasks...")
        return False

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        out.info("Installing from Brewfile...")

        manifests = find_manifests(ctx, report)
        if ctx.home / ctx.config.home_manifest not in manifests:
            out.warning(f"No {ctx.config.home_manifest} found in home directory")
            if all(m == ctx.root / ctx.config.shared_manifest for m in manifests):
                out.warning("No mode-specific Brewfile found in any package")

        success = True
        for manifest in manifests:
            if ctx.dry_run and report.tool_missing("brew"):
                out.dry_run(f"Cannot check {manifest}: brew not installed")
            elif ctx.dry_run:
                self._check(manifest)
            elif not self._install(manifest):
                success = False

        return report.with_(
            manifests=tuple(str(m) for m in manifests),
            brew_success=report.brew_success and success,
        )
