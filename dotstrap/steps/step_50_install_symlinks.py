from __future__ import annotations

import logging

from ..console import out
from ..lib.stow import simulate, stow
from ..run_state import RunContext, RunReport

logger = logging.getLogger(__name__)

PREVIEW_LINES = 10


class InstallSymlinksStep:
    step_id = "50_install_symlinks"

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        out.info("Stowing packages...")
        stowed = []
        failed = []

        for package in report.packages:
            out.info(f"Stowing package: {package.name}")
            if ctx.dry_run:
                out.dry_run(f"Would stow package: {package.name}")
                if report.tool_missing("stow"):
                    out.dry_run("Cannot simulate: stow not installed")
                    continue
                preview = simulate(ctx.root, ctx.home, package.name).output.splitlines()
                for line in preview[:PREVIEW_LINES]:
                    out.line(f"    {line}")
                continue

            # One package failing must not stop the rest.
            if stow(ctx.root, ctx.home, package.name):
                out.success(f"Successfully stowed package: {package.name}")
                stowed.append(package.name)
            else:
                out.error(f"Failed to stow package: {package.name}")
                out.error("You may need to resolve conflicts manually")
                failed.append(package.name)

        return report.with_(stowed_packages=tuple(stowed), failed_packages=tuple(failed))
