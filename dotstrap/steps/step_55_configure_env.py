from __future__ import annotations

import logging

from ..console import out
from ..lib.rcfile import append_once, has_marker
from ..run_state import Mode, RunContext, RunReport

logger = logging.getLogger(__name__)


class ConfigureEnvStep:
    step_id = "55_configure_env"

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        out.info(f"Configuring environment variables for {ctx.mode.suffix} mode...")

        if ctx.mode is Mode.WORK:
            out.info(f"Work mode - skipping {ctx.config.env_marker} configuration")
            return report

        rc = ctx.home / ctx.config.env_rc_file
        marker = ctx.config.env_marker

        if has_marker(rc, marker):
            out.info(f"{marker} already configured in {rc.name}")
            return report.with_(env_already_present=True)

        if ctx.dry_run:
            out.dry_run(f"Would add {marker}=1 to {rc.name} (personal mode only)")
            return report

        try:
            append_once(rc, marker, ctx.config.env_block)
        except OSError as e:
            out.warning(f"Could not update {rc}: {e}")
            return report
        out.success(f"Added {marker}=1 to {rc.name}")
        return report.with_(env_configured=True)
