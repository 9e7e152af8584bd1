from __future__ import annotations

import logging
from typing import Dict

from ..console import out
from ..lib.command import run_cmd
from ..run_state import CustomizerOutcome, RunContext, RunReport

logger = logging.getLogger(__name__)


class CustomizerStep:
    """Run an optional shell script from the dotfiles repo after confirmation.

    Absent scripts, a "no" answer and a failing script are all non-fatal.
    """

    step_id = ""
    kind = ""
    title = ""
    effect = ""

    def _script(self, ctx: RunContext) -> str:
        scripts: Dict[str, str] = dict(ctx.config.customizer_scripts)
        return scripts[self.kind]

    def _record(self, report: RunReport, script: str, status: str) -> RunReport:
        outcome = CustomizerOutcome(kind=self.kind, script=script, status=status)
        return report.with_(customizers=report.customizers + (outcome,))

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        out.info(f"Configuring {self.title}...")
        rel = self._script(ctx)
        script = ctx.root / rel

        if not script.is_file():
            out.warning(f"{self.title} setup script not found at: {script}")
            return self._record(report, rel, "missing")

        out.warning(f"This will modify {self.effect}.")

        if ctx.dry_run:
            out.dry_run(f"Would run {self.title} configuration script: {script}")
            return self._record(report, rel, "would_run")

        if not (ctx.assume_yes or out.confirm(f"Run {script.name} now?")):
            out.info(f"Skipping {self.title} configuration")
            return self._record(report, rel, "declined")

        out.info(f"Running {self.title} setup script...")
        r = run_cmd(["bash", str(script)], check=False, capture=False, cwd=str(ctx.root))
        if r.ok:
            out.success(f"{self.title} configuration completed")
            return self._record(report, rel, "ran")
        out.warning(f"{self.title} configuration script encountered some issues (exit {r.returncode})")
        return self._record(report, rel, "failed")


class CustomizeOSStep(CustomizerStep):
    step_id = "70_customize_os"
    kind = "os"
    title = "macOS"
    effect = "various macOS system preferences"
