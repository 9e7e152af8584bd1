from __future__ import annotations

import logging

from ..console import out
from ..errors import CommandError, ToolInstallError
from ..lib.brew import install_formula, install_homebrew
from ..lib.command import which
from ..run_state import RunContext, RunReport

logger = logging.getLogger(__name__)

TOOL_LABELS = {"brew": "Homebrew", "stow": "GNU Stow"}


class ProbeToolsStep:
    step_id = "10_probe_tools"

    def _install(self, ctx: RunContext, tool: str) -> None:
        if tool == "brew":
            install_homebrew(
                install_url=ctx.config.homebrew_install_url,
                profile=ctx.home / ctx.config.shell_profile,
            )
        else:
            install_formula(tool)

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        installed = []
        missing = []
        for tool in ctx.config.required_tools:
            label = TOOL_LABELS.get(tool, tool)
            out.info(f"Checking for {label}...")
            if which(tool):
                out.success(f"{label} is already installed")
                continue

            if ctx.dry_run:
                out.dry_run(f"Would install {label}")
                missing.append(tool)
                continue

            out.info(f"Installing {label}...")
            try:
                self._install(ctx, tool)
            except CommandError as e:
                # Everything after this step shells out to these tools.
                raise ToolInstallError(f"Failed to install {label}: {e}") from e
            if not which(tool):
                raise ToolInstallError(f"{label} was installed but '{tool}' is still not on PATH")
            out.success(f"{label} installed successfully")
            installed.append(tool)

        return report.with_(
            tools=tuple(ctx.config.required_tools),
            installed_tools=tuple(installed),
            missing_tools=tuple(missing),
        )
