from __future__ import annotations

import logging
from typing import List

from ..console import out
from ..run_state import RunContext, RunReport
from .step_10_probe_tools import TOOL_LABELS

logger = logging.getLogger(__name__)

OK = "✅"
WARN = "⚠️ "


def tool_line(tool: str, report: RunReport) -> str:
    label = TOOL_LABELS.get(tool, tool)
    if tool in report.installed_tools:
        return f"  {OK} {label} installed"
    if report.tool_missing(tool):
        return f"  {WARN} {label} not installed (would be installed)"
    return f"  {OK} {label} already installed"


def summary_lines(ctx: RunContext, report: RunReport) -> List[str]:
    suffix = ctx.mode.suffix
    marker = ctx.config.env_marker
    lines = [tool_line(tool, report) for tool in report.tools]
    lines.append(f"  {OK} Configuration files set for {suffix} mode")
    if report.displaced_files:
        verb = "Would move aside" if report.dry_run else "Moved aside"
        lines.append(f"  {WARN} {verb}: {' '.join(report.displaced_files)}")

    if report.dry_run:
        lines.append(f"  {OK} Stow packages that would be installed: {' '.join(report.package_names)}")
    else:
        lines.append(f"  {OK} Stow packages installed: {' '.join(report.stowed_packages) or '(none)'}")
        if report.failed_packages:
            lines.append(f"  {WARN} Stow packages that failed: {' '.join(report.failed_packages)}")

    if report.work_mode:
        lines.append(f"  {OK} Environment variables configured (work mode - no {marker} change)")
    elif report.dry_run:
        lines.append(f"  {OK} Environment variables: would add {marker} to {ctx.config.env_rc_file}")
    elif report.env_configured or report.env_already_present:
        lines.append(f"  {OK} Environment variables configured ({marker})")
    else:
        lines.append(f"  {WARN} Environment variables not configured ({marker})")

    if not report.manifests:
        lines.append(f"  {WARN} No Brewfile found to install from")
    elif report.dry_run and report.tool_missing("brew"):
        lines.append(f"  {WARN} Brewfile(s) not checked (brew not installed): {', '.join(report.manifests)}")
    elif report.dry_run:
        lines.append(f"  {OK} Brewfile(s) checked: {', '.join(report.manifests)}")
    elif report.brew_success:
        lines.append(f"  {OK} Applications installed from Brewfile(s)")
    else:
        lines.append(f"  {WARN} Some Brewfile packages failed to install (check output above)")

    for c in report.customizers:
        icon = OK if c.status in {"ran", "would_run"} else WARN
        lines.append(f"  {icon} {c.kind} customizer ({c.script}): {c.status.replace('_', ' ')}")

    if report.tool_missing("stow"):
        lines.append(f"  {WARN} Conflicts not checked (stow not installed)")
    if report.conflicts_found:
        lines.append(f"  {WARN} Conflicts in: {' '.join(report.conflicted_packages)}")
        if report.backed_up:
            verb = "Would back up" if report.dry_run else "Backed up"
            lines.append(f"  {WARN} {verb}: {' '.join('~/' + b for b in report.backed_up)}")
        if report.unresolved_conflicts:
            lines.append(f"  {WARN} Some conflicts may need manual resolution")

    if not report.dry_run and report.backup_dir is not None:
        lines.append(f"  📁 Check backup directory: {report.backup_dir}")

    return lines


class SummaryStep:
    step_id = "90_summary"

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        suffix = ctx.mode.suffix
        if report.dry_run:
            out.success("Dry run completed - no changes were made!")
            out.info(f"This is what would have been done (mode: {suffix}):")
        else:
            out.success("Dotfiles installation completed!")
            out.info(f"Summary of what was done (mode: {suffix}):")

        for line in summary_lines(ctx, report):
            out.line(line)

        if not report.brew_success:
            out.line()
            out.warning("Some brew packages failed to install. You can:")
            out.line("  • Check the error messages above")
            out.line("  • Run 'brew bundle install' manually later")
            out.line("  • Check if the failing packages are available")

        if report.dry_run:
            out.info("To actually run the installation, run again without --dry-run")
        else:
            out.info(f"Restart your terminal or run 'source ~/{ctx.config.env_rc_file}' to apply changes.")

        logger.info(
            "Run finished: mode=%s dry_run=%s degraded=%s conflicts=%s",
            suffix,
            report.dry_run,
            report.degraded,
            report.conflicts_found,
        )
        return report
