from __future__ import annotations

import logging

from ..console import out
from ..lib.packages import discover_packages
from ..run_state import RunContext, RunReport

logger = logging.getLogger(__name__)


class DiscoverPackagesStep:
    step_id = "20_discover_packages"

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        out.info("Checking repository structure...")
        # NoPackagesError propagates: nothing below can work without packages.
        packages = discover_packages(ctx.root, exclude=ctx.config.excluded_packages)
        out.success(f"Found stow packages: {' '.join(p.name for p in packages)}")
        return report.with_(packages=tuple(packages))
