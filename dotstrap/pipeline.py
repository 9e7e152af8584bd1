from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .run_state import RunContext, RunReport

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: RunContext, report: RunReport) -> RunReport:
        ...


@dataclass(frozen=True)
class PipelineResult:
    report: RunReport
    ran_steps: List[str]


def run_pipeline(
    *,
    ctx: RunContext,
    steps: Sequence[Step],
    report: Optional[RunReport] = None,
) -> PipelineResult:
    """Run steps strictly in order, threading the report through each one.

    Fatal errors (ConfigError, ToolInstallError) propagate to the caller;
    steps are responsible for downgrading everything else.
    """

    if report is None:
        report = RunReport(mode=ctx.mode, dry_run=ctx.dry_run)

    ran: List[str] = []

    for step in steps:
        logger.info("Running step %s", step.step_id)
        report = step.run(ctx, report)
        ran.append(step.step_id)

    report = report.with_(ran_steps=tuple(ran))
    return PipelineResult(report=report, ran_steps=ran)
