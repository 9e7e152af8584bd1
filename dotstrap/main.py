from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from .config import DEFAULT_CONFIG_NAME, load_config
from .console import out
from .errors import DotstrapError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .preflight import validate_run
from .run_state import Mode, RunContext, RunReport
from .steps import (
    ConfigureEnvStep,
    CustomizeDockStep,
    CustomizeOSStep,
    DetectConflictsStep,
    DiscoverPackagesStep,
    InstallDependenciesStep,
    InstallSymlinksStep,
    ProbeToolsStep,
    ResolveModeStep,
    SummaryStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        ProbeToolsStep(),
        DiscoverPackagesStep(),
        ResolveModeStep(),
        DetectConflictsStep(),
        InstallSymlinksStep(),
        ConfigureEnvStep(),
        InstallDependenciesStep(),
        CustomizeOSStep(),
        CustomizeDockStep(),
        SummaryStep(),
    ]


class ArgumentParser(argparse.ArgumentParser):
    """argparse exits 2 on bad flags; dotstrap reports usage errors as 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\nUse --help for usage information\n")


def build_arg_parser() -> ArgumentParser:
    p = ArgumentParser(
        prog="dotstrap",
        description="Install Homebrew and GNU Stow, then stow a dotfiles repository into $HOME.",
    )
    p.add_argument(
        "--work",
        action="store_true",
        help="Install work-specific configurations (gitconfig and Brewfile)",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Check what would be installed without making changes",
    )
    p.add_argument("--root", default=None, help="Dotfiles repository (default: current directory)")
    p.add_argument("--config", default=None, help=f"Config file (default: <root>/{DEFAULT_CONFIG_NAME})")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the run log")
    p.add_argument("-y", "--yes", action="store_true", help="Run post-install scripts without asking")
    p.add_argument("-v", "--verbose", action="store_true", help="Mirror log records to stderr")
    return p


def run(ctx: RunContext) -> RunReport:
    """Run the provisioning pipeline and return the final report.

    The context must already have passed validate_run().
    """

    if ctx.dry_run:
        out.dry_run("DRY RUN MODE - No changes will be made")
    out.info(f"Starting dotfiles installation ({ctx.mode.suffix.upper()} MODE)...")
    out.info(f"Dotfiles directory: {ctx.root}")
    out.info(f"Home directory: {ctx.home}")
    out.info(f"Configuration mode: {ctx.mode.suffix}")

    result = run_pipeline(ctx=ctx, steps=build_steps())
    return result.report


def _abort(e: DotstrapError) -> int:
    logger.exception("Provisioning aborted")
    for line in str(e).splitlines() or [""]:
        out.error(line)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    dry_run = bool(args.dry_run)
    level = logging.DEBUG if args.verbose else logging.INFO
    root = Path(args.root or os.getcwd()).expanduser().resolve()
    home = Path(os.environ.get("HOME") or Path.home())

    try:
        config = load_config(args.config or root / DEFAULT_CONFIG_NAME)
        ctx = RunContext(
            root=root,
            home=home,
            mode=Mode.WORK if args.work else Mode.PERSONAL,
            dry_run=dry_run,
            config=config,
            assume_yes=bool(args.yes),
        )
        validate_run(ctx)
    except DotstrapError as e:
        # Nothing is written for an unusable run, not even the log file.
        configure_logging(log_path=None, level=level, also_console=bool(args.verbose))
        return _abort(e)

    configure_logging(
        log_path=None if dry_run else args.log,
        level=level,
        also_console=bool(args.verbose),
    )

    try:
        run(ctx)
    except KeyboardInterrupt:
        out.error("Interrupted")
        return 130
    except DotstrapError as e:
        return _abort(e)

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
