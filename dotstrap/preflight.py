"""
Checks that run before anything is installed.

An unusable dotfiles root must fail before Homebrew or Stow are bootstrapped,
so the operator never ends up with tools installed for nothing.
"""

from __future__ import annotations

from .errors import ConfigError
from .lib.packages import discover_packages
from .run_state import RunContext


def validate_run(ctx: RunContext) -> None:
    if not ctx.home.is_dir():
        raise ConfigError(f"HOME does not point at a directory: {ctx.home}")

    # Raises NoPackagesError with the expected layout.
    discover_packages(ctx.root, exclude=ctx.config.excluded_packages)
