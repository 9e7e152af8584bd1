"""
Exception types used across dotstrap.

Only ConfigError and ToolInstallError are allowed to escape a step; main()
turns them into exit code 1. Everything else is downgraded inside the step
that raised it.
"""

from __future__ import annotations

from typing import Sequence


class DotstrapError(Exception):
    """Base class for all dotstrap specific errors."""


class ConfigError(DotstrapError):
    """Raised when the dotfiles repository or config file is unusable."""


class NoPackagesError(ConfigError):
    """Raised when the dotfiles root contains no stow packages."""


class ToolInstallError(DotstrapError):
    """Raised when a required external tool cannot be bootstrapped."""


class CommandError(DotstrapError):
    """Raised when an external command exits non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}\n{stderr}".rstrip())
