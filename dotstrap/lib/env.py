from __future__ import annotations

import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class BrewPrefixes:
    apple_silicon: str = "/opt/homebrew"
    intel: str = "/usr/local"


PREFIXES = BrewPrefixes()


def machine_arch() -> str:
    return platform.machine().lower()


def brew_prefix(arch: str | None = None) -> str:
    """Homebrew's install prefix for the given (or current) CPU architecture."""

    arch = (arch or machine_arch()).lower()
    return PREFIXES.apple_silicon if arch in {"arm64", "aarch64"} else PREFIXES.intel
