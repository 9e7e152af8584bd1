from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from .command import run_cmd
from .env import brew_prefix
from .rcfile import append_once

logger = logging.getLogger(__name__)


def install_homebrew(*, install_url: str, profile: Path, arch: str | None = None) -> str:
    """Run the official Homebrew installer and put brew on PATH.

    The shellenv line goes into the login profile for future shells; the
    current process gets the bin directory prepended so later steps can
    find brew immediately. Returns the Homebrew prefix.
    """

    script = run_cmd(["curl", "-fsSL", install_url]).stdout
    run_cmd(["/bin/bash", "-c", script], env={"NONINTERACTIVE": "1"}, capture=False)

    prefix = brew_prefix(arch)
    brew_bin = f"{prefix}/bin/brew"
    append_once(profile, f"{brew_bin} shellenv", [f'eval "$({brew_bin} shellenv)"'])

    bin_dir = f"{prefix}/bin"
    path = os.environ.get("PATH", "")
    if bin_dir not in path.split(os.pathsep):
        os.environ["PATH"] = os.pathsep.join([bin_dir, path]) if path else bin_dir
    logger.info("Homebrew installed under %s", prefix)
    return prefix


def install_formula(name: str) -> None:
    run_cmd(["brew", "install", name], capture=False)


def bundle_install(manifest: Path) -> bool:
    r = run_cmd(["brew", "bundle", "install", f"--file={manifest}"], check=False, capture=False)
    return r.ok


def bundle_check(manifest: Path) -> bool:
    """True when every entry of the manifest is already installed."""

    r = run_cmd(["brew", "bundle", "check", f"--file={manifest}"], check=False)
    return r.ok


def bundle_list(manifest: Path, *, limit: int = 10) -> List[str]:
    r = run_cmd(["brew", "bundle", "list", f"--file={manifest}"], check=False)
    lines = [line for line in r.stdout.splitlines() if line.strip()]
    return lines[:limit]
