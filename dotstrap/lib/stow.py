from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)

# Stow >= 2.3.2 and the older wording, respectively.
_CONFLICT_PATTERNS = [
    re.compile(r"over existing target (?P<target>.+?) since neither a link nor a directory"),
    re.compile(r"existing target is neither a link nor a directory: (?P<target>.+)$"),
]


@dataclass(frozen=True)
class Simulation:
    package: str
    ok: bool
    output: str
    conflicts: List[str] = field(default_factory=list)


def _base_argv(root: Path, target: Path) -> List[str]:
    return ["stow", "--dotfiles", "-v", "-d", str(root), "-t", str(target)]


def parse_conflicts(output: str) -> List[str]:
    """Target paths (relative to the stow target) that block a stow run."""

    found: List[str] = []
    for line in output.splitlines():
        for pat in _CONFLICT_PATTERNS:
            m = pat.search(line.strip())
            if m:
                target = m.group("target").strip()
                if target not in found:
                    found.append(target)
                break
    return found


def simulate(root: Path, target: Path, package: str) -> Simulation:
    """Dry-run `stow` for one package; never touches the filesystem."""

    r = run_cmd([*_base_argv(root, target), "-n", package], check=False)
    # stow reports planned actions and conflicts on stderr.
    output = "\n".join(s for s in (r.stdout, r.stderr) if s)
    conflicts = parse_conflicts(output) if not r.ok else []
    return Simulation(package=package, ok=r.ok, output=output, conflicts=conflicts)


def stow(root: Path, target: Path, package: str) -> bool:
    r = run_cmd([*_base_argv(root, target), package], check=False)
    if not r.ok:
        logger.error("stow %s failed: %s", package, r.stderr.strip())
    return r.ok
