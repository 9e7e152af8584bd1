from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Tuple

from .config import ProvisionConfig


class Mode(str, Enum):
    PERSONAL = "personal"
    WORK = "work"

    @property
    def suffix(self) -> str:
        return self.value


@dataclass(frozen=True)
class Package:
    name: str
    path: Path


@dataclass(frozen=True)
class RunContext:
    """Inputs fixed for the whole run."""

    root: Path
    home: Path
    mode: Mode = Mode.PERSONAL
    dry_run: bool = False
    config: ProvisionConfig = field(default_factory=ProvisionConfig)
    assume_yes: bool = False


@dataclass(frozen=True)
class CustomizerOutcome:
    kind: str
    script: str
    # missing | declined | ran | failed | would_run
    status: str


@dataclass(frozen=True)
class VariantOutcome:
    base: str
    # activated | default | missing | would_activate
    status: str
    target: Optional[str] = None


@dataclass(frozen=True)
class RunReport:
    """Accumulated result of a provisioning run.

    Steps never mutate a report; they return an updated copy via `with_()`.
    """

    mode: Mode = Mode.PERSONAL
    dry_run: bool = False
    tools: Tuple[str, ...] = ()
    installed_tools: Tuple[str, ...] = ()
    # Only populated by dry runs; a real run aborts instead.
    missing_tools: Tuple[str, ...] = ()
    packages: Tuple[Package, ...] = ()
    variants: Tuple[VariantOutcome, ...] = ()
    displaced_files: Tuple[str, ...] = ()
    conflicted_packages: Tuple[str, ...] = ()
    backup_dir: Optional[Path] = None
    backed_up: Tuple[str, ...] = ()
    unresolved_conflicts: Tuple[str, ...] = ()
    stowed_packages: Tuple[str, ...] = ()
    failed_packages: Tuple[str, ...] = ()
    env_configured: bool = False
    env_already_present: bool = False
    manifests: Tuple[str, ...] = ()
    brew_success: bool = True
    customizers: Tuple[CustomizerOutcome, ...] = ()
    ran_steps: Tuple[str, ...] = ()

    def with_(self, **changes: Any) -> "RunReport":
        return replace(self, **changes)

    @property
    def package_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.packages)

    @property
    def conflicts_found(self) -> bool:
        return bool(self.conflicted_packages)

    @property
    def work_mode(self) -> bool:
        return self.mode is Mode.WORK

    @property
    def degraded(self) -> bool:
        return (
            bool(self.failed_packages)
            or not self.brew_success
            or any(c.status == "failed" for c in self.customizers)
        )

    def tool_missing(self, tool: str) -> bool:
        return tool in self.missing_tools
