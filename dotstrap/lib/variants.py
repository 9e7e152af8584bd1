from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..run_state import Mode, VariantOutcome

logger = logging.getLogger(__name__)


def variant_path(canonical: Path, mode: Mode) -> Path:
    return canonical.with_name(f"{canonical.name}-{mode.suffix}")


def resolve_variant(canonical: Path, mode: Mode) -> Optional[Path]:
    """Which file backs `canonical` in `mode`: the suffixed one, else the plain one."""

    suffixed = variant_path(canonical, mode)
    if suffixed.is_file():
        return suffixed
    if canonical.is_file():
        return canonical
    return None


def _replace_symlink(link: Path, target_name: str) -> None:
    tmp = link.with_name(f".{link.name}.dotstrap-tmp")
    if tmp.is_symlink() or tmp.exists():
        tmp.unlink()
    os.symlink(target_name, tmp)
    os.replace(tmp, link)


def activate_variant(canonical: Path, mode: Mode, *, dry_run: bool = False) -> VariantOutcome:
    """Point `canonical` at its mode-suffixed file.

    Stow links files by name, so the alias has to exist on disk. It is a
    relative symlink inside the package and is swapped atomically. A regular
    file at the alias name must be moved aside by the caller first; it is
    never overwritten here.
    """

    base = canonical.name
    suffixed = variant_path(canonical, mode)

    if not suffixed.is_file():
        if canonical.is_file():
            return VariantOutcome(base=base, status="default", target=str(canonical))
        return VariantOutcome(base=base, status="missing")

    if dry_run:
        return VariantOutcome(base=base, status="would_activate", target=suffixed.name)

    if canonical.exists() and not canonical.is_symlink():
        raise FileExistsError(f"{canonical} is a regular file; move it aside before linking {suffixed.name}")

    if canonical.is_symlink() and os.readlink(canonical) == suffixed.name:
        logger.info("%s already points at %s", canonical, suffixed.name)
    else:
        _replace_symlink(canonical, suffixed.name)
        logger.info("Linked %s -> %s", canonical, suffixed.name)
    return VariantOutcome(base=base, status="activated", target=suffixed.name)


def shadows_variant(canonical: Path, mode: Mode) -> bool:
    """True when a regular file sits where the alias for `mode` has to go."""

    return (
        variant_path(canonical, mode).is_file()
        and canonical.exists()
        and not canonical.is_symlink()
    )
