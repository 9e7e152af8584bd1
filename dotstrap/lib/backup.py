from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


def backup_dir_path(home: Path, prefix: str, now: Optional[datetime] = None) -> Path:
    """Fresh `<home>/<prefix>YYYYmmdd_HHMMSS`, suffixed if that name is taken."""

    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    candidate = home / f"{prefix}{stamp}"
    n = 1
    while candidate.exists():
        candidate = home / f"{prefix}{stamp}_{n}"
        n += 1
    return candidate


def create_backup_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=False)
    logger.info("Created backup directory %s", path)
    return path


def is_backupable(home: Path, rel: str) -> bool:
    p = home / rel
    return p.is_file() and not p.is_symlink()


def move_into_backup(home: Path, rel: str, backup_dir: Path) -> Path:
    """Move `home/rel` under `backup_dir`, keeping its relative path."""

    src = home / rel
    dst = backup_dir / rel
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(src), str(dst))
    logger.info("Backed up %s -> %s", src, dst)
    return dst


def ensure_backup_dir(current: Optional[Path], home: Path, prefix: str, *, dry_run: bool = False) -> Tuple[Path, bool]:
    """Return the run's backup directory and whether it was just chosen.

    The directory is shared by every step of a run and only created on
    first use. In a dry run the path is chosen but never created.
    """

    if current is not None:
        return current, False
    path = backup_dir_path(home, prefix)
    if not dry_run:
        create_backup_dir(path)
    return path, True
