from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


def has_marker(path: Path, marker: str) -> bool:
    if not path.is_file():
        return False
    return marker in path.read_text(encoding="utf-8", errors="ignore")


def append_once(path: Path, marker: str, lines: Sequence[str]) -> bool:
    """Append `lines` to a shell startup file unless `marker` is already in it.

    The file is only ever appended to. Returns True when lines were
    appended.
    """

    if has_marker(path, marker):
        logger.info("%s already contains %s", path, marker)
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write("\n" + "\n".join(lines) + "\n")
    logger.info("Appended %s block to %s", marker, path)
    return True
