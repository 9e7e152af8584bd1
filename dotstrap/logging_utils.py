from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = os.path.expanduser("~/Library/Logs/dotstrap.log")


def configure_logging(
    log_path: Optional[str] = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = False,
) -> Optional[str]:
    """Configure logging.

    Every command and decision goes to the log file; the operator-facing
    status lines are printed separately by dotstrap.console.

    Notes:
    - log_path=None disables the file handler entirely. Dry runs use this
      so that nothing on disk changes.
    - If the requested path is not writable we fall back to a file in the
      current working directory.
    - also_console mirrors the raw log records to stderr (debugging aid).

    Returns the actual file path being used, or None.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_dotstrap_configured", False):
        return getattr(logger, "_dotstrap_log_path", log_path)

    chosen_path: Optional[str] = None
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    if log_path:
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            chosen_path = log_path
        except OSError:
            # Fall back to a writable location.
            fallback = str(Path.cwd() / "dotstrap.log")
            file_handler = logging.FileHandler(fallback)
            chosen_path = fallback
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    if not handlers:
        handlers.append(logging.NullHandler())

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_dotstrap_configured", True)
    setattr(logger, "_dotstrap_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
