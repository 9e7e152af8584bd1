"""Color-coded operator status lines.

Every line is also mirrored into the log so the file holds the same story the
operator saw on screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

logger = logging.getLogger(__name__)


@dataclass
class StatusPrinter:
    """Prints `[TAG] message` lines.

    With a fixed `label` every level shares that tag and only the color
    changes (the dock customizer prints `[DOCK]` throughout).
    """

    label: Optional[str] = None
    console: Console = field(default_factory=Console)

    def _emit(self, tag: str, style: str, message: str, level: int) -> None:
        shown = self.label or tag
        self.console.print(f"[{style}]\\[{shown}][/{style}] {escape(message)}", highlight=False, soft_wrap=True)
        logger.log(level, "[%s] %s", tag, message)

    def info(self, message: str) -> None:
        self._emit("INFO", "blue", message, logging.INFO)

    def success(self, message: str) -> None:
        self._emit("SUCCESS", "green", message, logging.INFO)

    def warning(self, message: str) -> None:
        self._emit("WARNING", "bold yellow", message, logging.WARNING)

    def error(self, message: str) -> None:
        self._emit("ERROR", "red", message, logging.ERROR)

    def dry_run(self, message: str) -> None:
        self._emit("DRY-RUN", "bold yellow", message, logging.INFO)

    def line(self, message: str = "") -> None:
        self.console.print(escape(message), highlight=False, soft_wrap=True)

    def confirm(self, question: str) -> bool:
        """Yes/no prompt; Enter and end-of-input both mean no."""

        try:
            answer = Confirm.ask(question, default=False, console=self.console)
        except EOFError:
            answer = False
        logger.info("Prompt %r answered %s", question, "yes" if answer else "no")
        return bool(answer)


out = StatusPrinter()
