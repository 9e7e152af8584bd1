from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from ..errors import NoPackagesError
from ..run_state import Package

logger = logging.getLogger(__name__)

EXPECTED_LAYOUT = """\
Example structure:
  dotfiles/
  ├── shell/          # Package for shell configs
  │   ├── dot-zshrc
  │   └── dot-gitconfig
  ├── homebrew/       # Package for homebrew
  │   └── dot-Brewfile
  └── vscode/         # Package for VS Code
      └── Library/Application Support/Code/User/
          ├── settings.json
          └── keybindings.json

Then run: cd dotfiles && stow --dotfiles -t $HOME shell homebrew vscode"""


def discover_packages(root: Path, *, exclude: Iterable[str] = ()) -> List[Package]:
    """Immediate non-dot subdirectories of `root`, sorted by name.

    Sorting makes the order (and so the manifest fallback search) the same on
    every filesystem.
    """

    skip = set(exclude)
    if not root.is_dir():
        raise NoPackagesError(f"Dotfiles root is not a directory: {root}")

    found = [
        Package(name=p.name, path=p)
        for p in root.iterdir()
        if p.is_dir() and not p.name.startswith(".") and p.name not in skip
    ]
    found.sort(key=lambda p: p.name)

    if not found:
        raise NoPackagesError(
            "No stow packages found!\n"
            "This tool requires a properly structured stow repository.\n"
            "Please restructure your dotfiles into packages.\n\n" + EXPECTED_LAYOUT
        )

    logger.info("Discovered packages in %s: %s", root, [p.name for p in found])
    return found
