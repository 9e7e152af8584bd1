"""dotstrap: personal macOS machine provisioning on top of Homebrew and GNU Stow.

Core design goals:
- Idempotent steps (a second run is a no-op for symlink state)
- Dry-run is the same flow with every mutation replaced by a reported intent
- Best-effort: only tool bootstrap and an empty dotfiles root are fatal
- Centralized logging
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
