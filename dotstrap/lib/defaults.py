from __future__ import annotations

import logging
from typing import List, Optional, Union

from .command import run_cmd

logger = logging.getLogger(__name__)

DefaultsValue = Union[str, int, bool]


def type_flag(value: DefaultsValue) -> str:
    # bool is a subclass of int, so it has to be checked first.
    if isinstance(value, bool):
        return "-bool"
    if isinstance(value, int):
        return "-int"
    if isinstance(value, str):
        return "-string"
    raise TypeError(f"unsupported defaults value type: {type(value).__name__}")


def render(value: DefaultsValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def read_back(value: DefaultsValue) -> str:
    """How `defaults read` prints a value written with write()."""

    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def defaults_read(domain: str, key: str) -> Optional[str]:
    r = run_cmd(["defaults", "read", domain, key], check=False)
    if not r.ok:
        return None
    return r.stdout.strip()


def write_argv(domain: str, key: str, value: DefaultsValue) -> List[str]:
    return ["defaults", "write", domain, key, type_flag(value), render(value)]


def defaults_write(domain: str, key: str, value: DefaultsValue, *, dry_run: bool = False) -> None:
    run_cmd(write_argv(domain, key, value), dry_run=dry_run)


def defaults_delete(domain: str, key: str, *, dry_run: bool = False) -> bool:
    """Delete a key; a key that is already absent is not an error."""

    r = run_cmd(["defaults", "delete", domain, key], check=False, dry_run=dry_run)
    if not r.ok:
        logger.info("defaults delete %s %s: key not present", domain, key)
    return r.ok
