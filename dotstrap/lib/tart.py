from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from .command import _fmt_argv, run_cmd

logger = logging.getLogger(__name__)


def list_vms() -> List[str]:
    r = run_cmd(["tart", "list", "--quiet"], check=False)
    return [line.strip() for line in r.stdout.splitlines() if line.strip()]


def exists(name: str) -> bool:
    return name in list_vms()


def delete(name: str, *, dry_run: bool = False) -> None:
    run_cmd(["tart", "delete", name], dry_run=dry_run)


def clone(image: str, name: str, *, dry_run: bool = False) -> None:
    run_cmd(["tart", "clone", image, name], capture=False, dry_run=dry_run)


def run(name: str, *, no_graphics: bool = True, dry_run: bool = False) -> Optional[subprocess.Popen]:
    """Boot the VM in the background; `tart run` blocks for the VM's lifetime."""

    argv = ["tart", "run", name]
    if no_graphics:
        argv.append("--no-graphics")
    logger.info("CMD %s &", _fmt_argv(argv))
    if dry_run:
        return None
    return subprocess.Popen(argv, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def ip(name: str, *, wait: int = 0) -> Optional[str]:
    argv = ["tart", "ip", name]
    if wait:
        argv += ["--wait", str(wait)]
    r = run_cmd(argv, check=False)
    address = r.stdout.strip()
    return address if r.ok and address else None


def ssh_argv(user: str, address: str, command: Sequence[str] = ()) -> List[str]:
    return [
        "ssh",
        "-o",
        "StrictHostKeyChecking=no",
        "-o",
        "UserKnownHostsFile=/dev/null",
        f"{user}@{address}",
        *command,
    ]


def scp(user: str, address: str, src: str, dst: str, *, dry_run: bool = False) -> None:
    run_cmd(
        [
            "scp",
            "-r",
            "-o",
            "StrictHostKeyChecking=no",
            "-o",
            "UserKnownHostsFile=/dev/null",
            src,
            f"{user}@{address}:{dst}",
        ],
        capture=False,
        dry_run=dry_run,
    )
