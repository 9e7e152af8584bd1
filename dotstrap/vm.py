"""Thin wrapper around `tart` for throwaway macOS VMs (`dotstrap-vm`).

Typical use is testing a dotfiles change on a clean machine:

    dotstrap-vm recreate sandbox --image ghcr.io/cirruslabs/macos-sonoma-base:latest
    dotstrap-vm push sandbox ~/dotfiles dotfiles
    dotstrap-vm ssh sandbox -- 'cd dotfiles && dotstrap --dry-run'
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
from typing import List, Optional

from .config import DEFAULT_CONFIG_NAME, ProvisionConfig, load_config
from .console import out
from .errors import ConfigError, DotstrapError
from .lib import tart
from .logging_utils import DEFAULT_LOG_PATH, configure_logging

logger = logging.getLogger(__name__)


def resolve_address(name: str, *, wait: int = 0) -> str:
    address = tart.ip(name, wait=wait)
    if not address:
        raise DotstrapError(f"Could not resolve an IP address for VM {name}")
    return address


def recreate(config: ProvisionConfig, name: str, image: Optional[str], *, dry_run: bool = False) -> Optional[str]:
    """Delete `name` if present, clone it fresh from `image`, boot it, wait for an IP."""

    image = image or config.vm_image
    if not image:
        raise ConfigError("No VM image given (use --image or set vm.image in the config)")

    if tart.exists(name):
        out.info(f"Deleting existing VM {name}")
        tart.delete(name, dry_run=dry_run)

    out.info(f"Cloning {image} -> {name}")
    tart.clone(image, name, dry_run=dry_run)

    out.info(f"Starting {name}")
    tart.run(name, no_graphics=config.vm_no_graphics, dry_run=dry_run)
    if dry_run:
        return None

    address = resolve_address(name, wait=config.vm_ip_wait)
    out.success(f"{name} is up at {address}")
    return address


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dotstrap-vm", description="Manage throwaway tart VMs.")
    p.add_argument("--config", default=DEFAULT_CONFIG_NAME)
    p.add_argument("--log", default=DEFAULT_LOG_PATH)
    p.add_argument("--dry-run", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    r = sub.add_parser("recreate", help="Delete, clone and boot a VM")
    r.add_argument("name")
    r.add_argument("--image", default=None)

    i = sub.add_parser("ip", help="Print a VM's IP address")
    i.add_argument("name")
    i.add_argument("--wait", type=int, default=0)

    s = sub.add_parser("ssh", help="Open a shell (or run a command) in a VM")
    s.add_argument("name")
    s.add_argument("remote", nargs=argparse.REMAINDER)

    c = sub.add_parser("push", help="Copy a file or directory into a VM")
    c.add_argument("name")
    c.add_argument("src")
    c.add_argument("dst")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(log_path=None if args.dry_run else os.path.expanduser(args.log))
    dry_run = bool(args.dry_run)

    try:
        config = load_config(args.config)
        if args.command == "recreate":
            recreate(config, args.name, args.image, dry_run=dry_run)
        elif args.command == "ip":
            out.line(resolve_address(args.name, wait=args.wait))
        elif args.command == "ssh":
            remote = [a for a in args.remote if a != "--"]
            argv_ssh = tart.ssh_argv(config.vm_user, resolve_address(args.name), remote)
            if dry_run:
                out.dry_run(f"Would run: {' '.join(argv_ssh)}")
                return 0
            # Interactive: hand the terminal over to ssh.
            return subprocess.call(argv_ssh)
        elif args.command == "push":
            tart.scp(config.vm_user, resolve_address(args.name), args.src, args.dst, dry_run=dry_run)
            out.success(f"Copied {args.src} to {args.name}:{args.dst}")
    except DotstrapError as e:
        logger.exception("dotstrap-vm %s failed", args.command)
        out.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
