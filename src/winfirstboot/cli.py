"""Command-line interface for first-boot provisioning."""
from __future__ import annotations

import argparse
import logging
import platform
import sys
from pathlib import Path
from typing import Iterable, Optional

from .host.base import HostSystem
from .host.windows import WindowsHost
from .model import STAGES, ProvisionPaths
from .orchestrator import Provisioner
from .util.logging import LEVELS, setup_logging

LOGGER = logging.getLogger(__name__)


def _default_base_dir() -> Path:
    script = Path(sys.argv[0]) if sys.argv and sys.argv[0] else Path.cwd()
    return script.resolve().parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="winfirstboot",
        description="Prepare a freshly booted Windows host: remoting, data disks and adapter names",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Directory holding config.json, bootstrap.log and post_bootstrap.py (default: the script's directory)",
    )
    parser.add_argument("--config", type=Path, help="Configuration file (default: <base-dir>/config.json)")
    parser.add_argument("--log-file", type=Path, help="Log file (default: <base-dir>/bootstrap.log)")
    parser.add_argument("--post-script", type=Path, help="Script run after provisioning (default: <base-dir>/post_bootstrap.py)")
    parser.add_argument(
        "--skip",
        action="append",
        choices=STAGES,
        default=[],
        help="Skip a stage; may be given more than once",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(LEVELS),
        help="Lowest level written to the console and log file (default: TRACE)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the stages that would run without touching the system",
    )
    return parser


def resolve_paths(args: argparse.Namespace) -> ProvisionPaths:
    paths = ProvisionPaths.from_base_dir(args.base_dir or _default_base_dir())
    if args.config is not None:
        paths.config_file = args.config
    if args.log_file is not None:
        paths.log_file = args.log_file
    if args.post_script is not None:
        paths.post_script = args.post_script
    return paths


def run_provisioning(host: HostSystem, paths: ProvisionPaths, skip: Iterable[str] = ()) -> int:
    try:
        Provisioner(host, paths, skip=skip).run()
    except Exception as exc:  # noqa: BLE001
        LOGGER.error("Provisioning failed: %s", exc)
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        paths = resolve_paths(args)
        setup_logging(paths.log_file, args.log_level)
    except Exception as exc:  # noqa: BLE001
        setup_logging(None, args.log_level)
        LOGGER.error("Provisioning failed: %s", exc)
        return 1

    LOGGER.debug("Parsed arguments: %s", args)

    if args.dry_run:
        stages = [stage for stage in STAGES if stage not in args.skip]
        LOGGER.info("Dry run: would run stages %s with base_dir=%s", ", ".join(stages), paths.base_dir)
        return 0

    if platform.system().lower() != "windows":
        LOGGER.error("Provisioning failed: unsupported platform %s", platform.system())
        return 1

    return run_provisioning(WindowsHost(), paths, skip=args.skip)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
