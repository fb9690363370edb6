"""Sequential first-boot provisioning stages."""
from __future__ import annotations

import getpass
import logging
from typing import Callable, Iterable, List, Tuple

from . import config as config_io
from .host.base import HostSystem
from .model import ProvisionPaths, ProvisionSettings, StageResult
from .provisioners import disks as disk_stage
from .provisioners import handoff, network, remoting
from .util.logging import log

LOGGER = logging.getLogger(__name__)


class Provisioner:
    """Runs every stage in order; the first exception stops the run and propagates."""

    def __init__(self, host: HostSystem, paths: ProvisionPaths, *, skip: Iterable[str] = ()) -> None:
        self.host = host
        self.paths = paths
        self.skip = {name.lower() for name in skip}
        self.settings = ProvisionSettings()
        self.results: List[StageResult] = []

    def run(self) -> List[StageResult]:
        LOGGER.info("Provisioning started by %s from %s", _current_user(), self.paths.base_dir)
        for name, action in self._stages():
            if name in self.skip or name in self.settings.skip:
                LOGGER.info("Stage %s skipped", name)
                continue
            result = StageResult(name=name)
            self.results.append(result)
            LOGGER.info("Stage %s started", name)
            try:
                action()
            except Exception as exc:
                result.error = str(exc)
                raise
            result.completed = True
            LOGGER.info("Stage %s finished", name)
        LOGGER.info("Provisioning completed")
        return self.results

    def _stages(self) -> List[Tuple[str, Callable[[], None]]]:
        return [
            ("execution-policy", lambda: remoting.set_execution_policy(self.host)),
            ("remoting", lambda: remoting.enable_remoting(self.host)),
            ("credssp", lambda: remoting.enable_credssp(self.host)),
            ("config", self._load_config),
            ("disks", self._provision_disks),
            ("network", self._rename_adapters),
            ("post-script", self._run_post_script),
        ]

    def _load_config(self) -> None:
        self.settings = config_io.load_config(self.paths.config_file)

    def _provision_disks(self) -> None:
        offline = disk_stage.offline_disks(self.host)
        if not offline:
            LOGGER.info("No offline disk(s) found")
            return
        LOGGER.info("Processing %d disks", len(offline))
        letters = disk_stage.bring_online_and_partition(self.host, offline, self.settings.disk)
        if letters:
            LOGGER.info("Created data volumes: %s", ", ".join(f"{letter}:" for letter in letters))

    def _rename_adapters(self) -> None:
        renamed = network.rename_adapters(self.host)
        LOGGER.debug("Renamed %d adapter(s)", len(renamed))

    def _run_post_script(self) -> None:
        context = {
            "host": self.host,
            "config": self.settings.raw,
            "settings": self.settings,
            "paths": self.paths,
            "log": log,
            "LOGGER": logging.getLogger("winfirstboot.post_script"),
        }
        handoff.run_post_script(self.paths.post_script, context)


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"
