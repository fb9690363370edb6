"""Exception types raised while provisioning a host."""
from __future__ import annotations

from typing import Optional, Sequence


class ProvisioningError(RuntimeError):
    """Base class for every failure the top-level boundary reports."""


class HostCommandError(ProvisioningError):
    def __init__(self, command: Sequence[str], returncode: int, stderr: Optional[str] = None) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"Command exited with code {returncode}{detail}")


class ConfigError(ProvisioningError):
    pass
