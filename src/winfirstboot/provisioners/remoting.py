"""Execution policy, WinRM listener and CredSSP settings.

These settings accept unencrypted traffic from any peer and let the client
delegate credentials to any host. They suit disposable lab images only.
"""
from __future__ import annotations

import logging

from ..host.base import HostSystem

LOGGER = logging.getLogger(__name__)

EXECUTION_POLICY = "Unrestricted"
WINRM_SERVICE = "WinRM"
WSMAN_SETTINGS = (
    ("WSMan:\\localhost\\Service\\AllowUnencrypted", "true"),
    ("WSMan:\\localhost\\Client\\TrustedHosts", "*"),
)


def set_execution_policy(host: HostSystem, policy: str = EXECUTION_POLICY) -> None:
    LOGGER.info("Setting execution policy to %s", policy)
    host.set_execution_policy(policy)


def enable_remoting(host: HostSystem) -> None:
    LOGGER.info("Enabling PowerShell remoting")
    host.enable_remoting()
    for path, value in WSMAN_SETTINGS:
        LOGGER.info("Setting %s to %s", path, value)
        host.set_wsman_value(path, value)
    LOGGER.info("Restarting %s service", WINRM_SERVICE)
    host.restart_service(WINRM_SERVICE)


def enable_credssp(host: HostSystem, delegate_computer: str = "*") -> None:
    LOGGER.info("Enabling CredSSP server role")
    host.enable_credssp("Server")
    LOGGER.info("Enabling CredSSP client role delegating to %s", delegate_computer)
    host.enable_credssp("Client", delegate_computer=delegate_computer)
