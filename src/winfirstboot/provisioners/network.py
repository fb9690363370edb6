"""Rename network adapters to the names the hypervisor reports for them."""
from __future__ import annotations

import logging
from typing import List

from ..host.base import HostSystem

LOGGER = logging.getLogger(__name__)


def rename_adapters(host: HostSystem) -> List[str]:
    renamed: List[str] = []
    for adapter in host.list_net_adapters():
        suggested = adapter.hypervisor_suggested_name
        if not suggested:
            LOGGER.info("Adapter '%s' has no hypervisor-assigned name, skipping", adapter.current_name)
            continue
        if not adapter.needs_rename:
            LOGGER.info("Adapter '%s' already matches its hypervisor-assigned name, skipping", adapter.current_name)
            continue
        LOGGER.info("Renaming adapter '%s' to '%s'", adapter.current_name, suggested)
        host.rename_net_adapter(adapter.current_name, suggested)
        renamed.append(suggested)
    return renamed
